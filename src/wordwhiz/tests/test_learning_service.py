"""Tests for learning service."""
import json

import pytest

from conftest import FakeClock
from wordwhiz.config import settings
from wordwhiz.errors import StorageAccessFailed
from wordwhiz.models.progress_models import LearningStats
from wordwhiz.services.learning_service import LearningService, to_millis
from wordwhiz.services.storage import SqlKeyValueStore


@pytest.fixture
def learning_service(store: SqlKeyValueStore, clock: FakeClock) -> LearningService:
    """Create a learning service instance."""
    return LearningService(store, clock=clock)


@pytest.mark.asyncio
async def test_mark_learned_twice(learning_service: LearningService, clock: FakeClock) -> None:
    """Test that a second mark counts a review without moving the learned time."""
    first = await learning_service.mark_learned("gratitude")
    learned_at = to_millis(clock())
    assert first.times_reviewed_correctly == 1
    assert first.learned_at == learned_at
    assert first.last_reviewed == learned_at

    clock.advance(hours=2)
    second = await learning_service.mark_learned("gratitude")
    assert second.times_reviewed_correctly == 2
    assert second.learned_at == learned_at
    assert second.last_reviewed == to_millis(clock())

    progress = await learning_service.get_progress()
    assert progress["gratitude"] == second


@pytest.mark.asyncio
async def test_is_learned(learning_service: LearningService) -> None:
    assert not await learning_service.is_learned("keen")
    await learning_service.mark_learned("Keen ")
    assert await learning_service.is_learned("keen")
    assert await learning_service.is_learned("KEEN")
    assert not await learning_service.is_learned(None)


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["123", "", "well-known", "not a word!"])
async def test_mark_learned_ignores_invalid_word(
    learning_service: LearningService, store: SqlKeyValueStore, raw: str
) -> None:
    """Test that invalid input is dropped without an error or a write."""
    await learning_service.mark_learned("keen")
    stored = await store.get(settings.storage.learned_words_key)

    assert await learning_service.mark_learned(raw) is None

    assert await store.get(settings.storage.learned_words_key) == stored
    assert list(await learning_service.get_progress()) == ["keen"]


@pytest.mark.asyncio
async def test_get_stats_empty(learning_service: LearningService) -> None:
    assert await learning_service.get_stats() == LearningStats()


@pytest.mark.asyncio
async def test_get_stats_windows(learning_service: LearningService, clock: FakeClock) -> None:
    await learning_service.mark_learned("candid")  # learned 10 days ago, reviewed 5 days ago
    clock.advance(days=5)
    await learning_service.mark_learned("candid")
    await learning_service.mark_learned("humble")  # learned 5 days ago, never reviewed since
    clock.advance(days=3, hours=1)
    await learning_service.mark_learned("keen")  # learned two days ago
    clock.advance(days=1, hours=23)

    stats = await learning_service.get_stats()
    assert stats.total_learned == 3
    assert stats.recently_learned == 2
    assert stats.needs_review == 2


@pytest.mark.asyncio
async def test_entries_without_review_time(learning_service: LearningService, store: SqlKeyValueStore, clock: FakeClock) -> None:
    now = to_millis(clock())
    await store.set(settings.storage.learned_words_key, json.dumps({
        "keen": {"learned_at": now},
        "broken": {"last_reviewed": now},
        "junk": "yes",
    }))

    progress = await learning_service.get_progress()
    assert list(progress) == ["keen"]
    assert progress["keen"].last_reviewed == now
    assert progress["keen"].times_reviewed_correctly == 0


@pytest.mark.asyncio
async def test_clear(learning_service: LearningService) -> None:
    for word in ("keen", "humble", "candid"):
        await learning_service.mark_learned(word)
    assert (await learning_service.get_stats()).total_learned == 3

    await learning_service.clear()
    assert await learning_service.get_progress() == {}


@pytest.mark.asyncio
async def test_undecodable_mapping_is_ignored(learning_service: LearningService, store: SqlKeyValueStore) -> None:
    await store.set(settings.storage.learned_words_key, "{not json")
    assert await learning_service.get_progress() == {}
    entry = await learning_service.mark_learned("keen")
    assert entry.times_reviewed_correctly == 1


@pytest.mark.asyncio
async def test_storage_failure_is_not_raised(clock: FakeClock, mocker) -> None:
    broken_store = mocker.AsyncMock()
    broken_store.get.side_effect = StorageAccessFailed("database is locked")
    broken_store.set.side_effect = StorageAccessFailed("database is locked")
    service = LearningService(broken_store, clock=clock)

    entry = await service.mark_learned("keen")
    assert entry.times_reviewed_correctly == 1
    assert not await service.is_learned("keen")
    assert await service.get_stats() == LearningStats()
