"""Tests for the key-value storage."""
import pytest
from sqlalchemy.exc import OperationalError

from wordwhiz.errors import StorageAccessFailed
from wordwhiz.models.models import KeyValueEntry
from wordwhiz.services.storage import JsonStore, SqlKeyValueStore


@pytest.mark.asyncio
async def test_get_missing_key(store: SqlKeyValueStore) -> None:
    assert await store.get("@missing") is None


@pytest.mark.asyncio
async def test_set_get_overwrite(store: SqlKeyValueStore, session_factory) -> None:
    await store.set("@quiz_stats", "first")
    await store.set("@quiz_stats", "second")
    assert await store.get("@quiz_stats") == "second"

    with session_factory() as db:
        assert db.query(KeyValueEntry).count() == 1


@pytest.mark.asyncio
async def test_remove(store: SqlKeyValueStore) -> None:
    await store.set("@last_quiz_date", "2024-03-13")
    await store.remove("@last_quiz_date")
    assert await store.get("@last_quiz_date") is None
    # Removing a missing key is not an error
    await store.remove("@last_quiz_date")


@pytest.mark.asyncio
async def test_database_errors_are_wrapped(mocker) -> None:
    session = mocker.MagicMock()
    session.__enter__.return_value.query.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
    store = SqlKeyValueStore(lambda: session)

    with pytest.raises(StorageAccessFailed):
        await store.get("@learned_words")
    with pytest.raises(StorageAccessFailed):
        await store.set("@learned_words", "{}")
    with pytest.raises(StorageAccessFailed):
        await store.remove("@learned_words")


@pytest.mark.asyncio
async def test_json_store_round_trip(store: SqlKeyValueStore) -> None:
    json_store = JsonStore(store)
    assert await json_store._write_json("@doc", {"b": 1, "a": [1, 2]})
    assert await store.get("@doc") == '{"a": [1, 2], "b": 1}'
    assert await json_store._read_json("@doc", None) == {"a": [1, 2], "b": 1}
    assert await json_store._read_json("@other", {}) == {}
