"""Learning progress service for tracking learned words."""
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from wordwhiz.config import settings
from wordwhiz.errors import InvalidWordInput
from wordwhiz.models.progress_models import LearnedWordEntry, LearningStats
from wordwhiz.services.storage import JsonStore, KeyValueStore
from wordwhiz.services.word_service import validate_word
from wordwhiz import monitoring

logger = logging.getLogger(__name__)


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class LearningService(JsonStore):
    """Service tracking which words were learned and when they were last reviewed.

    The whole word mapping lives under one key and every operation reads it,
    changes it and writes it back. There is no lock: two overlapping calls
    can race and the later write wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = datetime.now,
        key: Optional[str] = None,
    ):
        super().__init__(store)
        self.clock = clock
        self.key = key or settings.storage.learned_words_key

    async def get_progress(self) -> Dict[str, LearnedWordEntry]:
        """Get all learned words with their entries."""
        raw = await self._read_json(self.key, {})
        if not isinstance(raw, dict):
            logger.error(f"Learned words under {self.key} are not a mapping, ignoring them")
            return {}
        progress = {}
        for word, data in raw.items():
            entry = LearnedWordEntry.from_dict(data)
            if entry is None:
                logger.warning(f"Skipping damaged learned-word entry for {word!r}")
                continue
            progress[word] = entry
        return progress

    async def _save_progress(self, progress: Dict[str, LearnedWordEntry]) -> None:
        await self._write_json(
            self.key, {word: entry.to_dict() for word, entry in progress.items()}
        )

    async def mark_learned(self, word: str) -> Optional[LearnedWordEntry]:
        """Mark a word as learned, or count another correct review if it already is.

        Invalid input is logged and ignored; None is returned and nothing is stored.
        """
        try:
            word = validate_word(word)
        except InvalidWordInput as e:
            logger.warning(f"Not marking {word!r} as learned: {e}")
            monitoring.rejected_words.labels(operation="mark_learned").inc()
            return None
        now = to_millis(self.clock())
        progress = await self.get_progress()

        entry = progress.get(word)
        if entry is None:
            entry = LearnedWordEntry(learned_at=now, last_reviewed=now, times_reviewed_correctly=1)
            logger.info(f"Word {word!r} marked as learned")
        else:
            entry.last_reviewed = now
            entry.times_reviewed_correctly += 1
            logger.debug(f"Word {word!r} reviewed {entry.times_reviewed_correctly} times")
        progress[word] = entry

        await self._save_progress(progress)
        monitoring.words_marked_learned.inc()
        return entry

    async def is_learned(self, word: str) -> bool:
        """Check if a word is learned."""
        if not isinstance(word, str):
            return False
        progress = await self.get_progress()
        return word.strip().lower() in progress

    async def get_stats(self) -> LearningStats:
        """Get learning statistics relative to the current time."""
        progress = await self.get_progress()
        now = to_millis(self.clock())
        recent_window = to_millis_delta(timedelta(days=settings.learning.recent_window_days))
        review_after = to_millis_delta(timedelta(days=settings.learning.review_after_days))
        return LearningStats(
            total_learned=len(progress),
            recently_learned=sum(
                1 for entry in progress.values() if now - entry.learned_at < recent_window
            ),
            needs_review=sum(
                1 for entry in progress.values() if now - entry.last_reviewed > review_after
            ),
        )

    async def clear(self) -> None:
        """Forget all learned words."""
        await self._remove(self.key)
        logger.info("Learned words cleared")


def to_millis_delta(delta: timedelta) -> int:
    return int(delta.total_seconds() * 1000)
