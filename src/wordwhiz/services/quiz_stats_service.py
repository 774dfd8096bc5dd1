"""Quiz statistics service: scores, averages, streaks and the weekly chart."""
import logging
from datetime import date, datetime
from typing import Callable, Optional

from wordwhiz.config import settings
from wordwhiz.models.progress_models import QuizStatistics, round_half_up
from wordwhiz.services.storage import JsonStore, KeyValueStore
from wordwhiz import monitoring

logger = logging.getLogger(__name__)


def weekday_index(day: date) -> int:
    """Day-of-week index with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def parse_quiz_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(f"Ignoring unreadable last quiz date {value!r}")
        return None


class QuizStatsService(JsonStore):
    """Service keeping cumulative quiz statistics.

    Statistics and the last quiz date live under separate keys. Each call
    reads, updates and writes them back without locking, so overlapping
    record() calls can lose one of the results.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = datetime.now,
        stats_key: Optional[str] = None,
        last_date_key: Optional[str] = None,
    ):
        super().__init__(store)
        self.clock = clock
        self.stats_key = stats_key or settings.storage.quiz_stats_key
        self.last_date_key = last_date_key or settings.storage.last_quiz_date_key

    async def get_stats(self) -> QuizStatistics:
        """Get quiz statistics, zeroed if nothing was recorded yet."""
        raw = await self._read_json(self.stats_key, None)
        stats = QuizStatistics.from_dict(raw) if raw is not None else QuizStatistics()
        last_date = parse_quiz_date(await self._read_text(self.last_date_key))
        stats.last_quiz_date = last_date.isoformat() if last_date else None
        return stats

    async def get_streak(self) -> int:
        """Get the current daily streak."""
        return (await self.get_stats()).streak

    async def record(self, score: int, total_questions: int) -> QuizStatistics:
        """Record a finished quiz and return the updated statistics."""
        if total_questions <= 0:
            raise ValueError("total_questions must be positive")
        if score < 0 or score > total_questions:
            raise ValueError(f"score must be between 0 and {total_questions}")

        stats = await self.get_stats()
        today = self.clock().date()
        percentage = round_half_up(100 * score / total_questions)

        last_date = parse_quiz_date(stats.last_quiz_date)
        if last_date != today:
            if last_date is not None and (today - last_date).days == 1:
                stats.streak += 1
            else:
                stats.streak = 1
            stats.last_quiz_date = today.isoformat()
        elif stats.streak == 0:
            # A quiz was already taken today but the statistics were lost
            stats.streak = 1

        stats.quizzes_taken += 1
        stats.total_score_sum += percentage
        stats.average_score = stats.compute_average()
        stats.weekly_progress[weekday_index(today)] = percentage

        # The date marker goes last so a failed stats write leaves the old state intact
        if await self._write_json(self.stats_key, stats.to_dict()) and last_date != today:
            await self._write_text(self.last_date_key, stats.last_quiz_date)
        monitoring.quiz_results_recorded.inc()
        monitoring.quiz_score.observe(percentage)
        logger.info(
            f"Quiz recorded: {score}/{total_questions} ({percentage}%), "
            f"average {stats.average_score}%, streak {stats.streak}"
        )
        return stats

    async def reset(self) -> QuizStatistics:
        """Reset statistics to the zero state and forget the last quiz date."""
        stats = QuizStatistics()
        await self._write_json(self.stats_key, stats.to_dict())
        await self._remove(self.last_date_key)
        logger.info("Quiz statistics reset")
        return stats
