"""Models for learning progress and quiz statistics."""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DAYS_IN_WEEK = 7


def empty_week() -> List[int]:
    return [0] * DAYS_IN_WEEK


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class LearnedWordEntry:
    """Learning state of a single word, timestamps in epoch milliseconds."""
    learned_at: int
    last_reviewed: int
    times_reviewed_correctly: int = 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "learned_at": self.learned_at,
            "last_reviewed": self.last_reviewed,
            "times_reviewed_correctly": self.times_reviewed_correctly,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["LearnedWordEntry"]:
        """Build an entry from stored JSON, or None if it has no learned timestamp."""
        if not isinstance(data, dict):
            return None
        learned_at = _as_int(data.get("learned_at"), default=-1)
        if learned_at < 0:
            return None
        # Entries written without a review timestamp count as reviewed when learned
        last_reviewed = _as_int(data.get("last_reviewed"), default=learned_at)
        return cls(
            learned_at=learned_at,
            last_reviewed=last_reviewed,
            times_reviewed_correctly=max(0, _as_int(data.get("times_reviewed_correctly"))),
        )


@dataclass
class LearningStats:
    """Aggregate counts over the learned-words mapping."""
    total_learned: int = 0
    recently_learned: int = 0
    needs_review: int = 0


@dataclass
class QuizStatistics:
    """Cumulative quiz performance."""
    quizzes_taken: int = 0
    total_score_sum: int = 0
    average_score: int = 0
    streak: int = 0
    weekly_progress: List[int] = field(default_factory=empty_week)
    # Kept under its own storage key, not in to_dict()
    last_quiz_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quizzes_taken": self.quizzes_taken,
            "total_score_sum": self.total_score_sum,
            "average_score": self.average_score,
            "streak": self.streak,
            "weekly_progress": list(self.weekly_progress),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizStatistics":
        """Build statistics from stored JSON, repairing missing or damaged fields."""
        if not isinstance(data, dict):
            return cls()
        weekly = data.get("weekly_progress")
        if not isinstance(weekly, list) or len(weekly) != DAYS_IN_WEEK:
            weekly = empty_week()
        stats = cls(
            quizzes_taken=max(0, _as_int(data.get("quizzes_taken"))),
            total_score_sum=max(0, _as_int(data.get("total_score_sum"))),
            streak=max(0, _as_int(data.get("streak"))),
            weekly_progress=[_as_int(value) for value in weekly],
        )
        stats.average_score = stats.compute_average()
        return stats

    def compute_average(self) -> int:
        if self.quizzes_taken == 0:
            return 0
        return round_half_up(self.total_score_sum / self.quizzes_taken)


@dataclass
class ProgressSummary:
    """Merged learning and quiz figures for the profile view."""
    words_learned: int = 0
    recently_learned: int = 0
    needs_review: int = 0
    quizzes_taken: int = 0
    average_score: int = 0
    streak: int = 0
    weekly_progress: List[int] = field(default_factory=empty_week)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, unlike built-in round()."""
    return math.floor(value + 0.5)
