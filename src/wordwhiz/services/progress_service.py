"""Merges learning progress and quiz statistics for the profile view."""
from wordwhiz.models.progress_models import ProgressSummary
from wordwhiz.services.learning_service import LearningService
from wordwhiz.services.quiz_stats_service import QuizStatsService


class ProgressService:
    """Service building the progress summary shown to the user."""

    def __init__(self, learning_service: LearningService, quiz_stats_service: QuizStatsService):
        self.learning_service = learning_service
        self.quiz_stats_service = quiz_stats_service

    async def get_summary(self) -> ProgressSummary:
        learning = await self.learning_service.get_stats()
        quiz = await self.quiz_stats_service.get_stats()
        return ProgressSummary(
            words_learned=learning.total_learned,
            recently_learned=learning.recently_learned,
            needs_review=learning.needs_review,
            quizzes_taken=quiz.quizzes_taken,
            average_score=quiz.average_score,
            streak=quiz.streak,
            weekly_progress=list(quiz.weekly_progress),
        )
