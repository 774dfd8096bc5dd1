"""Generation of multiple-choice definition quizzes."""
import logging
import random
from typing import Any, List, Optional, Set

from wordwhiz.config import settings
from wordwhiz.errors import QuizGenerationExhausted
from wordwhiz.models.word_models import Difficulty, QuizQuestion, WordRecord
from wordwhiz.services.word_service import WordService
from wordwhiz import monitoring

logger = logging.getLogger(__name__)


class QuizGenerator:
    """Builds quizzes from random words, using other words' definitions as distractors."""

    def __init__(
        self,
        word_service: WordService,
        rng: Optional[random.Random] = None,
        max_attempts_per_question: Optional[int] = None,
        options_per_question: Optional[int] = None,
    ):
        self.word_service = word_service
        self.rng = rng or random.Random()
        self.max_attempts_per_question = max_attempts_per_question or settings.quiz.max_attempts_per_question
        self.options_per_question = options_per_question or settings.quiz.options_per_question

    async def generate(self, count: Optional[int] = None, tier: Any = None) -> List[QuizQuestion]:
        """Generate count questions, no two of them about the same word.

        Raises QuizGenerationExhausted when a question cannot be completed
        within the attempt budget, and WordFetchFailed when the word source
        gives up.
        """
        if count is None:
            count = settings.quiz.questions_per_quiz
        if count < 0:
            raise ValueError("Question count cannot be negative")
        tier = Difficulty.parse(tier if tier is not None else settings.quiz.default_tier)

        logger.info(f"Generating quiz with {count} questions from {tier.value} words")
        used_words: Set[str] = set()
        questions = []
        while len(questions) < count:
            question = await self._build_question(used_words, tier, len(questions) + 1)
            questions.append(question)
            used_words.add(question.word)

        monitoring.quizzes_generated.inc()
        return questions

    async def _build_question(self, used_words: Set[str], tier: Difficulty, number: int) -> QuizQuestion:
        attempts = 0

        def spend_attempt() -> None:
            nonlocal attempts
            if attempts >= self.max_attempts_per_question:
                monitoring.quiz_generation_exhausted.inc()
                raise QuizGenerationExhausted(
                    f"Question {number}: no valid question after {attempts} draws"
                )
            attempts += 1

        record: Optional[WordRecord] = None
        while record is None:
            spend_attempt()
            candidate = await self.word_service.fetch_random(tier)
            if candidate.word in used_words or not candidate.primary_definition:
                logger.debug(f"Skipping {candidate.word!r} as quiz word")
                continue
            record = candidate

        correct_answer = record.primary_definition
        distractors: List[str] = []
        while len(distractors) < self.options_per_question - 1:
            spend_attempt()
            candidate = await self.word_service.fetch_random(self.rng.choice(list(Difficulty)))
            definition = candidate.primary_definition
            if (
                candidate.word == record.word
                or not definition
                or definition == correct_answer
                or definition in distractors
            ):
                continue
            distractors.append(definition)

        options = [correct_answer] + distractors
        self.rng.shuffle(options)
        logger.debug(f"Question {number}: {record.word!r} after {attempts} draws")
        return QuizQuestion(
            word=record.word,
            part_of_speech=record.part_of_speech,
            correct_answer=correct_answer,
            options=tuple(options),
        )
