"""Application facade wiring the WordWhiz services together."""
import logging
import random
from datetime import datetime
from typing import Any, Callable, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from wordwhiz.config import settings
from wordwhiz.models.base import engine as default_engine, init_db
from wordwhiz.models.progress_models import LearnedWordEntry, ProgressSummary, QuizStatistics
from wordwhiz.models.word_models import QuizQuestion, WordRecord
from wordwhiz.services.learning_service import LearningService
from wordwhiz.services.progress_service import ProgressService
from wordwhiz.services.quiz_generator import QuizGenerator
from wordwhiz.services.quiz_stats_service import QuizStatsService
from wordwhiz.services.storage import KeyValueStore, SqlKeyValueStore
from wordwhiz.services.thesaurus_client import ThesaurusClient
from wordwhiz.services.word_service import EntryFetcher, WordService


class WordWhiz:
    """Entry point for the presentation layer.

    Every collaborator can be injected; the defaults use the configured
    SQLite storage and the thesaurus API.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        client: Optional[EntryFetcher] = None,
        engine: Optional[Engine] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the application and its services."""
        self.logger = logging.getLogger(__name__)
        self.engine = engine or default_engine
        self.store = store or SqlKeyValueStore(
            sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        )
        self._owns_client = client is None
        self.client = client or ThesaurusClient(settings.thesaurus)
        self.rng = rng or random.Random()

        self.word_service = WordService(self.client, rng=self.rng)
        self.quiz_generator = QuizGenerator(self.word_service, rng=self.rng)
        self.learning_service = LearningService(self.store, clock=clock)
        self.quiz_stats_service = QuizStatsService(self.store, clock=clock)
        self.progress_service = ProgressService(self.learning_service, self.quiz_stats_service)
        self.running = False

    async def start(self) -> None:
        """Prepare storage."""
        if self.running:
            return
        if isinstance(self.store, SqlKeyValueStore):
            init_db(self.engine)
            self.logger.info("Storage initialized")
        self.running = True

    async def stop(self) -> None:
        """Release the HTTP client."""
        if not self.running:
            return
        if self._owns_client:
            await self.client.close()
            self.logger.info("Thesaurus client closed")
        self.running = False

    async def __aenter__(self) -> "WordWhiz":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def word_of_day(self) -> WordRecord:
        return await self.word_service.fetch_word_of_day()

    async def lookup(self, word: Any) -> WordRecord:
        return await self.word_service.fetch_by_name(word)

    async def learn_batch(self, count: int = 5) -> List[WordRecord]:
        return await self.word_service.fetch_words(count)

    async def generate_quiz(self, count: Optional[int] = None, tier: Any = None) -> List[QuizQuestion]:
        return await self.quiz_generator.generate(count, tier)

    async def submit_quiz(self, score: int, total_questions: int) -> QuizStatistics:
        return await self.quiz_stats_service.record(score, total_questions)

    async def mark_learned(self, word: str) -> Optional[LearnedWordEntry]:
        return await self.learning_service.mark_learned(word)

    async def is_learned(self, word: str) -> bool:
        return await self.learning_service.is_learned(word)

    async def progress(self) -> ProgressSummary:
        return await self.progress_service.get_summary()

    async def reset_quiz_stats(self) -> QuizStatistics:
        return await self.quiz_stats_service.reset()

    async def clear_learned_words(self) -> None:
        await self.learning_service.clear()
