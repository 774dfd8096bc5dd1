"""Service for fetching word records from the thesaurus."""
import logging
import random
import re
from typing import Any, List, Optional, Protocol, Sequence

from wordwhiz.config import WORD_LISTS
from wordwhiz.errors import InvalidWordInput, ThesaurusError, WordFetchFailed
from wordwhiz.models.word_models import Difficulty, WordRecord
from wordwhiz.services.normalizer import normalize_response
from wordwhiz import monitoring

logger = logging.getLogger(__name__)

_WORD_PATTERN = re.compile(r"[a-z]+")


class EntryFetcher(Protocol):
    """Anything that can fetch a raw thesaurus payload for a word."""

    async def fetch_entries(self, word: str) -> Any:
        ...


def is_valid_word(word: Any) -> bool:
    """Check that word is a string made of letters only."""
    return isinstance(word, str) and bool(re.fullmatch(r"[a-zA-Z]+", word))


def validate_word(raw: Any) -> str:
    """Trim and lowercase a candidate word, raising InvalidWordInput if unusable."""
    if raw is None:
        raise InvalidWordInput("Word is undefined or null")
    if not isinstance(raw, str):
        raise InvalidWordInput(f"Word is not a string: {type(raw).__name__}")
    word = raw.strip().lower()
    if not word:
        raise InvalidWordInput("Word is empty after processing")
    if not _WORD_PATTERN.fullmatch(word):
        raise InvalidWordInput(f"Word contains invalid characters: {word!r}")
    return word


def get_difficulty_level(word: str) -> str:
    """Return the tier name a word belongs to, or 'unknown'."""
    word = word.lower()
    for level, words in WORD_LISTS.items():
        if word in words:
            return level
    return "unknown"


class WordService:
    """Service for fetching normalized word records."""

    def __init__(self, client: EntryFetcher, rng: Optional[random.Random] = None):
        """Initialize the service with a thesaurus client."""
        self.client = client
        self.rng = rng or random.Random()

    def get_random_word(self, tier: Any = Difficulty.INTERMEDIATE) -> str:
        """Draw a word uniformly from the tier's word list."""
        level = Difficulty.parse(tier)
        words = WORD_LISTS[level.value]
        return words[self.rng.randrange(len(words))]

    async def fetch_by_name(self, word: Any) -> WordRecord:
        """Fetch a word record by name.

        Unusable input is replaced by a random intermediate word. A failed fetch
        is retried once with a random word; if that fails too WordFetchFailed
        is raised.
        """
        try:
            name = validate_word(word)
        except InvalidWordInput as e:
            name = self.get_random_word(Difficulty.INTERMEDIATE)
            logger.warning(f"{e}; using random word {name!r} instead")
            monitoring.word_substitutions.labels(reason="invalid_input").inc()
        return await self._fetch_with_fallback(name, Difficulty.INTERMEDIATE)

    async def fetch_random(self, tier: Any = Difficulty.INTERMEDIATE) -> WordRecord:
        """Fetch a random word record from a difficulty tier."""
        level = Difficulty.parse(tier)
        return await self._fetch_with_fallback(self.get_random_word(level), level)

    async def fetch_word_of_day(self) -> WordRecord:
        """Fetch the word shown on the home screen."""
        return await self.fetch_random(Difficulty.INTERMEDIATE)

    async def fetch_words(
        self,
        count: int,
        tiers: Sequence[Any] = (Difficulty.INTERMEDIATE, Difficulty.ADVANCED),
    ) -> List[WordRecord]:
        """Fetch a batch of random words, cycling through the given tiers."""
        records = []
        for i in range(count):
            records.append(await self.fetch_random(tiers[i % len(tiers)]))
        return records

    async def _fetch_with_fallback(self, name: str, tier: Difficulty) -> WordRecord:
        try:
            return await self._fetch(name)
        except ThesaurusError as e:
            substitute = self.get_random_word(tier)
            logger.error(f"Error fetching word data for {name!r}: {e}; falling back to {substitute!r}")
            monitoring.word_fetch_failures.labels(error_type=type(e).__name__).inc()
            monitoring.word_substitutions.labels(reason="fetch_failed").inc()

        try:
            return await self._fetch(substitute)
        except ThesaurusError as e:
            logger.error(f"Fallback word {substitute!r} failed as well: {e}")
            monitoring.word_fetch_failures.labels(error_type=type(e).__name__).inc()
            raise WordFetchFailed(f"Could not fetch {name!r} or fallback {substitute!r}: {e}") from e

    async def _fetch(self, name: str) -> WordRecord:
        payload = await self.client.fetch_entries(name)
        record = normalize_response(payload)
        monitoring.words_fetched.inc()
        logger.debug(f"Fetched word {record.word!r} ({record.part_of_speech})")
        return record
