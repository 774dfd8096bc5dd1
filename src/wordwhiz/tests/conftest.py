"""Test configuration."""
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest
from dotenv import load_dotenv
from faker import Faker

# Set test environment before any imports
os.environ["ENV"] = "test"

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from sqlalchemy.orm import sessionmaker

from wordwhiz.config import WORD_LISTS
from wordwhiz.errors import MalformedResponse, ThesaurusError, WordNotFound
from wordwhiz.models.base import create_storage_engine, init_db
from wordwhiz.services.storage import SqlKeyValueStore

fake = Faker()


def make_entry(
    word: str,
    definitions: Optional[List[str]] = None,
    part_of_speech: str = "adjective",
    synonyms: Optional[List[List[str]]] = None,
    antonyms: Optional[List[List[str]]] = None,
    example: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a thesaurus entry shaped like the real API's."""
    entry = {
        "meta": {
            "id": word,
            "syns": synonyms if synonyms is not None else [[fake.word(), fake.word()]],
            "ants": antonyms if antonyms is not None else [[fake.word()]],
            "offensive": False,
        },
        "fl": part_of_speech,
        "shortdef": definitions if definitions is not None else [f"{fake.sentence()} ({word})"],
    }
    if example is not None:
        entry["def"] = [{"sseq": [[["sense", {"dt": [["text", "..."], ["vis", [{"t": example}]]]}]]]}]
    return entry


class FakeThesaurus:
    """In-memory stand-in for the thesaurus client."""

    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        self.entries: Dict[str, Any] = entries if entries is not None else {}
        self.failures: Dict[str, Exception] = {}
        self.requests: List[str] = []

    async def fetch_entries(self, word: str) -> Any:
        self.requests.append(word)
        if word in self.failures:
            raise self.failures[word]
        if word not in self.entries:
            raise WordNotFound(word)
        return self.entries[word]

    def fail(self, word: str, error: Optional[Exception] = None) -> None:
        self.failures[word] = error or ThesaurusError(ThesaurusError.NETWORK, "connection reset")

    def fail_everything(self) -> None:
        for words in WORD_LISTS.values():
            for word in words:
                self.fail(word, MalformedResponse("Missing word identifier in response"))


class FakeClock:
    """Controllable replacement for datetime.now."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def thesaurus() -> FakeThesaurus:
    """A fake thesaurus knowing every word of the embedded word lists."""
    entries = {}
    for words in WORD_LISTS.values():
        for word in words:
            entries[word] = [make_entry(word)]
    return FakeThesaurus(entries)


@pytest.fixture
def clock() -> FakeClock:
    # A Wednesday
    return FakeClock(datetime(2024, 3, 13, 10, 30))


@pytest.fixture
def session_factory() -> Generator[sessionmaker, None, None]:
    """Session factory bound to a fresh in-memory database."""
    engine = create_storage_engine("sqlite://")
    init_db(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory: sessionmaker) -> SqlKeyValueStore:
    return SqlKeyValueStore(session_factory)
