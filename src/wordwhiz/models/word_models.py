"""Models for lexical data and quiz questions."""
import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Tuple

from wordwhiz.config import NO_DEFINITION


logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Difficulty tiers of the embedded word lists."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: Any) -> "Difficulty":
        """Resolve a tier name, falling back to intermediate for anything unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        logger.warning(f"Invalid difficulty level: {value!r}. Defaulting to intermediate.")
        return cls.INTERMEDIATE


@dataclass(frozen=True)
class WordRecord:
    """Canonical normalized lexical entry for one word."""
    word: str
    part_of_speech: str = ""
    definitions: Tuple[str, ...] = ()
    synonyms: Tuple[str, ...] = ()
    antonyms: Tuple[str, ...] = ()
    examples: Tuple[str, ...] = ()
    date: str = ""
    offensive: bool = False

    @property
    def primary_definition(self) -> str:
        """First definition, or an empty string when there is none."""
        return self.definitions[0] if self.definitions else ""

    @property
    def meaning(self) -> str:
        """Definition shown on a word card."""
        return self.primary_definition or NO_DEFINITION

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in ("definitions", "synonyms", "antonyms", "examples"):
            data[name] = list(data[name])
        return data


@dataclass(frozen=True)
class QuizQuestion:
    """A multiple-choice question asking for the definition of a word."""
    word: str
    part_of_speech: str
    correct_answer: str
    options: Tuple[str, ...]

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer
