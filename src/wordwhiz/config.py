"""Configuration settings for WordWhiz."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(BASE_DIR / env_file)


THESAURUS_BASE_URL = "https://www.dictionaryapi.com/api/v3/references/thesaurus/json"
NO_DEFINITION = "No definition available"

# Curated word lists by difficulty tier
WORD_LISTS = {
    "beginner": [
        "happy", "sad", "big", "small", "fast", "slow",
        "good", "bad", "hot", "cold", "easy", "hard",
        "new", "old", "young", "tall", "short", "loud",
        "quiet", "clean", "dirty", "light", "dark", "strong",
    ],
    "intermediate": [
        "accomplish", "benevolent", "candid", "diligent",
        "eloquent", "facilitate", "gratitude", "humble",
        "innovative", "judicious", "keen", "luminous",
        "meticulous", "nurture", "optimize", "profound",
    ],
    "advanced": [
        "aberration", "byzantine", "cacophony", "deleterious",
        "ephemeral", "fastidious", "garrulous", "hegemony",
        "ineffable", "juxtapose", "kaleidoscopic", "labyrinthine",
        "mellifluous", "nefarious", "obfuscate", "paradigm",
    ],
}


@dataclass
class ThesaurusSettings:
    """Thesaurus API settings."""
    api_key: str = os.getenv("THESAURUS_API_KEY", "")
    base_url: str = os.getenv("THESAURUS_BASE_URL", THESAURUS_BASE_URL)
    timeout: float = float(os.getenv("THESAURUS_TIMEOUT", "10"))
    retry_attempts: int = int(os.getenv("THESAURUS_RETRY_ATTEMPTS", "3"))
    retry_base_delay: float = float(os.getenv("THESAURUS_RETRY_BASE_DELAY", "1.0"))
    retry_max_delay: float = float(os.getenv("THESAURUS_RETRY_MAX_DELAY", "10.0"))


@dataclass
class StorageSettings:
    """Local key-value storage settings."""
    url: str = os.getenv("STORAGE_URL", "sqlite:///wordwhiz.db")
    echo: bool = os.getenv("STORAGE_ECHO", "false").lower() == "true"
    learned_words_key: str = "@learned_words"
    quiz_stats_key: str = "@quiz_stats"
    last_quiz_date_key: str = "@last_quiz_date"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class QuizSettings:
    """Quiz generation settings."""
    questions_per_quiz: int = int(os.getenv("QUESTIONS_PER_QUIZ", "10"))
    options_per_question: int = 4
    max_attempts_per_question: int = int(os.getenv("MAX_ATTEMPTS_PER_QUESTION", "40"))
    default_tier: str = os.getenv("DEFAULT_TIER", "intermediate")


@dataclass
class LearningSettings:
    """Learning progress settings."""
    recent_window_days: int = int(os.getenv("RECENT_WINDOW_DAYS", "7"))
    review_after_days: int = int(os.getenv("REVIEW_AFTER_DAYS", "3"))


@dataclass
class MonitoringSettings:
    """Prometheus metrics settings."""
    enabled: bool = os.getenv("MONITORING_ENABLED", "false").lower() == "true"
    port: int = int(os.getenv("MONITORING_PORT", "9090"))


def get_thesaurus_settings() -> ThesaurusSettings:
    """Get thesaurus settings."""
    return ThesaurusSettings()


def get_storage_settings() -> StorageSettings:
    """Get storage settings."""
    return StorageSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_quiz_settings() -> QuizSettings:
    """Get quiz settings."""
    return QuizSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    thesaurus: ThesaurusSettings = field(default_factory=get_thesaurus_settings)
    storage: StorageSettings = field(default_factory=get_storage_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    quiz: QuizSettings = field(default_factory=get_quiz_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if self.quiz.questions_per_quiz < 1:
            raise ValueError("QUESTIONS_PER_QUIZ must be positive")

        if self.quiz.options_per_question < 2:
            raise ValueError("A quiz question needs at least two options")

        if self.quiz.max_attempts_per_question < 1:
            raise ValueError("MAX_ATTEMPTS_PER_QUESTION must be positive")

        if self.quiz.default_tier not in WORD_LISTS:
            raise ValueError(f"DEFAULT_TIER must be one of {', '.join(WORD_LISTS)}")

        if self.thesaurus.retry_attempts < 1:
            raise ValueError("THESAURUS_RETRY_ATTEMPTS must be at least 1")

        if self.learning.recent_window_days < 0 or self.learning.review_after_days < 0:
            raise ValueError("Learning windows cannot be negative")


# Create global settings instance
settings = Settings()
settings.validate()
