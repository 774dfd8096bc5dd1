"""Base model configuration."""
from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import Column, DateTime, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from wordwhiz.config import settings


def create_storage_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for the key-value storage.

    In-memory SQLite databases live inside a single connection, so they get a
    static pool shared across threads.
    """
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo)


# Create SQLAlchemy engine
engine = create_storage_engine(settings.storage.url, settings.storage.echo)

# Create declarative base class
Base = declarative_base()


class TimestampMixin:
    """Mixin to add timestamp columns to models."""
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )


def init_db(bind: Optional[Engine] = None) -> None:
    """Initialize database."""
    # Import models so their tables are registered on the metadata
    import wordwhiz.models.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)  # Create tables if they don't exist
