"""Database models for the local key-value storage."""
from sqlalchemy import Column, String, Text

from wordwhiz.models.base import Base, TimestampMixin


class KeyValueEntry(Base, TimestampMixin):
    """A single JSON-encoded value stored under a string key."""

    __tablename__ = "key_value_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
