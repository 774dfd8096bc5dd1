"""Exceptions raised by WordWhiz services."""


class WordWhizError(Exception):
    """Base class for all WordWhiz errors."""


class InvalidWordInput(WordWhizError, ValueError):
    """Raised when a word is empty, not a string or contains non-letters."""


class ThesaurusError(WordWhizError):
    """Raised when the thesaurus API cannot deliver an entry."""

    TIMEOUT = "Request timeout"
    NETWORK = "Network error"
    INVALID_API_KEY = "Invalid API key"
    WORD_NOT_FOUND = "Word not found"
    RATE_LIMIT = "Rate limit exceeded"
    INVALID_RESPONSE = "Invalid API response"
    UNKNOWN = "Unknown error occurred"

    TRANSIENT = frozenset({TIMEOUT, NETWORK, RATE_LIMIT})

    def __init__(self, kind: str, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind}: {detail}" if detail else kind)

    @property
    def is_transient(self) -> bool:
        return self.kind in self.TRANSIENT


class WordNotFound(ThesaurusError):
    """Raised when the thesaurus has no entry for the requested word."""

    def __init__(self, detail: str = ""):
        super().__init__(ThesaurusError.WORD_NOT_FOUND, detail)


class MalformedResponse(ThesaurusError):
    """Raised when a payload has no usable entry or no word identifier."""

    def __init__(self, detail: str = ""):
        super().__init__(ThesaurusError.INVALID_RESPONSE, detail)


class WordFetchFailed(WordWhizError):
    """Raised when a word could not be fetched even after a fallback word."""


class QuizGenerationExhausted(WordWhizError):
    """Raised when a quiz cannot be assembled within the attempt budget."""


class StorageAccessFailed(WordWhizError):
    """Raised by key-value stores when a read or write fails."""
