"""HTTP client for the thesaurus API."""
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar
from urllib.parse import quote

import httpx

from wordwhiz.config import settings, ThesaurusSettings
from wordwhiz.errors import MalformedResponse, ThesaurusError, WordNotFound
from wordwhiz import monitoring

logger = logging.getLogger(__name__)

T = TypeVar("T")


def error_for_status(status_code: int, detail: str = "") -> ThesaurusError:
    """Map a non-success HTTP status to a thesaurus error."""
    if status_code == 404:
        return WordNotFound(detail)
    if status_code == 429:
        return ThesaurusError(ThesaurusError.RATE_LIMIT, detail)
    if status_code == 403:
        return ThesaurusError(ThesaurusError.INVALID_API_KEY, detail)
    return ThesaurusError(ThesaurusError.UNKNOWN, f"HTTP {status_code} {detail}".strip())


async def retry_operation(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int,
    base_delay: float = 1.0,
    max_delay: float = 10.0,
) -> T:
    """Run operation, retrying transient thesaurus errors with exponential backoff."""
    attempt = 1
    while True:
        try:
            return await operation()
        except ThesaurusError as e:
            if not e.is_transient or attempt >= max_attempts:
                raise
            delay = min(base_delay * 2 ** attempt, max_delay)
            logger.warning(f"Attempt {attempt}/{max_attempts} failed ({e}), retrying in {delay:.1f}s")
            await asyncio.sleep(delay)
            attempt += 1


class ThesaurusClient:
    """Fetches raw entries from the thesaurus API."""

    def __init__(
        self,
        config: Optional[ThesaurusSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client; an httpx client is created if none is given."""
        self.config = config or settings.thesaurus
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=self.config.timeout)

    async def __aenter__(self) -> "ThesaurusClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    def get_url(self, word: str) -> str:
        if not word or not isinstance(word, str):
            raise ThesaurusError(ThesaurusError.UNKNOWN, "Invalid word parameter")
        if not self.config.api_key:
            raise ThesaurusError(ThesaurusError.INVALID_API_KEY, "API key is not configured")
        return f"{self.config.base_url.rstrip('/')}/{quote(word.strip())}"

    async def fetch_entries(self, word: str) -> Any:
        """Fetch the decoded JSON payload for a word."""
        return await retry_operation(
            lambda: self._fetch_once(word),
            max_attempts=self.config.retry_attempts,
            base_delay=self.config.retry_base_delay,
            max_delay=self.config.retry_max_delay,
        )

    async def _fetch_once(self, word: str) -> Any:
        url = self.get_url(word)
        started = time.monotonic()
        try:
            response = await self.http_client.get(url, params={"key": self.config.api_key})
        except httpx.TimeoutException as e:
            raise ThesaurusError(ThesaurusError.TIMEOUT, str(e)) from e
        except httpx.RequestError as e:
            raise ThesaurusError(ThesaurusError.NETWORK, str(e)) from e
        finally:
            monitoring.thesaurus_request_duration.observe(time.monotonic() - started)

        if not response.is_success:
            raise error_for_status(response.status_code, word)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse(f"Body is not JSON: {e}") from e
        # A bare string or an empty list is how the thesaurus reports an unknown word
        if isinstance(data, str):
            raise WordNotFound(data)
        if isinstance(data, list) and not data:
            raise WordNotFound(f"No entries or suggestions for {word}")
        if not isinstance(data, list):
            raise MalformedResponse("Expected a list of entries")
        logger.debug(f"Fetched {len(data)} entries for {word}")
        return data
