"""Client for the machine translation API."""

from typing import Optional, Protocol

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from localekit.config.settings import GOOGLE_TRANSLATE_URL
from localekit.errors import TranslationError

logger = structlog.get_logger(__name__)


class Translator(Protocol):
    async def translate(self, text: str, target_language: str) -> str:
        ...


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, TranslationError) and error.retryable


class GoogleTranslator:
    """Translates single strings with the Google Translate v2 REST API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = GOOGLE_TRANSLATE_URL,
        timeout: float = 10.0,
        max_attempts: int = 1,
        client: Optional[httpx.AsyncClient] = None,
        wait: Optional[wait_base] = None,
    ):
        """Initialize the translator.

        Args:
            api_key: API key, sent as the ``key`` URL parameter
            api_url: Endpoint accepting ``{"q": ..., "target": ...}``
            timeout: Per request timeout in seconds
            max_attempts: Attempts per text, 1 disables retries
            client: Optional preconfigured client, not closed by ``aclose``
            wait: Wait strategy between attempts, exponential by default
        """
        self.api_key = api_key
        self.api_url = api_url
        self.max_attempts = max_attempts
        self.wait = wait or wait_exponential(multiplier=1, min=1, max=10)
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "GoogleTranslator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def _request(self, text: str, target_language: str) -> str:
        logger.debug("Requesting translation", target=target_language, length=len(text))
        try:
            response = await self.client.post(
                self.api_url,
                params={"key": self.api_key},
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json; charset=UTF-8",
                },
                json={"q": text, "target": target_language},
            )
        except httpx.HTTPError as e:
            raise TranslationError(
                f"Translation request failed: {e}",
                language_code=target_language,
                previous_error=e,
            ) from e

        if response.status_code != 200:
            raise TranslationError(
                f"Translation API returned HTTP {response.status_code}",
                language_code=target_language,
                status_code=response.status_code,
            )

        try:
            return response.json()["data"]["translations"][0]["translatedText"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TranslationError(
                f"Unexpected translation API response: {e}",
                language_code=target_language,
                status_code=response.status_code,
                previous_error=e,
            ) from e

    async def translate(self, text: str, target_language: str) -> str:
        """Translate ``text`` into ``target_language``.

        Raises:
            TranslationError: the request failed after all attempts
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait,
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        ):
            with attempt:
                return await self._request(text, target_language)
