"""Text extraction through a Jina-style reader service."""

import logging
from urllib.parse import quote

import httpx

from .config import Settings
from .errors import (
    ExtractionAuthError,
    ExtractionGenericError,
    ExtractionRateLimitError,
)

logger = logging.getLogger(__name__)


class ReaderClient:
    """Fetch the rendered plain text of a page via the reader endpoint.

    The target URL is percent-encoded into a single path segment of the
    reader URL, e.g. ``https://r.jina.ai/https%3A%2F%2Fexample.com``.
    """

    def __init__(self, settings: Settings, client: httpx.Client | None = None):
        self.base_url = settings.reader_base_url.rstrip("/")
        self.api_key = settings.jina_api_key
        self.timeout = settings.reader_timeout
        self._client = client
        if not self.api_key:
            logger.warning(
                "JINA_API_KEY not set, reader requests are unauthenticated "
                "and may be rate-limited"
            )

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "X-Return-Format": "text",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def reader_url(self, url: str) -> str:
        return f"{self.base_url}/{quote(url, safe='')}"

    def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return self._client.get(url, headers=self._get_headers(), timeout=self.timeout)
        with httpx.Client(timeout=self.timeout) as client:
            return client.get(url, headers=self._get_headers())

    @staticmethod
    def _error_body(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return str(payload)

    def extract(self, url: str) -> str | None:
        """Return the page text, or None when the service returned nothing.

        Raises:
            ExtractionAuthError: credential rejected (401/403)
            ExtractionRateLimitError: quota exceeded (429)
            ExtractionGenericError: any other non-2xx status or transport error
        """
        logger.info(f"Extracting text from {url}")
        try:
            response = self._get(self.reader_url(url))
        except httpx.HTTPError as e:
            logger.error(f"Reader request for {url} failed: {e}")
            raise ExtractionGenericError(url, f"Reader request failed: {e}") from e

        if not response.is_success:
            body = self._error_body(response)
            logger.error(
                f"Reader request failed for {url}: "
                f"{response.status_code} {response.reason_phrase}. Body: {body}"
            )
            if response.status_code in (401, 403):
                raise ExtractionAuthError(
                    url, "Reader authentication/authorization failed, check JINA_API_KEY"
                )
            if response.status_code == 429:
                raise ExtractionRateLimitError(
                    url, "Reader rate limit exceeded, wait and try again or check plan limits"
                )
            raise ExtractionGenericError(
                url, f"Reader request failed: {response.status_code} {response.reason_phrase}"
            )

        text = response.text
        if not text or not text.strip():
            logger.warning(f"Reader returned empty content for {url}")
            return None

        logger.info(f"Extracted text from {url} (length: {len(text)})")
        return text
