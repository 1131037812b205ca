from abc import ABC
from typing import Any, Dict, Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from savant.config.settings import AppSettings, settings

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class ScraperError(Exception):
    """Custom exception for scraper-related errors."""

    pass


class RateLimitError(ScraperError):
    """Exception raised for rate limit errors (429)."""

    pass


def build_client(app_settings: Optional[AppSettings] = None) -> httpx.AsyncClient:
    """Creates the shared HTTP client used by every upstream scraper."""
    app_settings = app_settings or settings
    return httpx.AsyncClient(
        timeout=httpx.Timeout(app_settings.request_timeout_seconds),
        follow_redirects=True,
        headers={
            "User-Agent": app_settings.user_agent,
            "Accept": "application/json,text/csv",
        },
    )


class BaseScraper(ABC):
    """Abstract base class for upstream data scrapers."""

    source_name: str = "unknown"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        self.settings = app_settings or settings
        self.client = client or build_client(self.settings)
        self.max_attempts = self.settings.fetch_max_attempts

    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes an asynchronous HTTP request, retrying up to ``max_attempts`` times."""
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type(
                    (httpx.RequestError, httpx.HTTPStatusError, RateLimitError)
                ),
                reraise=True,
            ):
                with attempt:
                    return await self._send(method, url, params=params, **kwargs)
        except httpx.HTTPStatusError as e:
            raise ScraperError(
                f"HTTP error {e.response.status_code} from {self.source_name}"
            ) from e
        except httpx.RequestError as e:
            raise ScraperError(f"Request to {self.source_name} failed: {e}") from e

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        logger.debug(f"Making request to {self.source_name}: {method} {url} params={params}")
        response = await self.client.request(method, url, params=params, **kwargs)

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(
                f"Rate limit hit (429) for {self.source_name} at {url}. Retry-After: {retry_after}"
            )
            raise RateLimitError(f"Rate limited by {self.source_name}")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code in RETRYABLE_STATUS_CODES:
                logger.warning(
                    f"Retryable status {e.response.status_code} from {self.source_name}: {url}"
                )
                raise  # Re-raise to trigger tenacity retry
            logger.error(
                f"HTTP error during request for {self.source_name}: {e.response.status_code} - {url}"
            )
            raise ScraperError(
                f"HTTP error {e.response.status_code} from {self.source_name}"
            ) from e

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._make_request("GET", url, params=params)
        try:
            return response.json()
        except ValueError as e:
            logger.debug(f"Raw {self.source_name} response content: {response.text[:500]}")
            raise ScraperError(f"Invalid JSON from {self.source_name}: {e}") from e

    async def _get_text(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        response = await self._make_request("GET", url, params=params)
        return response.text
