"""
HTTP Fetcher
============

Thin wrapper around a ``requests`` session used for catalog documents and
font files, with retry and exponential backoff.
"""

import json
import logging
import time
from typing import Any

import requests

from fontcatalog.core.config import ProviderConfig
from fontcatalog.core.exceptions import (
    FetchFailedAfterRetriesError,
    FetchFailedError,
    InvalidJsonError,
)

logger = logging.getLogger(__name__)


def upgrade_to_https(url: str) -> str:
    """Force the https scheme on plain http URLs."""
    if url.startswith("http:"):
        return "https:" + url[len("http:") :]
    return url


class HttpFetcher:
    """Fetches URLs as bytes, raising NetworkError on failure."""

    def __init__(self, config: ProviderConfig | None = None):
        self.config = config or ProviderConfig()
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with appropriate configuration."""
        session = requests.Session()
        session.verify = self.config.verify_ssl
        session.headers.update({"User-Agent": self.config.user_agent})
        return session

    def fetch(self, url: str) -> bytes:
        """Fetch the body of ``url``.

        Raises:
            NetworkError: when every attempt fails
        """
        for attempt in range(self.config.max_retries):
            try:
                return self._fetch_once(url)
            except FetchFailedError as e:
                logger.warning(f"Fetch attempt {attempt + 1} failed: {e}")
                if attempt == self.config.max_retries - 1:
                    raise FetchFailedAfterRetriesError(_redact(url), attempt + 1) from e
                time.sleep(self.config.retry_backoff_seconds * 2**attempt)
        raise FetchFailedAfterRetriesError(_redact(url), self.config.max_retries)

    def _fetch_once(self, url: str) -> bytes:
        try:
            response = self.session.get(url, timeout=self.config.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchFailedError(_redact(url), _redact(str(e))) from e
        return response.content

    def fetch_json(self, url: str) -> Any:
        """Fetch and decode a JSON document.

        Raises:
            NetworkError: when the fetch fails
            ParseError: when the body is not valid JSON
        """
        data = self.fetch(url)
        try:
            return json.loads(data)
        except (ValueError, UnicodeDecodeError) as e:
            raise InvalidJsonError(_redact(url), str(e)) from e

    def close(self) -> None:
        self.session.close()


def _redact(url: str) -> str:
    """Hide API keys before a URL reaches logs or exception messages."""
    if "key=" not in url:
        return url
    head, _, tail = url.partition("key=")
    _, amp, rest = tail.partition("&")
    return f"{head}key=***{amp}{rest}"
