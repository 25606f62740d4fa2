"""Base API client and common functionality."""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

import aiohttp

from ..utils.logging import get_logger


class APIConnectionError(Exception):
    """Raised when the remote service cannot be reached or answers garbage."""
    pass


class BaseAPIClient(ABC):
    """Abstract base class for JSON-over-HTTP API clients.

    A client owns a single ``aiohttp.ClientSession``. Use it as an async
    context manager, or call :meth:`close` when done.
    """

    def __init__(self, base_url: str, timeout_seconds: Optional[float] = None):
        """Initialize the API client.

        Args:
            base_url: Base URL that endpoint paths are appended to
            timeout_seconds: Total request timeout; None keeps aiohttp's default
        """
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.timeout_seconds = timeout_seconds
        self.session: Optional[aiohttp.ClientSession] = None
        self.logger = get_logger(self.__class__.__name__)

    async def __aenter__(self):
        """Async context manager entry."""
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            if self.timeout_seconds is not None:
                timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
                self.session = aiohttp.ClientSession(timeout=timeout)
            else:
                self.session = aiohttp.ClientSession()
        return self.session

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    def url_for(self, path: str) -> str:
        """Join an endpoint path onto the base URL."""
        return f"{self.base_url}{path.lstrip('/')}"

    async def _post_json(self, path: str, payload: Dict[str, Any]) -> Any:
        """POST a JSON body and return the decoded JSON reply.

        The HTTP status is not interpreted; callers decide from the body.

        Raises:
            APIConnectionError: On network failure or an empty/non-JSON body
        """
        session = self._ensure_session()
        url = self.url_for(path)

        try:
            async with session.post(url, json=payload) as response:
                self.logger.debug("Response received", url=url, status=response.status)
                try:
                    data = await response.json(content_type=None)
                except (ValueError, RecursionError) as e:
                    raise APIConnectionError(f"Invalid JSON response (HTTP {response.status}): {e}")

                if data is None:
                    raise APIConnectionError(f"Empty response body (HTTP {response.status})")

                return data

        except aiohttp.ClientError as e:
            raise APIConnectionError(f"Network error: {e}")
        except asyncio.TimeoutError:
            raise APIConnectionError(f"Request to {url} timed out")

    @abstractmethod
    def get_client_info(self) -> Dict[str, Any]:
        """Describe the client for status reporting."""
        pass
