"""
Shared HTTP transport for provider calls.

One HttpClient owns one aiohttp.ClientSession, so every provider of a
resolver reuses the same connection pool. The session is created lazily on
the first request (it must be created inside a running event loop) and is
released by close() or by leaving an `async with` block.

Each call is a single attempt: no retries, no backoff. A call that does
not complete is reported as ProviderError and the caller decides what a
missing answer means.

Usage:
    async with HttpClient(config.network) as http:
        data = await http.get_json("https://lrclib.net/api/search", {"q": "song"})
"""

import asyncio
from typing import Any

import aiohttp

from lyrics_resolver.core.config import NetworkConfig
from lyrics_resolver.core.exceptions import ProviderError
from lyrics_resolver.core.logger import get_logger


logger = get_logger(__name__)


class HttpClient:
    """
    Lazily-created aiohttp session with a total timeout and User-Agent.
    
    Attributes:
        network: The network settings the session is built from.
    
    Example:
        http = HttpClient(NetworkConfig(timeout=10))
        try:
            payload = await http.get_json(url, params={"s": "Song"})
        finally:
            await http.close()
    """
    
    def __init__(self, network: NetworkConfig | None = None) -> None:
        self.network = network or NetworkConfig()
        self._session: aiohttp.ClientSession | None = None
    
    async def __aenter__(self) -> "HttpClient":
        return self
    
    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
    
    @property
    def closed(self) -> bool:
        """True when no session is currently open."""
        return self._session is None or self._session.closed
    
    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.network.timeout),
                headers={"User-Agent": self.network.user_agent},
            )
        return self._session
    
    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None
    ) -> Any:
        """
        Issue a GET request and decode the JSON body.
        
        Args:
            url: Absolute URL to request.
            params: Query parameters. Entries whose value is None are dropped.
            headers: Extra headers merged over the session defaults.
        
        Returns:
            The decoded JSON document on HTTP 200, None on any other status.
        
        Raises:
            ProviderError: On connection failures, timeouts, or a body that
                           is not valid JSON.
        """
        query = {
            key: str(value) for key, value in (params or {}).items()
            if value is not None
        }
        
        try:
            async with self._get_session().get(url, params=query, headers=headers) as resp:
                if resp.status != 200:
                    logger.debug(f"GET {url} returned HTTP {resp.status}")
                    return None
                # Some endpoints answer JSON with a text/plain content type
                return await resp.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise ProviderError(
                f"Request timed out after {self.network.timeout}s: {url}",
                details={"url": url, "params": query}
            ) from e
        except aiohttp.ClientError as e:
            raise ProviderError(
                f"Request failed: {e}",
                details={"url": url, "params": query, "original_error": str(e)}
            ) from e
        except ValueError as e:
            raise ProviderError(
                f"Invalid JSON from {url}",
                details={"url": url, "original_error": str(e)}
            ) from e
    
    async def close(self) -> None:
        """Close the session if one was opened. Safe to call multiple times."""
        if self._session is not None:
            await self._session.close()
            self._session = None
