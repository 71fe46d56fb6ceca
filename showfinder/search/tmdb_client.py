"""TMDB search client adapter used by the dispatcher."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

import aiohttp

from showfinder.config import TmdbConfig
from showfinder.rate_limits import (
    TMDB_WAIT_LOG_THRESHOLD_SECONDS,
    enforce_tmdb_min_interval,
)
from showfinder.search.parsers import parse_search_page
from showfinder.search.protocols import ShowSearchService
from showfinder.search.resilience import is_retryable_status, retry_delay_seconds
from showfinder.search.types import ServiceResponse
from showfinder.tmdb_auth import build_tmdb_auth
from showfinder import logger
from showfinder.__version__ import __version__

DEFAULT_USER_AGENT = f"Showfinder/{__version__}"
SERVER_LABEL = "TMDB"


class TmdbServiceAdapter(ShowSearchService):
    """TMDB ``/search/tv`` adapter returning status plus parsed page."""

    def __init__(
        self,
        api_key: str,
        tmdb: Optional[TmdbConfig] = None,
        max_retries: int = 3,
    ):
        tmdb = tmdb or TmdbConfig()
        self._auth_headers, self._auth_params = build_tmdb_auth(api_key)
        self.timeout = tmdb.timeout
        self.base_url = tmdb.url.rstrip("/")
        self.max_retries = max(1, max_retries)
        self._semaphore = asyncio.Semaphore(tmdb.max_concurrency)
        self._min_interval_seconds = max(0.0, float(tmdb.min_interval_seconds))
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def search_tv(self, title: str, language: str) -> ServiceResponse:
        """Search TV shows by title, first result page only."""
        params = {"query": title, "language": language, "page": 1, "include_adult": "false"}
        status, data, elapsed_ms = await self._request("/search/tv", params)
        logger.get_logger().api_response(status, data, elapsed_ms)
        if not 200 <= status < 300 or data is None:
            return ServiceResponse(status)
        return ServiceResponse(status, parse_search_page(data))

    async def _request(self, path: str, params: Dict[str, Any]) -> tuple[int, Optional[dict], float]:
        url = f"{self.base_url}{path}"
        logger.get_logger().api_request("GET", url, params)
        request_start = time.time()
        query = {**params, **self._auth_params}

        async with self._semaphore:
            session = await self._ensure_session()
            for attempt in range(self.max_retries):
                await self._enforce_interval()
                try:
                    async with session.get(url, params=query) as response:
                        elapsed_ms = (time.time() - request_start) * 1000
                        if response.status >= 400:
                            # Retry only transient server failures and explicit throttling.
                            if attempt < self.max_retries - 1 and is_retryable_status(response.status):
                                delay = retry_delay_seconds(
                                    attempt=attempt + 1,
                                    retry_after=response.headers.get("Retry-After"),
                                )
                                logger.get_logger().api_retry(SERVER_LABEL, attempt + 1, self.max_retries, delay)
                                await asyncio.sleep(delay)
                                continue
                            return response.status, None, elapsed_ms
                        data = await response.json(content_type=None)
                        return response.status, data, elapsed_ms
                except (asyncio.TimeoutError, aiohttp.ClientConnectionError, aiohttp.ServerTimeoutError):
                    if attempt < self.max_retries - 1:
                        delay = 2 ** (attempt + 1)
                        logger.get_logger().api_retry(SERVER_LABEL, attempt + 1, self.max_retries, delay)
                        await asyncio.sleep(delay)
                    else:
                        logger.get_logger().api_failed(SERVER_LABEL, self.max_retries)
                        raise
        raise RuntimeError("Unreachable retry exit")

    async def _enforce_interval(self) -> None:
        wait = await enforce_tmdb_min_interval(
            self.base_url,
            min_interval_seconds=self._min_interval_seconds,
        )
        log = logger.get_logger()
        log.api_wait_debug(SERVER_LABEL, wait)
        if wait > TMDB_WAIT_LOG_THRESHOLD_SECONDS:
            log.api_wait(SERVER_LABEL, wait)

    async def _ensure_session(self) -> aiohttp.ClientSession:
        session = self._session
        if session is not None and not session.closed:
            return session

        async with self._session_lock:
            session = self._session
            if session is None or session.closed:
                timeout = aiohttp.ClientTimeout(total=self.timeout)
                self._session = aiohttp.ClientSession(
                    headers=self._get_headers(),
                    timeout=timeout,
                )
            return self._session

    def _get_headers(self) -> Dict[str, str]:
        return {**self._auth_headers, "Accept": "application/json", "User-Agent": DEFAULT_USER_AGENT}

    async def close(self) -> None:
        """Close any open connections."""
        async with self._session_lock:
            session = self._session
            self._session = None
        if session is not None and not session.closed:
            await session.close()
