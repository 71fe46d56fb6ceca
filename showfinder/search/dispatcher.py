"""Search a show in the requested and fallback languages and rank the hits."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

import aiohttp

from showfinder import logger
from showfinder.search.classifier import classify
from showfinder.search.protocols import ShowSearchService
from showfinder.search.reconciler import reconcile
from showfinder.search.response_cache import ResponseCache
from showfinder.search.scorer import score_page
from showfinder.search.types import (
    ClassifiedCandidate,
    ScoredPage,
    SearchOutcome,
    SearchQuery,
    SearchStatus,
    ServiceResponse,
    ShowSearchResult,
)

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


@dataclass(frozen=True)
class _Attempt:
    language: str
    response: ServiceResponse
    cached: bool = False

    @property
    def usable(self) -> bool:
        return self.response.is_success and not self.response.is_empty


def _is_cacheable(response: ServiceResponse) -> bool:
    # Successful pages (even bodiless ones) and "not found" are definitive;
    # auth failures and throttling must be retried on the next call.
    return response.is_success or response.is_not_found


def _to_result(candidate: ClassifiedCandidate, query: SearchQuery) -> ShowSearchResult:
    raw = candidate.candidate
    return ShowSearchResult(
        id=raw.id,
        title=raw.title,
        language=candidate.language,
        poster_path=raw.poster_path,
        backdrop_path=raw.backdrop_path,
        season=query.season,
        episode=query.episode,
        source_file=query.source_file,
    )


class SearchDispatcher:
    """Run one show search against a service, backed by a shared response cache."""

    def __init__(
        self,
        service: ShowSearchService,
        cache: Optional[ResponseCache] = None,
        *,
        on_auth_error: Optional[Callable[[], None]] = None,
    ) -> None:
        self.service = service
        self.cache = cache if cache is not None else ResponseCache()
        self._on_auth_error = on_auth_error

    async def search(self, query: SearchQuery, result_limit: int = -1) -> SearchOutcome:
        log = logger.get_logger()
        log.debug(f"Searching {query.describe()}, result_limit={result_limit}")
        try:
            attempts = [await self._fetch(query.show_name, query.language)]
            if query.needs_fallback:
                attempts.append(await self._fetch(query.show_name, query.fallback_language))
        except TRANSPORT_ERRORS as exc:
            log.error(f"Search for '{query.show_name}' failed: {type(exc).__name__}: {exc}")
            return SearchOutcome(SearchStatus.PARSE_ERROR, reason=exc)
        except ValueError as exc:
            log.error(f"Search for '{query.show_name}' returned an unreadable payload: {exc}")
            return SearchOutcome(SearchStatus.PARSE_ERROR, reason=exc)
        except Exception as exc:
            log.error(f"Search for '{query.show_name}' hit an unexpected error: {type(exc).__name__}: {exc}")
            return SearchOutcome(SearchStatus.PARSE_ERROR, reason=exc)
        finally:
            log.cache_stats(self.cache.stats())

        return self._resolve(query, attempts, result_limit)

    async def _fetch(self, show_name: str, language: str) -> _Attempt:
        cached = self.cache.get(show_name, language)
        if cached is not None:
            logger.get_logger().debug(f"Using cached {language} response for '{show_name}'")
            return _Attempt(language, cached, cached=True)

        response = await self.service.search_tv(show_name, language)
        if _is_cacheable(response):
            self.cache.put(show_name, language, response)
        return _Attempt(language, response)

    def _resolve(self, query: SearchQuery, attempts: list[_Attempt], result_limit: int) -> SearchOutcome:
        log = logger.get_logger()
        # Any rejected credential wins; "not found" must hold for every language.
        if any(attempt.response.is_unauthorized for attempt in attempts):
            log.warning(f"Search for '{query.show_name}' was rejected: authorization failed")
            if self._on_auth_error is not None:
                self._on_auth_error()
            return SearchOutcome(SearchStatus.AUTH_ERROR)
        if all(attempt.response.is_not_found for attempt in attempts):
            log.debug(f"'{query.show_name}' not found")
            return SearchOutcome(SearchStatus.NOT_FOUND)
        if all(attempt.response.is_empty for attempt in attempts):
            log.debug(f"No readable response for '{query.show_name}'")
            return SearchOutcome(SearchStatus.PARSE_ERROR)

        requested, fallback = attempts[0], attempts[1] if len(attempts) > 1 else None
        requested_page = self._score(requested, query)
        fallback_page = self._score(fallback, query) if fallback is not None and fallback.usable else None
        ranked = reconcile(requested_page, fallback_page, result_limit)
        log.debug(f"Ranked {len(ranked)} candidate(s) for '{query.show_name}'")
        return SearchOutcome(
            SearchStatus.OK,
            results=tuple(_to_result(candidate, query) for candidate in ranked),
        )

    @staticmethod
    def _score(attempt: _Attempt, query: SearchQuery) -> ScoredPage:
        page = attempt.response.page if attempt.usable else None
        return score_page(classify(page, attempt.language), query.show_name)
