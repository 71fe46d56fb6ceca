"""Protocol definitions for the remote show search service."""

from __future__ import annotations

from typing import Protocol

from showfinder.search.types import ServiceResponse


class ShowSearchService(Protocol):
    """Minimal TV search API used by the dispatcher.

    Implementations return 401/404 and other failing statuses as a
    ``ServiceResponse`` without a page, and raise on transport failure.
    """

    async def search_tv(self, title: str, language: str) -> ServiceResponse:
        ...
