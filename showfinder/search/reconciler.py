"""Choose whose ranking orders the final candidate list."""

from __future__ import annotations

from typing import Optional

from showfinder import logger
from showfinder.search.assembler import assemble
from showfinder.search.types import ClassifiedCandidate, ScoredCandidate, ScoredPage


def _plain(scored: list[ScoredCandidate]) -> list[ClassifiedCandidate]:
    return [item.classified for item in scored]


def rerank_by_fallback(
    requested: list[ScoredCandidate],
    fallback: list[ScoredCandidate],
) -> list[ClassifiedCandidate]:
    """Order requested-language candidates the way the fallback ranked them.

    Candidates are matched by catalog id. Requested candidates the fallback
    never returned follow in their own order.
    """
    remaining = list(requested)
    ordered: list[ClassifiedCandidate] = []
    for fallback_item in fallback:
        matches = [item for item in remaining if item.id == fallback_item.id]
        for item in matches:
            ordered.append(item.classified)
            remaining.remove(item)
    ordered.extend(item.classified for item in remaining)
    return ordered


def _probable_section(requested: ScoredPage, fallback: Optional[ScoredPage]) -> list[ClassifiedCandidate]:
    log = logger.get_logger()
    if fallback is None:
        log.debug(f"No {requested.language} fallback page; keeping {requested.language} order")
        return _plain(requested.probable)

    if requested.probable and fallback.probable:
        requested_best = requested.best_distance
        fallback_best = fallback.best_distance
        if fallback_best is not None and requested_best is not None and fallback_best < requested_best:
            log.debug(
                f"{fallback.language} distance {fallback_best} beats {requested.language} "
                f"distance {requested_best}; re-sorting by {fallback.language}"
            )
            return rerank_by_fallback(requested.probable, fallback.probable)
        log.debug(f"{fallback.language} does not rank better; keeping {requested.language} order")
        return _plain(requested.probable)

    if requested.probable:
        return _plain(requested.probable)
    if fallback.probable:
        log.debug(f"No probable {requested.language} result; using {fallback.language} order")
        return _plain(fallback.probable)
    return []


def reconcile(
    requested: ScoredPage,
    fallback: Optional[ScoredPage],
    max_items: int = -1,
) -> list[ClassifiedCandidate]:
    """Merge the two languages' pages into one ranked, truncated list.

    Candidates without a poster or banner are never offered.
    """
    return assemble(
        _probable_section(requested, fallback),
        requested.numeric_slug,
        max_items=max_items,
    )
