"""Edit-distance ranking of probable candidates."""

from __future__ import annotations

from typing import Iterable

from rapidfuzz.distance import Levenshtein

from showfinder.search.types import ClassifiedCandidate, ClassifiedPage, ScoredCandidate, ScoredPage


def edit_distance(left: str, right: str) -> int:
    """Case-insensitive Levenshtein distance."""
    return Levenshtein.distance(left.lower(), right.lower())


def score(probable: Iterable[ClassifiedCandidate], query_title: str) -> list[ScoredCandidate]:
    """Rank candidates by ascending distance to ``query_title``.

    ``sorted`` is stable, so equal distances keep page order.
    """
    scored = [ScoredCandidate(candidate, edit_distance(query_title, candidate.title)) for candidate in probable]
    return sorted(scored, key=lambda item: item.distance)


def score_page(classified: ClassifiedPage, query_title: str) -> ScoredPage:
    return ScoredPage(
        language=classified.language,
        probable=score(classified.probable, query_title),
        no_poster=list(classified.no_poster),
        no_banner=list(classified.no_banner),
        numeric_slug=list(classified.numeric_slug),
    )
