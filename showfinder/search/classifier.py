"""Split a search page into buckets by artwork completeness."""

from __future__ import annotations

from typing import Optional

from showfinder import logger
from showfinder.search.types import Bucket, ClassifiedCandidate, ClassifiedPage, SearchPage

# Catalog entry that pollutes every search and must never be offered.
SERIES_NOT_PERMITTED_ID = 313081

MISSING_ARTWORK_SUFFIXES = ("missing/series.jpg", "missing/movie.jpg")


def is_missing_artwork(path: Optional[str]) -> bool:
    """True when a present artwork path is empty or a placeholder image."""
    if path is None:
        return False
    return path == "" or path.endswith(MISSING_ARTWORK_SUFFIXES)


def classify(page: Optional[SearchPage], language: str) -> ClassifiedPage:
    """Bucket every candidate of ``page``; the first matching rule wins.

    Missing banner is checked before missing poster. Candidates with no
    artwork paths at all are still probable. The numeric slug bucket is part
    of the result contract but no rule fills it.
    """
    classified = ClassifiedPage(language=language)
    if page is None:
        return classified

    log = logger.get_logger()
    log.debug(
        f"Examining {len(page.results)} of {page.total_results} result(s) in {language}"
    )
    for candidate in page.results:
        if candidate.id == SERIES_NOT_PERMITTED_ID:
            continue
        if is_missing_artwork(candidate.backdrop_path):
            log.debug(f"Set aside '{candidate.title}': banner missing ({candidate.backdrop_path!r})")
            bucket = Bucket.NO_BANNER
        elif is_missing_artwork(candidate.poster_path):
            log.debug(f"Set aside '{candidate.title}': poster missing ({candidate.poster_path!r})")
            bucket = Bucket.NO_POSTER
        else:
            bucket = Bucket.PROBABLE
        classified.bucket(bucket).append(ClassifiedCandidate(candidate, bucket, language))
    return classified
