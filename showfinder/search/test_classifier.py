from __future__ import annotations

import pytest

from showfinder.search.classifier import SERIES_NOT_PERMITTED_ID, classify, is_missing_artwork
from showfinder.search.types import Bucket, RawCandidate, SearchPage


def _page(*candidates: RawCandidate) -> SearchPage:
    return SearchPage(total_results=len(candidates), results=tuple(candidates))


def _ids(items) -> list[int]:
    return [item.id for item in items]


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (None, False),
        ("", True),
        ("/images/missing/series.jpg", True),
        ("https://img.example/missing/movie.jpg", True),
        ("/abc123.jpg", False),
        ("/missing/series.png", False),
    ],
)
def test_is_missing_artwork(path, expected) -> None:
    assert is_missing_artwork(path) is expected


def test_classify_none_page_is_all_empty() -> None:
    classified = classify(None, "fr")

    assert classified.language == "fr"
    assert classified.probable == []
    assert classified.no_poster == []
    assert classified.no_banner == []
    assert classified.numeric_slug == []


def test_classify_buckets_by_artwork_and_keeps_page_order() -> None:
    page = _page(
        RawCandidate(1, "Full", poster_path="/p.jpg", backdrop_path="/b.jpg"),
        RawCandidate(2, "No banner", poster_path="/p.jpg", backdrop_path="/missing/series.jpg"),
        RawCandidate(3, "No poster", poster_path="", backdrop_path="/b.jpg"),
        RawCandidate(4, "Bare", poster_path=None, backdrop_path=None),
        RawCandidate(5, "Poster only", poster_path="/p.jpg"),
    )

    classified = classify(page, "en")

    assert _ids(classified.probable) == [1, 4, 5]
    assert _ids(classified.no_banner) == [2]
    assert _ids(classified.no_poster) == [3]
    assert classified.numeric_slug == []
    assert all(item.language == "en" for item in classified.probable)
    assert all(item.bucket is Bucket.PROBABLE for item in classified.probable)


def test_classify_missing_banner_wins_over_missing_poster() -> None:
    page = _page(RawCandidate(7, "Nothing", poster_path="/missing/movie.jpg", backdrop_path=""))

    classified = classify(page, "en")

    assert _ids(classified.no_banner) == [7]
    assert classified.no_poster == []
    assert classified.probable == []


def test_classify_drops_denylisted_id() -> None:
    page = _page(
        RawCandidate(SERIES_NOT_PERMITTED_ID, "Spam", poster_path="/p.jpg", backdrop_path="/b.jpg"),
        RawCandidate(SERIES_NOT_PERMITTED_ID, "Spam 2", backdrop_path=""),
        RawCandidate(10, "Real", poster_path="/p.jpg"),
    )

    classified = classify(page, "en")

    every_id = _ids(classified.probable + classified.no_poster + classified.no_banner + classified.numeric_slug)
    assert every_id == [10]
