from __future__ import annotations

from showfinder.search.resilience import expect_dict, optional_list_of_dicts
from showfinder.search.types import RawCandidate, SearchPage


def as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if cleaned.isdigit():
            return int(cleaned)
    return None


def optional_str(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def parse_candidate(entry: dict, total_results: int, context: str) -> RawCandidate:
    show_id = as_int(entry.get("id"))
    if show_id is None:
        raise ValueError(f"{context} is missing a numeric id")
    title = entry.get("name") or entry.get("title") or entry.get("original_name") or ""
    return RawCandidate(
        id=show_id,
        title=str(title),
        poster_path=optional_str(entry.get("poster_path")),
        backdrop_path=optional_str(entry.get("backdrop_path")),
        total_results=total_results,
    )


def parse_search_page(payload: object, context: str = "search/tv") -> SearchPage:
    """Build a SearchPage from a TMDB ``/search/tv`` JSON body.

    Raises ``ValueError`` when the payload does not have the expected shape.
    """
    root = expect_dict(payload, f"{context} payload")
    entries = optional_list_of_dicts(root, "results", context)
    total = as_int(root.get("total_results"))
    if total is None:
        total = len(entries)
    results = tuple(
        parse_candidate(entry, total, f"{context}.results[{idx}]")
        for idx, entry in enumerate(entries)
    )
    return SearchPage(total_results=total, results=results)
