"""Show search engine: dispatch, classify, score and reconcile candidates."""

from .assembler import assemble
from .classifier import SERIES_NOT_PERMITTED_ID, classify
from .dispatcher import SearchDispatcher
from .reconciler import reconcile
from .response_cache import DEFAULT_CACHE_SIZE, ResponseCache
from .scorer import edit_distance, score, score_page
from .types import (
    Bucket,
    ClassifiedCandidate,
    RawCandidate,
    ScoredCandidate,
    SearchOutcome,
    SearchPage,
    SearchQuery,
    SearchStatus,
    ServiceResponse,
    ShowSearchResult,
)

__all__ = [
    "Bucket",
    "ClassifiedCandidate",
    "DEFAULT_CACHE_SIZE",
    "RawCandidate",
    "ResponseCache",
    "SERIES_NOT_PERMITTED_ID",
    "ScoredCandidate",
    "SearchDispatcher",
    "SearchOutcome",
    "SearchPage",
    "SearchQuery",
    "SearchStatus",
    "ServiceResponse",
    "ShowSearchResult",
    "assemble",
    "classify",
    "edit_distance",
    "reconcile",
    "score",
    "score_page",
]
