"""Shared data structures for the show search engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

DEFAULT_FALLBACK_LANGUAGE = "en"


@dataclass(frozen=True)
class SearchQuery:
    """What the caller is looking for, fixed for the duration of one search."""

    show_name: str
    language: str
    fallback_language: str = DEFAULT_FALLBACK_LANGUAGE
    season: Optional[int] = None
    episode: Optional[int] = None
    source_file: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.show_name, str) or not self.show_name.strip():
            raise ValueError("Show name must be a non-empty string")
        if not self.language or not self.fallback_language:
            raise ValueError("Language codes must be non-empty")

    @property
    def needs_fallback(self) -> bool:
        return self.language != self.fallback_language

    def describe(self) -> str:
        items = [f"name='{self.show_name}'", f"language={self.language}"]
        if self.season is not None:
            items.append(f"season={self.season}")
        if self.episode is not None:
            items.append(f"episode={self.episode}")
        return ", ".join(items)


@dataclass(frozen=True)
class RawCandidate:
    """One TV show entry as returned by the remote search service."""

    id: int
    title: str
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    total_results: int = 0


@dataclass(frozen=True)
class SearchPage:
    total_results: int
    results: Tuple[RawCandidate, ...] = ()


@dataclass(frozen=True)
class ServiceResponse:
    """HTTP-like status plus the parsed page, if the service returned one."""

    status: int
    page: Optional[SearchPage] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_empty(self) -> bool:
        return self.page is None

    @property
    def is_unauthorized(self) -> bool:
        return self.status == 401

    @property
    def is_not_found(self) -> bool:
        return self.status == 404


class Bucket(str, Enum):
    PROBABLE = "probable"
    NO_POSTER = "no_poster"
    NO_BANNER = "no_banner"
    NUMERIC_SLUG = "numeric_slug"


@dataclass(frozen=True)
class ClassifiedCandidate:
    candidate: RawCandidate
    bucket: Bucket
    language: str

    @property
    def id(self) -> int:
        return self.candidate.id

    @property
    def title(self) -> str:
        return self.candidate.title


@dataclass(frozen=True)
class ScoredCandidate:
    classified: ClassifiedCandidate
    distance: int

    @property
    def id(self) -> int:
        return self.classified.id


@dataclass
class ClassifiedPage:
    """Candidates of one language split by artwork completeness."""

    language: str
    probable: list[ClassifiedCandidate] = field(default_factory=list)
    no_poster: list[ClassifiedCandidate] = field(default_factory=list)
    no_banner: list[ClassifiedCandidate] = field(default_factory=list)
    numeric_slug: list[ClassifiedCandidate] = field(default_factory=list)

    def bucket(self, bucket: Bucket) -> list[ClassifiedCandidate]:
        return {
            Bucket.PROBABLE: self.probable,
            Bucket.NO_POSTER: self.no_poster,
            Bucket.NO_BANNER: self.no_banner,
            Bucket.NUMERIC_SLUG: self.numeric_slug,
        }[bucket]


@dataclass
class ScoredPage:
    """A classified page whose probable candidates are ranked by edit distance."""

    language: str
    probable: list[ScoredCandidate] = field(default_factory=list)
    no_poster: list[ClassifiedCandidate] = field(default_factory=list)
    no_banner: list[ClassifiedCandidate] = field(default_factory=list)
    numeric_slug: list[ClassifiedCandidate] = field(default_factory=list)

    @property
    def best_distance(self) -> Optional[int]:
        if not self.probable:
            return None
        return self.probable[0].distance


@dataclass(frozen=True)
class ShowSearchResult:
    """Ranked candidate handed back to the caller."""

    id: int
    title: str
    language: str
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    source_file: Optional[str] = None


class SearchStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    AUTH_ERROR = "auth_error"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class SearchOutcome:
    status: SearchStatus
    results: Tuple[ShowSearchResult, ...] = ()
    reason: Optional[BaseException] = None

    @property
    def is_ok(self) -> bool:
        return self.status is SearchStatus.OK
