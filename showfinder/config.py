"""
config.py - Configuration model for Showfinder
"""

from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from rich.console import Console
import sys

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

from showfinder.search.response_cache import DEFAULT_CACHE_SIZE
from showfinder.search.types import DEFAULT_FALLBACK_LANGUAGE

console = Console(stderr=True)

TMDB_API_URL = "https://api.themoviedb.org/3"


class APIKeysConfig(BaseModel):
    tmdb_key: str = ""


class TmdbConfig(BaseModel):
    url: str = TMDB_API_URL
    timeout: int = Field(default=10, ge=1)
    max_concurrency: int = Field(default=3, ge=1)
    min_interval_seconds: float = Field(
        default=0.05,
        ge=0.0,
        description="Minimum spacing between two calls to the same TMDB server"
    )


class SearchConfig(BaseModel):
    """Parameters of the show search engine."""

    language: str = Field(
        default=DEFAULT_FALLBACK_LANGUAGE,
        description="ISO 639-1 language searched first"
    )
    fallback_language: str = Field(
        default=DEFAULT_FALLBACK_LANGUAGE,
        description="Secondary language searched when the requested one differs"
    )
    cache_size: int = Field(
        default=DEFAULT_CACHE_SIZE,
        ge=1,
        description="Number of raw search responses kept in the LRU cache"
    )
    result_limit: int = Field(
        default=-1,
        description="Maximum number of ranked candidates; negative means unlimited"
    )

    @field_validator("language", "fallback_language")
    @classmethod
    def _normalize_language(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("language code must not be empty")
        return value


class ShowfinderConfig(BaseModel):
    api_keys: APIKeysConfig = Field(default_factory=APIKeysConfig)
    tmdb: TmdbConfig = Field(default_factory=TmdbConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    config_path: Optional[Path] = None


def load_config(config_path: Path) -> ShowfinderConfig:
    """Load configuration from TOML file"""

    if not config_path.exists():
        console.print(f"[red][ERROR][/red] Configuration file not found: {config_path}")
        console.print("Please create config.toml with your TMDB API key")
        sys.exit(1)

    try:
        with open(config_path, "rb") as f:
            config_data = tomllib.load(f)

        config = ShowfinderConfig(
            api_keys=APIKeysConfig(**config_data.get("api_keys", {})),
            tmdb=TmdbConfig(**config_data.get("tmdb", {})),
            search=SearchConfig(**config_data.get("search", {})),
            config_path=config_path
        )

        return config

    except Exception as e:
        console.print(f"[red][ERROR][/red] Error loading configuration: {e}")
        sys.exit(1)
