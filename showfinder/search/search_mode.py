"""One-shot show search run: logger setup, TMDB adapter lifecycle, dispatch."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from showfinder import logger
from showfinder.config import ShowfinderConfig
from showfinder.search.dispatcher import SearchDispatcher
from showfinder.search.protocols import ShowSearchService
from showfinder.search.response_cache import ResponseCache
from showfinder.search.tmdb_client import TmdbServiceAdapter
from showfinder.search.types import SearchOutcome, SearchQuery


def _next_run_path(output_dir: Path = Path(".")) -> Path:
    """Find next available showfinderN.log path in output directory."""
    output_dir.mkdir(parents=True, exist_ok=True)

    max_num = 0
    for path in output_dir.glob("showfinder*.log"):
        try:
            num = int(path.stem[len("showfinder"):])
            max_num = max(max_num, num)
        except ValueError:
            pass

    return output_dir / f"showfinder{max_num + 1}.log"


def build_query(
    config: ShowfinderConfig,
    show_name: str,
    *,
    language: Optional[str] = None,
    season: Optional[int] = None,
    episode: Optional[int] = None,
    source_file: Optional[str] = None,
) -> SearchQuery:
    return SearchQuery(
        show_name=show_name.strip(),
        language=(language or config.search.language).strip(),
        fallback_language=config.search.fallback_language,
        season=season,
        episode=episode,
        source_file=source_file,
    )


async def run_show_search(
    config: ShowfinderConfig,
    query: SearchQuery,
    *,
    result_limit: Optional[int] = None,
    debug: bool = False,
    quiet: bool = False,
    output_dir: Optional[Path] = None,
    service: Optional[ShowSearchService] = None,
    cache: Optional[ResponseCache] = None,
) -> SearchOutcome:
    """Run one search end to end and return its outcome."""
    log_path = _next_run_path(output_dir) if output_dir is not None else None
    log_instance = logger.ShowfinderLogger(log_path, debug=debug, quiet=quiet)
    logger.set_logger(log_instance)

    owned_service: Optional[TmdbServiceAdapter] = None
    if service is None:
        owned_service = TmdbServiceAdapter(config.api_keys.tmdb_key, config.tmdb)
        service = owned_service

    dispatcher = SearchDispatcher(
        service,
        cache if cache is not None else ResponseCache(config.search.cache_size),
    )
    limit = config.search.result_limit if result_limit is None else result_limit
    try:
        outcome = await dispatcher.search(query, limit)
        log_instance.info(
            f"Search for '{query.show_name}' in {query.language}: "
            f"{outcome.status.value}, {len(outcome.results)} candidate(s)"
        )
        return outcome
    finally:
        if owned_service is not None:
            await owned_service.close()
        log_instance.close()
