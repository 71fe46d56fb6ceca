from __future__ import annotations

import json
from dataclasses import asdict

from rich.table import Table

from showfinder.search.types import SearchOutcome, SearchQuery, SearchStatus

STATUS_STYLES = {
    SearchStatus.OK: "green",
    SearchStatus.NOT_FOUND: "yellow",
    SearchStatus.AUTH_ERROR: "red",
    SearchStatus.PARSE_ERROR: "red",
}


def format_status(outcome: SearchOutcome) -> str:
    style = STATUS_STYLES[outcome.status]
    label = outcome.status.value.upper()
    if outcome.reason is not None:
        return f"[{style}]{label}[/{style}] ({type(outcome.reason).__name__}: {outcome.reason})"
    return f"[{style}]{label}[/{style}]"


def build_results_table(query: SearchQuery, outcome: SearchOutcome) -> Table:
    table = Table(title=f"Candidates for '{query.show_name}'")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("TMDB ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Lang", no_wrap=True)
    table.add_column("Poster", style="dim")
    for idx, result in enumerate(outcome.results, start=1):
        table.add_row(str(idx), str(result.id), result.title, result.language, result.poster_path or "")
    return table


def outcome_to_dict(query: SearchQuery, outcome: SearchOutcome) -> dict:
    return {
        "query": asdict(query),
        "status": outcome.status.value,
        "reason": str(outcome.reason) if outcome.reason is not None else None,
        "results": [asdict(result) for result in outcome.results],
    }


def outcome_to_json(query: SearchQuery, outcome: SearchOutcome) -> str:
    return json.dumps(outcome_to_dict(query, outcome), indent=2, ensure_ascii=False)
