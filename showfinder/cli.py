#!/usr/bin/env python3
"""
cli.py - Entry point for SHOWFINDER
Search a TV show on TMDB and rank the candidates across languages.
"""

try:
    import asyncio
    import sys
    import argparse
    import time
    from pathlib import Path
    from rich.console import Console
    from typing import Optional
    import showfinder as pkg
    from .config import ShowfinderConfig, load_config
    from .api_verification import verify_api_keys
    from .search.formatters import build_results_table, format_status, outcome_to_json
    from .search.search_mode import build_query, run_show_search
    from .search.types import SearchOutcome, SearchQuery, SearchStatus
except ImportError as e:
    print(f"Error: Missing required dependency: {e}")
    print("Please install required dependencies: pip install -e .")
    sys.exit(1)

console = Console()
err_console = Console(stderr=True)
_CLI_SESSION_START_MONOTONIC = time.monotonic()

EXIT_CODES = {
    SearchStatus.OK: 0,
    SearchStatus.NOT_FOUND: 0,
    SearchStatus.AUTH_ERROR: 2,
    SearchStatus.PARSE_ERROR: 3,
}


def _ui_info(message: str) -> None:
    err_console.print(f"[cyan][INFO][/cyan] {message}")


def _ui_warn(message: str) -> None:
    err_console.print(f"[yellow][WARNING][/yellow] {message}")


def _ui_error(message: str) -> None:
    err_console.print(f"[red][ERROR][/red] {message}")


def _reset_cli_session_timer() -> None:
    global _CLI_SESSION_START_MONOTONIC
    _CLI_SESSION_START_MONOTONIC = time.monotonic()


def _format_elapsed_runtime(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m{secs:02d}s"


def redact_api_key(key: str) -> str:
    if not key:
        return "(not set)"
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}...{key[-4:]}"


def resolve_config_path(args_config: Optional[str]) -> Path:
    if args_config:
        p = Path(args_config).expanduser()
        if p.is_dir():
            p = p / "config.toml"
        return p

    cwd_candidate = Path.cwd() / "config.toml"
    if cwd_candidate.exists():
        return cwd_candidate

    repo_root = Path(__file__).resolve().parent.parent
    root_candidate = repo_root / "config.toml"
    if root_candidate.exists() and (
        (repo_root / ".git").exists() or (repo_root / "pyproject.toml").exists()
    ):
        return root_candidate
    return cwd_candidate


def display_outcome(query: SearchQuery, outcome: SearchOutcome, *, as_json: bool = False) -> None:
    if as_json:
        print(outcome_to_json(query, outcome))
        return
    console.print(f"Status: {format_status(outcome)}")
    if outcome.results:
        console.print(build_results_table(query, outcome))
    elif outcome.status is SearchStatus.AUTH_ERROR:
        _ui_warn("TMDB rejected the credentials; run with --verify after updating config.toml.")
    else:
        _ui_info("No candidates found.")


def show_help(parser: argparse.ArgumentParser) -> None:
    print(f"SHOWFINDER v{getattr(pkg, '__version__', '0.0.0')} - Find TV shows on TMDB")
    print()
    parser.print_help()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="showfinder", add_help=False)
    for args, kwargs in (
        (("-h", "--help"), {"action": "store_true", "help": "Show help"}),
        (("--verify",), {"action": "store_true", "help": "Verify the TMDB key and exit"}),
        (("-c", "--config"), {"metavar": "PATH", "help": "Path to config.toml (file or directory)"}),
        (("-o", "--output"), {"metavar": "DIR", "help": "Write a run log to this directory"}),
        (("-l", "--language"), {"metavar": "LANG", "help": "ISO 639-1 search language (default from config)"}),
        (("-s", "--season"), {"type": int, "metavar": "N", "help": "Season number to carry on the results"}),
        (("-e", "--episode"), {"type": int, "metavar": "N", "help": "Episode number to carry on the results"}),
        (("-f", "--file"), {"metavar": "PATH", "help": "Source file the search is for"}),
        (("-n", "--limit"), {"type": int, "metavar": "N", "help": "Maximum number of candidates (negative: no limit)"}),
        (("-d", "--debug"), {"action": "store_true", "help": "Debug mode with API calls, JSON responses, timestamps"}),
        (("--json",), {"action": "store_true", "help": "Print the outcome as JSON"}),
    ):
        parser.add_argument(*args, **kwargs)
    parser.add_argument('show_name', nargs='?', help='Show name to search for')
    return parser


def run_search(config: ShowfinderConfig, args: argparse.Namespace) -> int:
    if not config.api_keys.tmdb_key:
        _ui_error("No TMDB key configured ([api_keys] tmdb_key).")
        return 1
    query = build_query(
        config,
        args.show_name,
        language=args.language,
        season=args.season,
        episode=args.episode,
        source_file=args.file,
    )
    output_dir = Path(args.output).expanduser() if args.output else None
    outcome = asyncio.run(
        run_show_search(
            config,
            query,
            result_limit=args.limit,
            debug=args.debug,
            quiet=args.json and not args.debug,
            output_dir=output_dir,
        )
    )
    display_outcome(query, outcome, as_json=args.json)
    return EXIT_CODES[outcome.status]


def main():
    """Entry point"""
    _reset_cli_session_timer()
    parser = build_parser()

    try:
        args = parser.parse_args()
        if args.help:
            show_help(parser)
            sys.exit(0)

        config = load_config(resolve_config_path(args.config))

        if args.verify:
            _ui_info(f"Verifying TMDB key {redact_api_key(config.api_keys.tmdb_key)}")
            result = asyncio.run(verify_api_keys(config))
            sys.exit(0 if result else 1)

        if not args.show_name or not args.show_name.strip():
            show_help(parser)
            sys.exit(1)

        exit_code = run_search(config, args)
        if not args.json:
            elapsed = time.monotonic() - _CLI_SESSION_START_MONOTONIC
            _ui_info(f"Done in {_format_elapsed_runtime(elapsed)}")
        sys.exit(exit_code)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        _ui_error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
