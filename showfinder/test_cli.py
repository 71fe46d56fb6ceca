from __future__ import annotations

import argparse

import pytest

from showfinder import cli
from showfinder.config import APIKeysConfig, ShowfinderConfig
from showfinder.search.types import SearchOutcome, SearchStatus, ShowSearchResult


def test_ui_info_warn_error_emit_prefixed_messages(monkeypatch: pytest.MonkeyPatch) -> None:
    lines: list[str] = []
    monkeypatch.setattr(cli.err_console, "print", lambda msg, *_args, **_kwargs: lines.append(str(msg)))

    cli._ui_info("hello")
    cli._ui_warn("careful")
    cli._ui_error("boom")

    assert lines == [
        "[cyan][INFO][/cyan] hello",
        "[yellow][WARNING][/yellow] careful",
        "[red][ERROR][/red] boom",
    ]


@pytest.mark.parametrize(
    ("key", "expected"),
    [("", "(not set)"), ("short", "*****"), ("abcdefghijkl", "abcd...ijkl")],
)
def test_redact_api_key(key: str, expected: str) -> None:
    assert cli.redact_api_key(key) == expected


@pytest.mark.parametrize(("seconds", "expected"), [(4.31, "4.3s"), (75.0, "1m15s")])
def test_format_elapsed_runtime(seconds: float, expected: str) -> None:
    assert cli._format_elapsed_runtime(seconds) == expected


def test_build_parser_reads_search_flags() -> None:
    args = cli.build_parser().parse_args(
        ["-l", "fr", "-s", "2", "-e", "5", "-n", "3", "--json", "Le Bureau"]
    )

    assert args.show_name == "Le Bureau"
    assert (args.language, args.season, args.episode, args.limit) == ("fr", 2, 5, 3)
    assert args.json is True
    assert args.debug is False


def test_resolve_config_path_accepts_directory(tmp_path) -> None:
    assert cli.resolve_config_path(str(tmp_path)) == tmp_path / "config.toml"


def _args(**overrides) -> argparse.Namespace:
    args = cli.build_parser().parse_args(["Lost"])
    for key, value in overrides.items():
        setattr(args, key, value)
    return args


def test_run_search_requires_tmdb_key(monkeypatch: pytest.MonkeyPatch) -> None:
    lines: list[str] = []
    monkeypatch.setattr(cli.err_console, "print", lambda msg, *_args, **_kwargs: lines.append(str(msg)))

    assert cli.run_search(ShowfinderConfig(), _args()) == 1
    assert any("No TMDB key configured" in line for line in lines)


@pytest.mark.parametrize(
    ("status", "code"),
    [
        (SearchStatus.OK, 0),
        (SearchStatus.NOT_FOUND, 0),
        (SearchStatus.AUTH_ERROR, 2),
        (SearchStatus.PARSE_ERROR, 3),
    ],
)
def test_run_search_maps_status_to_exit_code(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], status: SearchStatus, code: int
) -> None:
    seen: dict = {}
    results = (ShowSearchResult(4607, "Lost", "en"),) if status is SearchStatus.OK else ()

    async def _fake_run(config, query, **kwargs):
        seen["query"] = query
        seen["kwargs"] = kwargs
        return SearchOutcome(status, results=results)

    monkeypatch.setattr(cli, "run_show_search", _fake_run)
    config = ShowfinderConfig(api_keys=APIKeysConfig(tmdb_key="k"))

    assert cli.run_search(config, _args(json=True, limit=2)) == code
    assert seen["query"].show_name == "Lost"
    assert seen["kwargs"]["result_limit"] == 2
    assert seen["kwargs"]["quiet"] is True
    assert f'"status": "{status.value}"' in capsys.readouterr().out
