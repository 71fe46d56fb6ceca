from __future__ import annotations

import pytest

from showfinder.config import ShowfinderConfig, load_config


def test_defaults_match_engine_constants() -> None:
    config = ShowfinderConfig()

    assert config.search.fallback_language == "en"
    assert config.search.cache_size == 20
    assert config.search.result_limit == -1
    assert config.tmdb.url == "https://api.themoviedb.org/3"
    assert config.api_keys.tmdb_key == ""


def test_load_config_reads_all_sections(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                "[api_keys]",
                'tmdb_key = "abc"',
                "[tmdb]",
                "timeout = 5",
                "[search]",
                'language = " fr "',
                "cache_size = 50",
                "result_limit = 10",
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.api_keys.tmdb_key == "abc"
    assert config.tmdb.timeout == 5
    assert config.search.language == "fr"
    assert config.search.fallback_language == "en"
    assert config.search.cache_size == 50
    assert config.search.result_limit == 10
    assert config.config_path == path


def test_load_config_missing_file_exits(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        load_config(tmp_path / "absent.toml")

    assert excinfo.value.code == 1


@pytest.mark.parametrize(
    "body",
    [
        "[search]\ncache_size = 0\n",
        '[search]\nfallback_language = "  "\n',
        "not toml = = =\n",
    ],
)
def test_load_config_invalid_values_exit(tmp_path, body: str) -> None:
    path = tmp_path / "config.toml"
    path.write_text(body, encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        load_config(path)

    assert excinfo.value.code == 1
