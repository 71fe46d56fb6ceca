from __future__ import annotations

import showfinder.logger as sf_logger
from showfinder.search.response_cache import CacheStats


def _capture(monkeypatch, log: sf_logger.ShowfinderLogger) -> list[tuple[str, str]]:
    captured: list[tuple[str, str]] = []
    monkeypatch.setattr(log, "log", lambda msg, prefix="": captured.append((prefix, msg)))
    return captured


def test_debug_drops_when_debug_disabled(monkeypatch):
    log = sf_logger.ShowfinderLogger(debug=False, quiet=True)
    captured = _capture(monkeypatch, log)

    log.debug("hidden")
    log.api_wait_debug("TMDB", 0.321)

    assert captured == []


def test_api_wait_debug_emits_when_debug_enabled(monkeypatch):
    log = sf_logger.ShowfinderLogger(debug=True, quiet=True)
    captured = _capture(monkeypatch, log)

    log.api_wait_debug("TMDB", 1.234)

    assert len(captured) == 1
    prefix, msg = captured[0]
    assert "[DEBUG]" in prefix
    assert "1.234s" in msg
    assert "TMDB" in msg


def test_api_wait_logs_one_time_note_per_server(monkeypatch):
    log = sf_logger.ShowfinderLogger(debug=False, quiet=True)
    captured = _capture(monkeypatch, log)

    log.api_wait("TMDB", 1.8)
    log.api_wait("TMDB", 2.2)
    log.api_wait("OTHER", 2.0)

    assert captured == [
        ("[INFO] ", "API rate limiting active for TMDB; request pacing is enabled."),
        ("[INFO] ", "API rate limiting active for OTHER; request pacing is enabled."),
    ]


def test_api_request_redacts_api_key(monkeypatch):
    log = sf_logger.ShowfinderLogger(debug=True, quiet=True)
    captured = _capture(monkeypatch, log)

    log.api_request("GET", "https://tmdb.example/search/tv", {"query": "Lost", "api_key": "secret"})

    text = "\n".join(msg for _prefix, msg in captured)
    assert "secret" not in text
    assert '"query": "Lost"' in text


def test_cache_stats_only_in_debug(monkeypatch):
    stats = CacheStats(size=2, puts=3, hits=1, misses=2, evictions=1)

    quiet_log = sf_logger.ShowfinderLogger(debug=False, quiet=True)
    quiet_captured = _capture(monkeypatch, quiet_log)
    quiet_log.cache_stats(stats)
    assert quiet_captured == []

    log = sf_logger.ShowfinderLogger(debug=True, quiet=True)
    captured = _capture(monkeypatch, log)
    log.cache_stats(stats)
    assert len(captured) == 1
    assert "size=2, puts=3, hits=1, misses=2, evictions=1" in captured[0][1]


def test_log_writes_to_file_and_closes(tmp_path):
    out = tmp_path / "runs" / "showfinder1.log"
    log = sf_logger.ShowfinderLogger(log_file=out, debug=False, quiet=True)

    log.warning("careful")
    log.close()

    text = out.read_text(encoding="utf-8")
    assert "Started Showfinder" in text
    assert "[WARNING] careful" in text
    assert "Ended session" in text


def test_get_logger_returns_instance_set_globally(monkeypatch):
    monkeypatch.setattr(sf_logger, "_logger", None)
    log = sf_logger.ShowfinderLogger(quiet=True)

    sf_logger.set_logger(log)

    assert sf_logger.get_logger() is log
