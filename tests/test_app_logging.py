from __future__ import annotations

import json
import logging
from pathlib import Path

from bhashasetu.app import config as app_config
from bhashasetu.app.logging_setup import setup_app_logger


def _read_lines(log_path: Path) -> list[dict]:
    return [json.loads(ln) for ln in log_path.read_text(encoding="utf-8").splitlines() if ln.strip()]


def _close(logger: logging.Logger) -> None:
    for h in logger.handlers:
        h.close()
    logger.handlers.clear()


def test_setup_app_logger_writes_json_line(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(app_config, "user_config_dir", lambda appname, appauthor=None: str(tmp_path))
    logger, log_dir, log_path = setup_app_logger("bhashasetu.test")

    logger.info("hello", extra={"event": "test_event", "value": 7})
    for h in logger.handlers:
        h.flush()

    assert log_dir.exists()
    assert log_path.exists()
    payload = _read_lines(log_path)[-1]
    assert payload["message"] == "hello"
    assert payload["event"] == "test_event"
    assert payload["value"] == 7
    assert payload["level"] == "INFO"

    _close(logger)


def test_child_loggers_propagate_structured_fields(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(app_config, "user_config_dir", lambda appname, appauthor=None: str(tmp_path))
    logger, _log_dir, log_path = setup_app_logger("bhashasetu.test_child")

    logging.getLogger("bhashasetu.test_child.engine").info(
        "stale_result_dropped", extra={"epoch": 3, "stage": "translation"}
    )
    for h in logger.handlers:
        h.flush()

    payload = _read_lines(log_path)[-1]
    assert payload["logger"] == "bhashasetu.test_child.engine"
    assert payload["message"] == "stale_result_dropped"
    assert payload["epoch"] == 3
    assert payload["stage"] == "translation"

    _close(logger)


def test_debug_flag_sets_level(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(app_config, "user_config_dir", lambda appname, appauthor=None: str(tmp_path))
    logger, _log_dir, _log_path = setup_app_logger("bhashasetu.test_debug", debug=True)
    assert logger.level == logging.DEBUG
    _close(logger)


def test_console_formatter_appends_extras() -> None:
    from bhashasetu.app.logging_setup import ConsoleEventFormatter

    record = logging.LogRecord("bhashasetu.live", logging.INFO, __file__, 1, "capture_started", (), None)
    record.generation = 2
    record.interval_ms = 1500
    line = ConsoleEventFormatter().format(record)
    assert line == "info    bhashasetu.live: capture_started generation=2 interval_ms=1500"
