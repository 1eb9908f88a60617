from __future__ import annotations

import os
import sys
import time

from loguru import logger

import infrastructure.logging as log_helpers
from infrastructure.logging import find_latest_log_file, init_logging


def test_find_latest_log_file(tmp_path):
    older = tmp_path / "imagestream_20260101.log"
    newer = tmp_path / "imagestream_20260102.log"
    older.write_text("old")
    newer.write_text("new")
    past = time.time() - 100
    os.utime(older, (past, past))
    (tmp_path / "other.log").write_text("ignored")

    assert find_latest_log_file(str(tmp_path)) == newer


def test_find_latest_log_file_missing_dir(tmp_path):
    assert find_latest_log_file(str(tmp_path / "nope")) is None


def test_init_logging_creates_directory(tmp_path):
    target = tmp_path / "logs"
    assert init_logging(str(target)) == target
    assert target.is_dir()
    logger.remove()
    logger.add(sys.stderr)


def test_open_helpers_use_configured_directory(tmp_path, monkeypatch):
    configured = tmp_path / "configured"
    log_path = init_logging(str(configured))
    logger.info("hello")
    logger.complete()
    opened = []
    monkeypatch.setattr(log_helpers, "open_in_default_app", lambda p: opened.append(p) or True)

    try:
        assert log_helpers.open_latest_log(str(log_path))
        assert log_helpers.open_log_directory(str(log_path))
    finally:
        logger.remove()
        logger.add(sys.stderr)

    assert os.path.dirname(opened[0]) == str(configured)
    assert os.path.basename(opened[0]).startswith("imagestream_")
    assert opened[1] == str(configured)
