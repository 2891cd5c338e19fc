"""Tests for the log sink adapters."""

from __future__ import annotations

import logging
from pathlib import Path

from bundle_minifier.logsink import display_path, logging_sink, null_sink


def test_logging_sink_forwards_level_and_cause(caplog):
    logger = logging.getLogger("bundle_minifier.test")
    emit = logging_sink(logger)
    cause = ValueError("bad input")

    with caplog.at_level(logging.DEBUG, logger="bundle_minifier.test"):
        emit(logging.WARNING, "something odd", None)
        emit(logging.ERROR, "it broke", cause)

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.WARNING, "something odd"),
        (logging.ERROR, "it broke"),
    ]
    assert caplog.records[1].exc_info[1] is cause


def test_null_sink_accepts_anything():
    null_sink(logging.INFO, "ignored", None)


def test_display_path():
    path = Path("/srv/app/build/app.min.js")
    assert display_path(path, debug=False) == "app.min.js"
    assert display_path(path, debug=True) == str(path)
