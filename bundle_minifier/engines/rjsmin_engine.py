"""General-purpose JavaScript compressor backed by rjsmin.

Strips comments and redundant whitespace without parsing the program.

Honored options: ``line_break``, ``verbose``, ``charset`` and
``disable_optimizations`` (keeps ``/*! ... */`` license comments).
Ignored: ``munge``, ``preserve_semicolons``.
"""

from __future__ import annotations

import logging

try:
    import rjsmin  # type: ignore[import-untyped]
except ImportError as exc:  # pragma: no cover - surfaced at runtime
    raise SystemExit(
        "Missing dependency 'rjsmin'. Install with pip install rjsmin"
    ) from exc

from ..logsink import LogSink
from ..models import EngineOptions
from .base import Engine


class RJSMinEngine(Engine):
    """Whitespace and comment stripping for JavaScript."""

    name = "rjsmin"
    file_type = "js"
    label = "rJSmin"

    def transform(
        self, text: str, options: EngineOptions, log: LogSink
    ) -> str:
        if options.verbose and options.munge:
            log(
                logging.INFO,
                "rJSmin does not rename identifiers; munge is ignored.",
                None,
            )
        return rjsmin.jsmin(
            text, keep_bang_comments=options.disable_optimizations
        )
