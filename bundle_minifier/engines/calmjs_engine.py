"""Compiler-style JavaScript minifier backed by calmjs.parse.

The source is parsed into an ES5 syntax tree and printed back in minified
form, so malformed programs are rejected instead of passed through.

Honored options: ``munge`` (renames local identifiers),
``preserve_semicolons``, ``line_break``, ``verbose``, ``charset``.
Ignored: ``disable_optimizations``.
"""

from __future__ import annotations

import logging

try:
    from calmjs.parse import es5  # type: ignore[import-untyped]
    from calmjs.parse.exceptions import (  # type: ignore[import-untyped]
        ECMASyntaxError,
    )
    from calmjs.parse.unparsers.es5 import (  # type: ignore[import-untyped]
        minify_print,
    )
except ImportError as exc:  # pragma: no cover - surfaced at runtime
    raise SystemExit(
        "Missing dependency 'calmjs.parse'. Install with pip install"
        " calmjs.parse"
    ) from exc

from ..logsink import LogSink
from ..models import EngineOptions
from .base import Engine


class CalmJSEngine(Engine):
    """Parse-and-reprint minification with optional identifier munging."""

    name = "calmjs"
    file_type = "js"
    label = "calmjs.parse"
    failures = (ECMASyntaxError,)

    def transform(
        self, text: str, options: EngineOptions, log: LogSink
    ) -> str:
        if options.verbose:
            log(
                logging.INFO,
                f"calmjs.parse: munge={options.munge},"
                f" preserve_semicolons={options.preserve_semicolons}.",
                None,
            )
        program = es5(text)
        return minify_print(
            program,
            obfuscate=options.munge,
            obfuscate_globals=False,
            drop_semi=not options.preserve_semicolons,
        )
