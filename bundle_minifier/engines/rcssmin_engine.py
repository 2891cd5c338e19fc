"""CSS compressor backed by rcssmin.

Honored options: ``line_break`` (breaks after ``}``), ``verbose``,
``charset`` and ``disable_optimizations`` (keeps ``/*! ... */`` comments).
Ignored: ``munge``, ``preserve_semicolons``.
"""

from __future__ import annotations

try:
    import rcssmin  # type: ignore[import-untyped]
except ImportError as exc:  # pragma: no cover - surfaced at runtime
    raise SystemExit(
        "Missing dependency 'rcssmin'. Install with pip install rcssmin"
    ) from exc

from ..logsink import LogSink
from ..models import EngineOptions
from .base import Engine


class RCSSMinEngine(Engine):
    """Whitespace and comment stripping for stylesheets."""

    name = "rcssmin"
    file_type = "css"
    label = "rCSSmin"
    break_after = "}"
    regex_literals = False
    line_comments = False

    def transform(
        self, text: str, options: EngineOptions, log: LogSink
    ) -> str:
        return rcssmin.cssmin(
            text, keep_bang_comments=options.disable_optimizations
        )
