"""Size-reduction metrics for minified artifacts."""

from __future__ import annotations

import gzip
import logging
from pathlib import Path

from .errors import IOFailure
from .logsink import LogSink, display_path, null_sink
from .models import CompressionReport, MergedArtifact, MinifiedArtifact


def percent_reduction(original_size: int, minified_size: int) -> float:
    """Return the relative saving in percent; 0.0 for an empty original."""

    if original_size <= 0:
        return 0.0
    return (original_size - minified_size) / original_size * 100


def _file_size(path: Path, debug: bool) -> int:
    try:
        return path.stat().st_size
    except OSError as exc:
        raise IOFailure(
            f"Unable to stat [{display_path(path, debug)}]:"
            f" {exc.strerror or exc}"
        ) from exc


def _gzipped_size(path: Path, debug: bool) -> int:
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise IOFailure(
            f"Unable to read [{display_path(path, debug)}]:"
            f" {exc.strerror or exc}"
        ) from exc
    return len(gzip.compress(payload, mtime=0))


def report(
    original: MergedArtifact,
    minified: MinifiedArtifact,
    *,
    log: LogSink = null_sink,
    debug: bool = False,
) -> CompressionReport:
    """Compare ``original`` with ``minified`` and log the gains."""

    original_size = _file_size(original.path, debug)
    minified_size = _file_size(minified.path, debug)
    result = CompressionReport(
        original_size=original_size,
        minified_size=minified_size,
        gzipped_size=_gzipped_size(minified.path, debug),
        percent_reduction=percent_reduction(original_size, minified_size),
    )
    log(
        logging.INFO,
        f"Uncompressed size: {result.original_size} bytes."
        f" Compressed size: {result.minified_size} bytes minified"
        f" ({result.gzipped_size} bytes gzipped,"
        f" {result.percent_reduction:.2f}% reduction).",
        None,
    )
    return result


__all__ = ["percent_reduction", "report"]
