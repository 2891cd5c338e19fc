"""Run a merged artifact through the selected compressor engine."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from pathlib import Path

from .cleanup import discard, prepare_output_dir
from .engines import EngineRegistry, select_engine
from .errors import CompressionError, ConfigurationError, IOFailure
from .logsink import LogSink, display_path, null_sink
from .models import EngineOptions, MergedArtifact, MinifiedArtifact

FILE_TYPE_LABELS = {
    "js": "JavaScript",
    "css": "CSS",
}


def minify(
    merged: MergedArtifact,
    target: Path | str,
    options: EngineOptions,
    *,
    file_type: str = "js",
    log: LogSink = null_sink,
    debug: bool = False,
    registry: EngineRegistry | None = None,
) -> MinifiedArtifact:
    """Compress ``merged`` into ``target`` with the configured engine.

    The engine is resolved before any file is touched. Both streams are
    released on every exit path, and a partially written ``target`` is
    removed before the failure propagates.
    """

    engine = select_engine(
        options.engine, file_type=file_type, registry=registry
    )
    target = Path(target)
    if target.resolve() == merged.path.resolve():
        raise ConfigurationError(
            f"Refusing to minify [{display_path(target, debug)}] onto itself."
        )

    log(
        logging.INFO,
        f"Creating the minified file [{display_path(target, debug)}].",
        None,
    )
    log(logging.DEBUG, f"Using {engine.label} engine.", None)

    prepared = False
    try:
        prepare_output_dir(target.parent, (target,), debug=debug)
        prepared = True
        with ExitStack() as stack:
            source = stack.enter_context(merged.path.open("rb"))
            sink = stack.enter_context(target.open("wb"))
            engine.compress(source, sink, options, log=log)
    except (CompressionError, IOFailure, OSError) as exc:
        if prepared:
            discard(target)
        kind = FILE_TYPE_LABELS.get(file_type, file_type)
        log(
            logging.ERROR,
            f"Failed to compress the {kind} file"
            f" [{display_path(merged.path, debug)}].",
            exc,
        )
        if isinstance(exc, OSError):
            raise IOFailure(
                f"Unable to minify [{display_path(merged.path, debug)}]"
                f" into [{display_path(target, debug)}]:"
                f" {exc.strerror or exc}"
            ) from exc
        raise

    return MinifiedArtifact(
        path=target, source=merged.path, engine=engine.name
    )


__all__ = ["FILE_TYPE_LABELS", "minify"]
