"""Concatenate source files into a single merged artifact."""

from __future__ import annotations

import codecs
import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Sequence

from .cleanup import discard, prepare_output_dir
from .errors import ConfigurationError, IOFailure
from .logsink import LogSink, display_path, null_sink
from .models import DEFAULT_BUFFER_SIZE, DEFAULT_CHARSET, MergedArtifact


def decoder_factory(charset: str) -> Callable[[], codecs.IncrementalDecoder]:
    """Return the incremental decoder class for ``charset``."""

    try:
        return codecs.getincrementaldecoder(charset)
    except LookupError as exc:
        raise ConfigurationError(
            f"Unknown character encoding [{charset}]."
        ) from exc


def _append(
    source: Path,
    out: BinaryIO,
    *,
    charset: str,
    buffer_size: int,
    new_decoder: Callable[[], codecs.IncrementalDecoder],
    debug: bool,
) -> None:
    """Copy ``source`` into ``out`` byte for byte, validating its encoding."""

    decoder = new_decoder()
    try:
        with source.open("rb") as handle:
            for chunk in iter(lambda: handle.read(buffer_size), b""):
                decoder.decode(chunk)
                out.write(chunk)
        decoder.decode(b"", final=True)
    except UnicodeDecodeError as exc:
        raise IOFailure(
            f"Source file [{display_path(source, debug)}] is not valid"
            f" {charset}: {exc.reason}"
        ) from exc
    except OSError as exc:
        raise IOFailure(
            f"Unable to copy source file [{display_path(source, debug)}]:"
            f" {exc.strerror or exc}"
        ) from exc


def merge(
    sources: Sequence[Path | str],
    target: Path | str,
    *,
    charset: str = DEFAULT_CHARSET,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    log: LogSink = null_sink,
    debug: bool = False,
) -> MergedArtifact:
    """Write the ordered concatenation of ``sources`` to ``target``.

    Files are joined without any separator, so the merged size is exactly
    the sum of the source sizes. The output is assembled in a temporary file
    and renamed into place only once every source has been copied; on
    failure nothing is left at ``target``.
    """

    if not sources:
        raise ConfigurationError("Cannot merge an empty set of source files.")
    if buffer_size <= 0:
        raise ConfigurationError(
            f"Buffer size must be positive, got {buffer_size}."
        )
    new_decoder = decoder_factory(charset)

    target = Path(target)
    paths = tuple(Path(source) for source in sources)
    prepare_output_dir(target.parent, (target,), debug=debug)

    log(
        logging.INFO,
        f"Creating the merged file [{display_path(target, debug)}].",
        None,
    )

    try:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".part", dir=target.parent
        )
    except OSError as exc:
        raise IOFailure(
            f"Unable to create the merged file"
            f" [{display_path(target, debug)}]: {exc.strerror or exc}"
        ) from exc

    temp_path = Path(temp_name)
    try:
        try:
            with os.fdopen(fd, "wb") as out:
                for path in paths:
                    log(
                        logging.DEBUG,
                        "Processing source file"
                        f" [{display_path(path, debug)}].",
                        None,
                    )
                    _append(
                        path,
                        out,
                        charset=charset,
                        buffer_size=buffer_size,
                        new_decoder=new_decoder,
                        debug=debug,
                    )
            os.replace(temp_path, target)
        except OSError as exc:
            raise IOFailure(
                f"Unable to write the merged file"
                f" [{display_path(target, debug)}]: {exc.strerror or exc}"
            ) from exc
    except BaseException:
        discard(temp_path)
        raise

    return MergedArtifact(path=target, sources=paths, charset=charset)


__all__ = ["merge"]
