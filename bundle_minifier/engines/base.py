"""Common adapter contract for compressor engines."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import BinaryIO, Tuple, Type

from ..errors import CompressionError
from ..linebreak import insert_line_breaks
from ..logsink import LogSink, null_sink
from ..models import EngineOptions


class Engine(ABC):
    """Adapter around a third-party compressor.

    Subclasses only implement :meth:`transform`; decoding, line wrapping,
    encoding and error wrapping happen here so every engine treats the
    streams and ``charset`` the same way. Streams are never closed by the
    engine: their lifetime belongs to the caller.
    """

    name: str = ""
    file_type: str = ""
    label: str = ""
    break_after: str = ";}"
    regex_literals: bool = True
    line_comments: bool = True
    # Exceptions raised by the wrapped library for malformed input.
    failures: Tuple[Type[BaseException], ...] = ()

    def compress(
        self,
        source: BinaryIO,
        target: BinaryIO,
        options: EngineOptions,
        *,
        log: LogSink = null_sink,
    ) -> None:
        """Compress everything readable from ``source`` into ``target``."""

        wrapped = (UnicodeError, LookupError, ValueError) + self.failures
        try:
            text = source.read().decode(options.charset)
            output = self.transform(text, options, log)
            if options.line_break >= 0:
                output = insert_line_breaks(
                    output,
                    options.line_break,
                    break_after=self.break_after,
                    regex_literals=self.regex_literals,
                    line_comments=self.line_comments,
                )
            payload = output.encode(options.charset)
        except CompressionError:
            raise
        except wrapped as exc:
            raise CompressionError(f"{self.label} failed: {exc}") from exc

        if options.verbose:
            log(
                logging.INFO,
                f"{self.label}: {len(text)} characters in,"
                f" {len(output)} characters out.",
                None,
            )
        target.write(payload)

    @abstractmethod
    def transform(
        self, text: str, options: EngineOptions, log: LogSink
    ) -> str:
        """Return the compressed form of ``text``."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.file_type}:{self.name}>"


__all__ = ["Engine"]
