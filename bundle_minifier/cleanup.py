"""Cleanup utilities for bundle output directories."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .errors import IOFailure
from .logsink import display_path


def clear_existing_files(paths: Iterable[Path], *, debug: bool = False) -> None:
    """Delete stale artifacts so a failed run cannot leave them behind."""

    for target in paths:
        if target.is_file():
            try:
                target.unlink()
            except OSError as exc:
                raise IOFailure(
                    "Unable to remove stale artifact"
                    f" [{display_path(target, debug)}]:"
                    f" {exc.strerror or exc}"
                ) from exc


def prepare_output_dir(
    path: Path, stale: Iterable[Path] = (), *, debug: bool = False
) -> None:
    """Ensure the output directory exists and remove stale artifacts."""

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOFailure(
            "Unable to create output directory"
            f" [{display_path(path, debug)}]: {exc.strerror or exc}"
        ) from exc
    clear_existing_files(stale, debug=debug)


def discard(path: Path) -> None:
    """Remove ``path`` if present (intermediates, partial writes)."""

    path.unlink(missing_ok=True)
