"""Select source files for a bundle in a deterministic order."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, Set

from .errors import ConfigurationError


def _under_root(root: Path, name: str | Path) -> Path:
    """Resolve ``name`` against ``root`` and refuse paths that escape it."""

    candidate = (root / name).resolve()
    if not candidate.is_relative_to(root):
        raise ConfigurationError(
            f"Source file [{name}] resolves outside the source root [{root}]."
        )
    return candidate


def _glob_files(root: Path, patterns: Iterable[str]) -> Set[Path]:
    """Return every regular file under ``root`` matching any pattern."""

    matched: Set[Path] = set()
    for pattern in patterns:
        for candidate in root.glob(pattern):
            if candidate.is_file():
                matched.add(candidate.resolve())
    return matched


def resolve_sources(
    source_root: Path | str,
    *,
    files: Sequence[str | Path] = (),
    includes: Sequence[str] = (),
    excludes: Sequence[str] = (),
    file_type: str = "",
) -> List[Path]:
    """Return the ordered source list for a bundle.

    Explicitly listed files come first, in the given order and with
    duplicates kept. Files matched by ``includes`` and not by ``excludes``
    follow, sorted by their path relative to the root, skipping anything
    already listed explicitly. Existence of explicit files is checked later
    by the merge stage.
    """

    root = Path(source_root).resolve()
    ordered: List[Path] = [_under_root(root, name) for name in files]

    if includes:
        listed = set(ordered)
        matched = _glob_files(root, includes) - _glob_files(root, excludes)
        for path in sorted(
            matched, key=lambda item: item.relative_to(root).as_posix()
        ):
            if path not in listed:
                ordered.append(path)

    if not ordered:
        kind = f"{file_type} " if file_type else ""
        raise ConfigurationError(
            f"No valid {kind}source files found to process under [{root}]."
        )
    return ordered


__all__ = ["resolve_sources"]
