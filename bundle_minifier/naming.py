"""Deterministic output names for merged and minified artifacts."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import ConfigurationError
from .models import BundleSpec

TEMP_SUFFIX = ".tmp"


def minified_name(filename: str, suffix: str, nosuffix: bool) -> str:
    """Insert ``suffix`` before the extension unless ``nosuffix`` is set.

    >>> minified_name("app.js", ".min", False)
    'app.min.js'
    """

    if nosuffix:
        return filename
    stem, extension = os.path.splitext(filename)
    return f"{stem}{suffix}{extension}"


def merged_path(bundle: BundleSpec) -> Path:
    """Return where the merged artifact for ``bundle`` is written.

    When the minified file takes the plain output name, the merged file is
    parked under a temporary name next to it.
    """

    filename = str(bundle.output_filename)
    if bundle.nosuffix and not bundle.skip_minify:
        filename += TEMP_SUFFIX
    return bundle.output_dir / filename


def minified_path(bundle: BundleSpec) -> Path:
    """Return where the minified artifact for ``bundle`` is written."""

    target = bundle.output_dir / minified_name(
        str(bundle.output_filename), bundle.suffix, bundle.nosuffix
    )
    if target == merged_path(bundle):
        raise ConfigurationError(
            f"Bundle [{bundle.label}] would write its minified output over"
            " the merged file; set a non-empty suffix or nosuffix."
        )
    return target


def per_file_minified_path(bundle: BundleSpec, source: Path) -> Path:
    """Mirror ``source``'s sub-directory under the output directory."""

    root = bundle.source_root.resolve()
    resolved = source.resolve()
    relative = resolved.relative_to(root)
    target = (
        bundle.output_dir
        / relative.parent
        / minified_name(relative.name, bundle.suffix, bundle.nosuffix)
    )
    if target.resolve() == resolved:
        raise ConfigurationError(
            f"Minifying [{relative}] would overwrite the source file;"
            " choose another output directory or a suffix."
        )
    return target


__all__ = [
    "TEMP_SUFFIX",
    "merged_path",
    "minified_name",
    "minified_path",
    "per_file_minified_path",
]
