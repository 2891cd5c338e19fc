"""Shared dataclasses for bundle merging and minification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

DEFAULT_BUFFER_SIZE = 4096
DEFAULT_CHARSET = "utf-8"
DEFAULT_SUFFIX = ".min"
DEFAULT_OUTPUT_FILENAMES = {
    "js": "script.js",
    "css": "style.css",
}


@dataclass(slots=True)
class EngineOptions:
    """Options handed verbatim to whichever engine is selected.

    Engines ignore the fields they do not support; see each engine module
    for the options it honors.
    """

    engine: Optional[str] = None
    line_break: int = -1
    munge: bool = True
    verbose: bool = False
    preserve_semicolons: bool = False
    disable_optimizations: bool = False
    charset: str = DEFAULT_CHARSET


@dataclass(slots=True)
class MergedArtifact:
    """A merged file, or a single source standing in for one."""

    path: Path
    sources: Tuple[Path, ...]
    charset: str = DEFAULT_CHARSET
    intermediate: bool = True


@dataclass(slots=True)
class MinifiedArtifact:
    """The compressed output written by the minify stage."""

    path: Path
    source: Path
    engine: str


@dataclass(frozen=True, slots=True)
class CompressionReport:
    """Size metrics comparing an input artifact with its minified output."""

    original_size: int
    minified_size: int
    gzipped_size: int
    percent_reduction: float


@dataclass(slots=True)
class BundleSpec:
    """Inputs controlling one output group."""

    source_root: Path
    output_dir: Path
    file_type: str = "js"
    name: Optional[str] = None
    output_filename: Optional[str] = None
    source_files: List[str] = field(default_factory=list)
    source_includes: List[str] = field(default_factory=list)
    source_excludes: List[str] = field(default_factory=list)
    suffix: str = DEFAULT_SUFFIX
    nosuffix: bool = False
    skip_merge: bool = False
    skip_minify: bool = False
    keep_merged: bool = False
    debug: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE
    options: EngineOptions = field(default_factory=EngineOptions)

    def __post_init__(self) -> None:
        self.source_root = Path(self.source_root)
        self.output_dir = Path(self.output_dir)
        if not self.output_filename:
            self.output_filename = DEFAULT_OUTPUT_FILENAMES.get(
                self.file_type, f"bundle.{self.file_type}"
            )

    @property
    def label(self) -> str:
        """Name used to identify the bundle in log output."""

        return self.name or str(self.output_filename)


class RunState(Enum):
    """Lifecycle of a single bundle run."""

    IDLE = "idle"
    MERGING = "merging"
    MINIFYING = "minifying"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class BundleResult:
    """Outcome of a bundle run, including where it stopped on failure."""

    bundle: BundleSpec
    state: RunState = RunState.IDLE
    failed_stage: Optional[RunState] = None
    error: Optional[BaseException] = None
    merged: Optional[MergedArtifact] = None
    minified: List[MinifiedArtifact] = field(default_factory=list)
    reports: List[CompressionReport] = field(default_factory=list)
