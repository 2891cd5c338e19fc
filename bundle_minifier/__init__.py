"""Merge JavaScript/CSS sources into bundles and minify them."""

from .engines import Engine, EngineRegistry, select_engine
from .errors import (
    CompressionError,
    ConfigurationError,
    IOFailure,
    MinifyError,
)
from .logsink import LogSink, logging_sink
from .merge import merge
from .minify import minify
from .models import (
    BundleResult,
    BundleSpec,
    CompressionReport,
    EngineOptions,
    MergedArtifact,
    MinifiedArtifact,
    RunState,
)
from .pipeline import BundlePipeline, run, run_all
from .report import report
from .sources import resolve_sources

__all__ = [
    "BundlePipeline",
    "BundleResult",
    "BundleSpec",
    "CompressionError",
    "CompressionReport",
    "ConfigurationError",
    "Engine",
    "EngineOptions",
    "EngineRegistry",
    "IOFailure",
    "LogSink",
    "MergedArtifact",
    "MinifiedArtifact",
    "MinifyError",
    "RunState",
    "logging_sink",
    "merge",
    "minify",
    "report",
    "resolve_sources",
    "run",
    "run_all",
    "select_engine",
]
