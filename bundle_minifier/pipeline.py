"""High-level orchestration for bundle merging and minification."""

from __future__ import annotations

import codecs
import concurrent.futures
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from . import naming
from .cleanup import discard
from .engines import REGISTRY, EngineRegistry
from .errors import ConfigurationError, MinifyError
from .logsink import LogSink, display_path, logging_sink
from .merge import merge
from .minify import minify
from .models import BundleResult, BundleSpec, MergedArtifact, RunState
from .report import report
from .sources import resolve_sources


class BundlePipeline:
    """Drives one bundle through merge, minify and report.

    The run moves through ``IDLE -> MERGING -> MINIFYING -> REPORTING ->
    DONE`` and lands in ``FAILED`` on the first error. Nothing is retried;
    the error is recorded on :attr:`result` and re-raised.
    """

    def __init__(
        self,
        bundle: BundleSpec,
        *,
        log: LogSink | None = None,
        registry: EngineRegistry | None = None,
    ) -> None:
        self.bundle = bundle
        self.log = log or logging_sink()
        self.registry = registry or REGISTRY
        self.result = BundleResult(bundle=bundle)

    @property
    def state(self) -> RunState:
        return self.result.state

    def run(self) -> BundleResult:
        """Process the bundle and return its result."""

        bundle = self.bundle
        self.log(logging.INFO, f"Processing bundle [{bundle.label}].", None)
        try:
            self._validate()
            if bundle.skip_merge:
                self._minify_each()
            elif bundle.skip_minify:
                self._merge_only()
            else:
                self._merge_and_minify()
        except Exception as exc:
            self._fail(exc)
            raise
        self._enter(RunState.DONE)
        return self.result

    def _enter(self, state: RunState) -> None:
        previous = self.result.state
        self.result.state = state
        self.log(
            logging.DEBUG,
            f"Bundle [{self.bundle.label}]:"
            f" {previous.value} -> {state.value}.",
            None,
        )

    def _fail(self, exc: Exception) -> None:
        stage = self.result.state
        self.result.failed_stage = stage
        self.result.error = exc
        if isinstance(exc, MinifyError) and exc.stage is None:
            exc.stage = stage.value
        self._release_intermediate()
        self._enter(RunState.FAILED)
        self.log(
            logging.ERROR,
            f"Bundle [{self.bundle.label}] failed while {stage.value}: {exc}",
            exc,
        )

    def _validate(self) -> None:
        bundle = self.bundle
        if not self.registry.names(bundle.file_type):
            raise ConfigurationError(
                f"Unsupported file type [{bundle.file_type}] for bundle"
                f" [{bundle.label}]."
            )
        try:
            codecs.lookup(bundle.options.charset)
        except LookupError as exc:
            raise ConfigurationError(
                f"Unknown character encoding [{bundle.options.charset}]."
            ) from exc
        if bundle.buffer_size <= 0:
            raise ConfigurationError(
                f"Buffer size must be positive, got {bundle.buffer_size}."
            )

    def _sources(self) -> List[Path]:
        bundle = self.bundle
        return resolve_sources(
            bundle.source_root,
            files=bundle.source_files,
            includes=bundle.source_includes,
            excludes=bundle.source_excludes,
            file_type=bundle.file_type,
        )

    def _merge(self, target: Path) -> MergedArtifact:
        bundle = self.bundle
        self._enter(RunState.MERGING)
        sources = self._sources()
        merged = merge(
            sources,
            target,
            charset=bundle.options.charset,
            buffer_size=bundle.buffer_size,
            log=self.log,
            debug=bundle.debug,
        )
        self.result.merged = merged
        return merged

    def _minify_and_report(
        self, original: MergedArtifact, target: Path
    ) -> None:
        bundle = self.bundle
        self._enter(RunState.MINIFYING)
        minified = minify(
            original,
            target,
            bundle.options,
            file_type=bundle.file_type,
            log=self.log,
            debug=bundle.debug,
            registry=self.registry,
        )
        self.result.minified.append(minified)
        self._enter(RunState.REPORTING)
        self.result.reports.append(
            report(original, minified, log=self.log, debug=bundle.debug)
        )

    def _merge_and_minify(self) -> None:
        bundle = self.bundle
        merged_target = naming.merged_path(bundle)
        minified_target = naming.minified_path(bundle)
        merged = self._merge(merged_target)
        self._minify_and_report(merged, minified_target)
        self._release_intermediate()

    def _merge_only(self) -> None:
        merged = self._merge(naming.merged_path(self.bundle))
        merged.intermediate = False
        self.log(logging.INFO, "Skipping the minify step...", None)

    def _minify_each(self) -> None:
        bundle = self.bundle
        self.log(logging.INFO, "Skipping the merge step...", None)
        self._enter(RunState.MINIFYING)
        for source in self._sources():
            original = MergedArtifact(
                path=source,
                sources=(source,),
                charset=bundle.options.charset,
                intermediate=False,
            )
            target = naming.per_file_minified_path(bundle, source)
            self._minify_and_report(original, target)

    def _release_intermediate(self) -> None:
        merged = self.result.merged
        if merged is None or not merged.intermediate:
            return
        if self.bundle.keep_merged:
            return
        discard(merged.path)
        self.log(
            logging.DEBUG,
            "Removed the merged file"
            f" [{display_path(merged.path, self.bundle.debug)}].",
            None,
        )


def run(
    bundle: BundleSpec,
    *,
    log: LogSink | None = None,
    registry: EngineRegistry | None = None,
) -> BundleResult:
    """Process a single bundle."""

    return BundlePipeline(bundle, log=log, registry=registry).run()


def _check_distinct_outputs(bundles: List[BundleSpec]) -> None:
    """Refuse concurrent bundles that would write the same merged file."""

    seen: dict[Path, str] = {}
    for bundle in bundles:
        if bundle.skip_merge:
            continue
        key = naming.merged_path(bundle).resolve()
        if key in seen:
            raise ConfigurationError(
                f"Bundles [{seen[key]}] and [{bundle.label}] both write"
                f" [{key}]."
            )
        seen[key] = bundle.label


def run_all(
    bundles: Iterable[BundleSpec],
    *,
    log: LogSink | None = None,
    max_workers: int = 1,
    registry: EngineRegistry | None = None,
) -> List[BundleResult]:
    """Process bundles one after another or on a thread pool.

    Sequential runs stop at the first failing bundle. Pooled runs let every
    bundle finish and then re-raise the first failure in input order.
    """

    bundle_list = list(bundles)
    if max_workers <= 1 or len(bundle_list) <= 1:
        return [
            run(bundle, log=log, registry=registry) for bundle in bundle_list
        ]

    _check_distinct_outputs(bundle_list)
    with concurrent.futures.ThreadPoolExecutor(
        max_workers=max_workers
    ) as pool:
        futures = [
            pool.submit(run, bundle, log=log, registry=registry)
            for bundle in bundle_list
        ]
        concurrent.futures.wait(futures)

    results: List[BundleResult] = []
    first_error: Optional[BaseException] = None
    for future in futures:
        error = future.exception()
        if error is not None:
            first_error = first_error or error
            continue
        results.append(future.result())
    if first_error is not None:
        raise first_error
    return results


__all__ = ["BundlePipeline", "run", "run_all"]
