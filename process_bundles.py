"""Merge and minify every bundle declared in the bundle configuration."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import List, Optional, Sequence

from bundle_minifier import BundleSpec, MinifyError, run_all
from bundle_minifier.logsink import logging_sink
from config_loader import ConfigError, load_bundles

LOG_FORMAT = "[%(levelname)s] %(message)s"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI switches controlling which bundles are processed."""

    parser = argparse.ArgumentParser(
        description=(
            "Merge JavaScript/CSS sources into bundles and minify them"
            " according to the bundle configuration."
        )
    )
    parser.add_argument(
        "--config",
        help=(
            "Bundle configuration file. Defaults to bundles.json or the"
            " BUNDLE_MINIFIER_CONFIG environment variable."
        ),
    )
    parser.add_argument(
        "--only",
        action="append",
        metavar="NAME",
        help="Process only the named bundle (repeatable).",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of bundles processed in parallel (default: 1).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log full file paths and per-file progress.",
    )
    parser.add_argument(
        "--skip-merge",
        action="store_true",
        help="Minify every source file on its own instead of merging.",
    )
    parser.add_argument(
        "--skip-minify",
        action="store_true",
        help="Only write the merged files.",
    )
    return parser.parse_args(argv)


def select_bundles(
    bundles: List[BundleSpec], args: argparse.Namespace
) -> List[BundleSpec]:
    """Apply CLI filters and overrides to the configured bundles."""

    if args.only:
        wanted = set(args.only)
        unknown = wanted - {bundle.label for bundle in bundles}
        if unknown:
            raise ConfigError(
                f"Unknown bundle name(s): {', '.join(sorted(unknown))}."
            )
        bundles = [bundle for bundle in bundles if bundle.label in wanted]

    overrides = {}
    if args.debug:
        overrides["debug"] = True
    if args.skip_merge:
        overrides["skip_merge"] = True
    if args.skip_minify:
        overrides["skip_minify"] = True
    if not overrides:
        return bundles
    return [dataclasses.replace(bundle, **overrides) for bundle in bundles]


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the ``process-bundles`` CLI."""

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        bundles = select_bundles(load_bundles(args.config), args)
    except ConfigError as exc:
        raise SystemExit(f"Config error: {exc}") from exc

    try:
        results = run_all(bundles, log=logging_sink(), max_workers=args.jobs)
    except MinifyError as exc:
        stage = f" ({exc.stage})" if exc.stage else ""
        raise SystemExit(f"Bundle processing failed{stage}: {exc}") from exc

    written = sum(len(result.minified) for result in results)
    print(
        f"Processed {len(results)} bundles; {written} minified files written."
    )


if __name__ == "__main__":
    main()
