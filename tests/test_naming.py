"""Tests for output naming rules."""

from __future__ import annotations

from pathlib import Path

import pytest

from bundle_minifier import naming
from bundle_minifier.errors import ConfigurationError
from bundle_minifier.models import BundleSpec


def bundle(tmp_path: Path, **overrides) -> BundleSpec:
    return BundleSpec(
        source_root=tmp_path / "src", output_dir=tmp_path / "out", **overrides
    )


class TestNaming:
    def test_minified_name(self):
        assert naming.minified_name("app.js", ".min", False) == "app.min.js"
        assert naming.minified_name("app.js", "-min", False) == "app-min.js"
        assert naming.minified_name("app.js", ".min", True) == "app.js"
        assert naming.minified_name("LICENSE", ".min", False) == "LICENSE.min"

    def test_default_output_names(self, tmp_path: Path):
        assert bundle(tmp_path).output_filename == "script.js"
        assert bundle(tmp_path, file_type="css").output_filename == "style.css"

    def test_suffixed_paths(self, tmp_path: Path):
        spec = bundle(tmp_path, output_filename="app.js")

        assert naming.merged_path(spec) == tmp_path / "out" / "app.js"
        assert naming.minified_path(spec) == tmp_path / "out" / "app.min.js"

    def test_nosuffix_parks_merged_file(self, tmp_path: Path):
        spec = bundle(tmp_path, output_filename="app.js", nosuffix=True)

        assert naming.merged_path(spec) == tmp_path / "out" / "app.js.tmp"
        assert naming.minified_path(spec) == tmp_path / "out" / "app.js"

    def test_nosuffix_merge_only_uses_plain_name(self, tmp_path: Path):
        spec = bundle(
            tmp_path, output_filename="app.js", nosuffix=True, skip_minify=True
        )
        assert naming.merged_path(spec) == tmp_path / "out" / "app.js"

    def test_empty_suffix_collides(self, tmp_path: Path):
        with pytest.raises(ConfigurationError):
            naming.minified_path(bundle(tmp_path, suffix=""))

    def test_per_file_path_mirrors_subdirectories(self, tmp_path: Path, write):
        source = write("src/js/lib/a.js", "a;")
        spec = bundle(tmp_path)

        assert naming.per_file_minified_path(spec, source) == (
            tmp_path / "out" / "js" / "lib" / "a.min.js"
        )

    def test_per_file_path_refuses_to_overwrite_source(
        self, tmp_path: Path, write
    ):
        source = write("src/a.js", "a;")
        spec = BundleSpec(
            source_root=tmp_path / "src",
            output_dir=tmp_path / "src",
            nosuffix=True,
        )
        with pytest.raises(ConfigurationError):
            naming.per_file_minified_path(spec, source)
