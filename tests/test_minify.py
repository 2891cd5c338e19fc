"""Tests for the minify stage."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from bundle_minifier.engines import Engine, default_registry
from bundle_minifier.errors import (
    CompressionError,
    ConfigurationError,
    IOFailure,
)
from bundle_minifier.minify import minify
from bundle_minifier.models import EngineOptions, MergedArtifact


class ExplodingEngine(Engine):
    """Writes part of the output, then fails; remembers its streams."""

    name = "exploding"
    file_type = "js"
    label = "Exploding"

    def __init__(self) -> None:
        self.streams = []

    def compress(self, source, target, options, *, log=None):
        self.streams.extend([source, target])
        target.write(b"partial")
        raise CompressionError("boom")

    def transform(self, text, options, log):
        raise AssertionError("not reached")


@pytest.fixture
def merged(write) -> MergedArtifact:
    path = write("out/script.js", "var x = 1;  \nvar y = 2;\n")
    return MergedArtifact(path=path, sources=(path,))


class TestMinify:
    def test_writes_minified_file(self, tmp_path: Path, merged, sink):
        target = tmp_path / "out" / "script.min.js"

        artifact = minify(merged, target, EngineOptions(), log=sink)

        assert artifact.path == target
        assert artifact.source == merged.path
        assert artifact.engine == "rjsmin"
        content = target.read_text(encoding="utf-8")
        assert len(content) < merged.path.stat().st_size
        assert "Creating the minified file [script.min.js]." in sink.messages(
            logging.INFO
        )
        assert "Using rJSmin engine." in sink.messages(logging.DEBUG)

    def test_unknown_engine_touches_nothing(self, tmp_path: Path, merged):
        target = tmp_path / "out" / "script.min.js"

        with pytest.raises(ConfigurationError, match="unknown"):
            minify(merged, target, EngineOptions(engine="unknown"))

        assert not target.exists()

    def test_engine_failure_releases_streams(
        self, tmp_path: Path, merged, sink
    ):
        engine = ExplodingEngine()
        registry = default_registry()
        registry.register(engine)
        target = tmp_path / "out" / "script.min.js"

        with pytest.raises(CompressionError, match="boom"):
            minify(
                merged,
                target,
                EngineOptions(engine="exploding"),
                log=sink,
                registry=registry,
            )

        assert len(engine.streams) == 2
        assert all(stream.closed for stream in engine.streams)
        assert not target.exists()
        errors = [
            (message, cause)
            for level, message, cause in sink.records
            if level == logging.ERROR
        ]
        assert len(errors) == 1
        message, cause = errors[0]
        assert message == "Failed to compress the JavaScript file [script.js]."
        assert isinstance(cause, CompressionError)

    def test_failure_log_uses_full_path_in_debug(
        self, tmp_path: Path, sink
    ):
        path = tmp_path / "broken.js"
        path.write_text("var = ;", encoding="utf-8")
        artifact = MergedArtifact(path=path, sources=(path,))

        with pytest.raises(CompressionError):
            minify(
                artifact,
                tmp_path / "broken.min.js",
                EngineOptions(engine="calmjs"),
                log=sink,
                debug=True,
            )

        assert f"Failed to compress the JavaScript file [{path}]." in (
            sink.messages(logging.ERROR)
        )

    def test_refuses_to_overwrite_input(self, merged):
        with pytest.raises(ConfigurationError):
            minify(merged, merged.path, EngineOptions())
        assert merged.path.exists()

    def test_css_engine(self, tmp_path: Path, write):
        path = write("style.css", "a {  color: red;  }\n")
        artifact = MergedArtifact(path=path, sources=(path,))

        result = minify(
            artifact, tmp_path / "style.min.css", EngineOptions(), file_type="css"
        )

        assert result.engine == "rcssmin"
        assert "color:red" in result.path.read_text(encoding="utf-8")

    def test_output_dir_failure_is_logged(
        self, tmp_path: Path, merged, write, sink
    ):
        write("blocker", "not a directory")
        target = tmp_path / "blocker" / "script.min.js"

        with pytest.raises(IOFailure) as excinfo:
            minify(merged, target, EngineOptions(), log=sink)

        assert sink.messages(logging.ERROR) == [
            "Failed to compress the JavaScript file [script.js]."
        ]
        assert str(tmp_path) not in str(excinfo.value)
        assert (tmp_path / "blocker").is_file()
