"""Shared fixtures for bundle_minifier tests."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

import pytest


class RecordingSink:
    """Log sink that keeps every message for later assertions."""

    def __init__(self) -> None:
        self.records: List[Tuple[int, str, Optional[BaseException]]] = []

    def __call__(
        self, level: int, message: str, cause: Optional[BaseException] = None
    ) -> None:
        self.records.append((level, message, cause))

    def messages(self, level: Optional[int] = None) -> List[str]:
        return [
            message
            for record_level, message, _ in self.records
            if level is None or record_level == level
        ]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def write(tmp_path: Path):
    """Write ``content`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write
