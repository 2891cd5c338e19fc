"""Registry of compressor engines keyed by file type and name."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..errors import ConfigurationError
from .base import Engine
from .calmjs_engine import CalmJSEngine
from .rcssmin_engine import RCSSMinEngine
from .rjsmin_engine import RJSMinEngine


class EngineRegistry:
    """Maps ``(file_type, name)`` to engine adapters.

    Lookups are case-insensitive. Each file type has one default engine,
    used when no name is configured.
    """

    def __init__(self) -> None:
        self._engines: Dict[str, Dict[str, Engine]] = {}
        self._defaults: Dict[str, str] = {}

    def register(self, engine: Engine, *, default: bool = False) -> Engine:
        """Add ``engine``; the first engine of a file type becomes default."""

        file_type = engine.file_type.lower()
        engines = self._engines.setdefault(file_type, {})
        engines[engine.name.lower()] = engine
        if default or file_type not in self._defaults:
            self._defaults[file_type] = engine.name.lower()
        return engine

    def file_types(self) -> List[str]:
        return sorted(self._engines)

    def names(self, file_type: str) -> List[str]:
        return sorted(self._engines.get(file_type.lower(), {}))

    def default(self, file_type: str) -> Engine:
        return self.select(None, file_type=file_type)

    def select(self, name: Optional[str], *, file_type: str = "js") -> Engine:
        """Return the engine registered as ``name`` for ``file_type``."""

        engines = self._engines.get(file_type.lower())
        if not engines:
            raise ConfigurationError(
                f"Unsupported file type [{file_type}]; expected one of"
                f" {', '.join(self.file_types())}."
            )
        key = (name or "").strip().lower()
        if not key:
            return engines[self._defaults[file_type.lower()]]
        try:
            return engines[key]
        except KeyError:
            raise ConfigurationError(
                f"Unknown {file_type} engine [{name}]; expected one of"
                f" {', '.join(sorted(engines))}."
            ) from None


def default_registry() -> EngineRegistry:
    """Return a registry holding the built-in engines."""

    registry = EngineRegistry()
    registry.register(RJSMinEngine(), default=True)
    registry.register(CalmJSEngine())
    registry.register(RCSSMinEngine(), default=True)
    return registry


REGISTRY = default_registry()


def select_engine(
    name: Optional[str],
    *,
    file_type: str = "js",
    registry: EngineRegistry | None = None,
) -> Engine:
    """Resolve ``name`` against ``registry`` (the built-ins by default)."""

    return (registry or REGISTRY).select(name, file_type=file_type)


__all__ = [
    "REGISTRY",
    "CalmJSEngine",
    "Engine",
    "EngineRegistry",
    "RCSSMinEngine",
    "RJSMinEngine",
    "default_registry",
    "select_engine",
]
