"""Helpers for resolving bundle configuration files."""

from __future__ import annotations

import json
import os
from dataclasses import fields
from typing import Any, Dict, List, Optional

from bundle_minifier.errors import ConfigurationError
from bundle_minifier.models import BundleSpec, EngineOptions

DEFAULT_CONFIG_NAME = "bundles.json"
CONFIG_ENV_VAR = "BUNDLE_MINIFIER_CONFIG"
PATH_KEY_SUFFIXES = ("_dir", "_root", "_path")

ConfigError = ConfigurationError

_OPTION_FIELDS = {field.name: field for field in fields(EngineOptions)}
_BUNDLE_FIELDS = {
    field.name: field
    for field in fields(BundleSpec)
    if field.name != "options"
}
_LIST_KEYS = ("source_files", "source_includes", "source_excludes")
_BOOL_KEYS = (
    "nosuffix",
    "skip_merge",
    "skip_minify",
    "keep_merged",
    "debug",
    "munge",
    "verbose",
    "preserve_semicolons",
    "disable_optimizations",
)
_INT_KEYS = ("buffer_size", "line_break")


def _resolve_config_path(path: Optional[str]) -> str:
    """Return the absolute config path, honoring overrides and defaults."""
    env_override = os.environ.get(CONFIG_ENV_VAR)
    candidate = path or env_override or DEFAULT_CONFIG_NAME
    expanded = os.path.expanduser(candidate)
    if os.path.isabs(expanded) and os.path.isfile(expanded):
        return expanded

    search_roots = [os.getcwd(), os.path.dirname(__file__)]
    for root in search_roots:
        resolved = os.path.abspath(os.path.join(root, expanded))
        if os.path.isfile(resolved):
            return resolved

    raise ConfigError(f"Configuration file not found: {candidate}")


def _resolve_path(value: str, base_dir: str) -> str:
    """Resolve ``value`` into an absolute path relative to ``base_dir``."""
    expanded = os.path.expanduser(value)
    if os.path.isabs(expanded):
        return expanded
    return os.path.abspath(os.path.join(base_dir, expanded))


def _resolve_paths(data: Dict[str, Any], base_dir: str) -> Dict[str, Any]:
    resolved: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str) and key.endswith(PATH_KEY_SUFFIXES):
            resolved[key] = _resolve_path(value, base_dir)
        else:
            resolved[key] = value
    return resolved


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a JSON config file and normalize any filesystem paths."""
    config_path = _resolve_config_path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(
            f"Unable to read {config_path}: {exc.strerror or exc}"
        ) from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {config_path}.")

    base_dir = os.path.dirname(config_path)
    resolved = _resolve_paths(data, base_dir)
    bundles = resolved.get("bundles")
    if not isinstance(bundles, list) or not bundles:
        raise ConfigError(f"Missing bundles list in {config_path}.")
    resolved["bundles"] = [
        _resolve_paths(entry, base_dir) if isinstance(entry, dict) else entry
        for entry in bundles
    ]
    return resolved


def _check_type(key: str, value: Any, label: str) -> None:
    if key in _LIST_KEYS:
        if not isinstance(value, list) or not all(
            isinstance(item, str) for item in value
        ):
            raise ConfigError(f"{label}: {key} must be a list of strings.")
    elif key in _BOOL_KEYS:
        if not isinstance(value, bool):
            raise ConfigError(f"{label}: {key} must be true or false.")
    elif key in _INT_KEYS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{label}: {key} must be an integer.")
    elif value is not None and not isinstance(value, str):
        raise ConfigError(f"{label}: {key} must be a string.")


def build_bundle(
    entry: Dict[str, Any], defaults: Dict[str, Any], index: int = 0
) -> BundleSpec:
    """Combine ``defaults`` with one bundle entry into a ``BundleSpec``."""
    merged = {**defaults, **entry}
    label = f"bundles[{index}]"
    if merged.get("name"):
        label = f"bundle {merged['name']}"

    bundle_kwargs: Dict[str, Any] = {}
    option_kwargs: Dict[str, Any] = {}
    for key, value in merged.items():
        if key not in _BUNDLE_FIELDS and key not in _OPTION_FIELDS:
            raise ConfigError(f"{label}: unknown setting {key!r}.")
        _check_type(key, value, label)
        if key in _OPTION_FIELDS:
            option_kwargs[key] = value
        else:
            bundle_kwargs[key] = value

    for required in ("source_root", "output_dir"):
        if not bundle_kwargs.get(required):
            raise ConfigError(f"{label}: missing {required} configuration.")

    return BundleSpec(options=EngineOptions(**option_kwargs), **bundle_kwargs)


def load_bundles(path: Optional[str] = None) -> List[BundleSpec]:
    """Load every bundle declared in the config file."""
    config = load_config(path)
    defaults = {
        key: value for key, value in config.items() if key != "bundles"
    }
    bundles: List[BundleSpec] = []
    for index, entry in enumerate(config["bundles"]):
        if not isinstance(entry, dict):
            raise ConfigError(f"bundles[{index}] must be a JSON object.")
        bundles.append(build_bundle(entry, defaults, index))
    return bundles


__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_NAME",
    "build_bundle",
    "load_bundles",
    "load_config",
]
