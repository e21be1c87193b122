"""Helpers to load project-level configuration files."""

from __future__ import annotations

from collections.abc import Mapping as ABCMapping
from pathlib import Path
from typing import Any

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

from .errors import ConfigurationError
from .options import StoreOptions

__all__ = [
    "TOOL_SECTION",
    "load_config_file",
    "load_project_config",
    "load_store_options",
]


TOOL_SECTION = "intensity_segments"
_PROJECT_FILENAME = "pyproject.toml"


def _as_dict(payload: ABCMapping[str, Any]) -> dict[str, Any]:
    """Recursively coerce TOML mappings into regular dictionaries."""

    result: dict[str, Any] = {}
    for key, value in payload.items():
        key_str = str(key)
        if isinstance(value, ABCMapping):
            result[key_str] = _as_dict(value)
        elif isinstance(value, list):
            result[key_str] = [
                _as_dict(item) if isinstance(item, ABCMapping) else item for item in value
            ]
        else:
            result[key_str] = value
    return result


def _resolve_pyproject_path(candidate: Path) -> Path | None:
    """Return the concrete ``pyproject.toml`` path for ``candidate`` if possible."""

    candidate = candidate.expanduser()
    if candidate.name == _PROJECT_FILENAME:
        return candidate
    if candidate.suffix:
        return None
    return candidate / _PROJECT_FILENAME


def _load_toml_mapping(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError.from_context(
            f"Unable to parse TOML configuration: {exc}",
            context={"path": str(path)},
            cause=exc,
        ) from exc
    if isinstance(data, ABCMapping):
        return _as_dict(data)
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a standalone TOML configuration file.

    Missing files yield an empty mapping so callers can fall back to the
    defaults; files that exist but are malformed raise
    :class:`~intensity_segments.errors.ConfigurationError`.
    """

    payload = _load_toml_mapping(Path(path).expanduser())
    return payload or {}


def load_project_config(path: Path) -> tuple[dict[str, Any], Path] | None:
    """Load the ``[tool.intensity_segments]`` section from ``pyproject.toml``."""

    pyproject_path = _resolve_pyproject_path(Path(path))
    if pyproject_path is None:
        return None

    pyproject_path = pyproject_path.expanduser().resolve(strict=False)
    pyproject_payload = _load_toml_mapping(pyproject_path)
    if not pyproject_payload:
        return None

    tool_section = pyproject_payload.get("tool")
    if not isinstance(tool_section, ABCMapping):
        return None

    section = tool_section.get(TOOL_SECTION)
    if not isinstance(section, ABCMapping):
        return None

    return _as_dict(section), pyproject_path


def load_store_options(path: Path | None = None) -> StoreOptions:
    """Return :class:`StoreOptions` declared by the project at ``path``.

    ``path`` defaults to the current working directory and may point either
    at a directory or directly at a ``pyproject.toml``.
    """

    loaded = load_project_config(Path.cwd() if path is None else Path(path))
    if loaded is None:
        return StoreOptions()
    config, _ = loaded
    return StoreOptions.from_config(config)
