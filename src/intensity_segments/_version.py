"""Utilities for retrieving and validating the package version."""

from __future__ import annotations

import re
from importlib import metadata
from pathlib import Path

from packaging.version import InvalidVersion, Version

_DISTRIBUTION = "intensity-segments"


def _version_from_sources() -> str:
    """Return the version parsed from the repository changelog.

    This is a fallback mechanism for development checkouts where the
    distribution metadata has not been generated yet.
    """

    resolved = Path(__file__).resolve()
    candidates = [parent / "CHANGELOG.md" for parent in resolved.parents[1:3]]

    for changelog in candidates:
        if not changelog.is_file():
            continue
        for line in changelog.read_text(encoding="utf-8").splitlines():
            match = re.match(r"^## v(?P<version>\d+\.\d+\.\d+)\b", line)
            if match:
                return match.group("version")

    raise RuntimeError(
        "Unable to determine the 'intensity-segments' version from package "
        "metadata or repository sources."
    )


def _load_version() -> str:
    """Return the validated ``MAJOR.MINOR.PATCH`` package version."""

    try:
        raw_version = metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        raw_version = _version_from_sources()

    try:
        parsed = Version(raw_version)
    except InvalidVersion as exc:
        raise RuntimeError(
            "Invalid version string for 'intensity-segments': "
            f"{raw_version!r}. Expected a semantic version."
        ) from exc

    if len(parsed.release) != 3:
        raise RuntimeError(
            "The 'intensity-segments' version must follow the MAJOR.MINOR.PATCH "
            f"format. Found: {raw_version!r}."
        )

    return raw_version


__version__ = _load_version()

__all__ = ["__version__"]
