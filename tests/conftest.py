from __future__ import annotations

import logging
import sys
from pathlib import Path
from textwrap import dedent

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from intensity_segments import IntensitySegments, StoreOptions  # noqa: E402


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


@pytest.fixture(params=["default", "uncached", "thread_safe"])
def store_options(request: pytest.FixtureRequest) -> StoreOptions:
    """Every store configuration must produce the same breakpoints."""

    if request.param == "uncached":
        return StoreOptions(cache_enabled=False)
    if request.param == "thread_safe":
        return StoreOptions(thread_safe=True)
    return StoreOptions()


@pytest.fixture
def segments(store_options: StoreOptions) -> IntensitySegments:
    return IntensitySegments(options=store_options)


@pytest.fixture
def package_logger():
    """Yield the package logger and drop any handlers a test installed."""

    logger = logging.getLogger("intensity_segments")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
