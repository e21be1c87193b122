"""Value types shared across the package."""

from __future__ import annotations

from numbers import Real
from typing import NamedTuple

__all__ = ["Breakpoint", "Segment"]


class Breakpoint(NamedTuple):
    """Intensity ``value`` holds from ``position`` up to the next breakpoint."""

    position: Real
    value: Real


class Segment(NamedTuple):
    """Constant intensity ``value`` over the half-open range ``[start, end)``."""

    start: Real
    end: Real
    value: Real
