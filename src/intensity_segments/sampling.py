"""Vectorised evaluation of intensity functions with numpy."""

from __future__ import annotations

from numbers import Real
from typing import Iterable, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike

from .store import IntensitySegments

__all__ = ["sample", "to_arrays"]


BreakpointSource = Union[IntensitySegments, Iterable[tuple[Real, Real]]]


def to_arrays(breakpoints: Sequence[tuple[Real, Real]]) -> tuple[np.ndarray, np.ndarray]:
    """Split breakpoints into ``(positions, values)`` float arrays."""

    positions = np.asarray([float(position) for position, _ in breakpoints], dtype=np.float64)
    values = np.asarray([float(value) for _, value in breakpoints], dtype=np.float64)
    return positions, values


def sample(source: BreakpointSource, points: ArrayLike) -> np.ndarray:
    """Evaluate the intensity at every entry of ``points``.

    ``source`` is either a store or a canonical breakpoint sequence. Points
    before the first breakpoint evaluate to ``0``; the output has the shape of
    ``points``.
    """

    if isinstance(source, IntensitySegments):
        breakpoints: Sequence[tuple[Real, Real]] = source.query()
    else:
        breakpoints = tuple(source)
    positions, values = to_arrays(breakpoints)
    query_points = np.asarray(points, dtype=np.float64)
    if positions.size == 0:
        return np.zeros_like(query_points)

    index = np.searchsorted(positions, query_points, side="right") - 1
    return np.where(index >= 0, values[np.clip(index, 0, None)], 0.0)
