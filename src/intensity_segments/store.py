"""Piecewise-constant intensity functions backed by a sparse delta map.

:class:`IntensitySegments` tracks an intensity function over the real line.
Each update touches a half-open range ``[start, end)``:

* :meth:`IntensitySegments.add` increments the intensity on the range.
* :meth:`IntensitySegments.set` overwrites the intensity on the range and
  leaves every coordinate outside it untouched.

Internally the function is stored as a difference map: ``add`` writes
``+amount`` at ``start`` and ``-amount`` at ``end`` so the running sum of the
deltas up to ``x`` is the intensity at ``x``. The canonical breakpoint list
returned by :meth:`IntensitySegments.query` is derived from that map on
demand and cached until the next mutation.
"""

from __future__ import annotations

import bisect
import logging
import threading
from contextlib import nullcontext
from numbers import Real
from typing import Any, ContextManager, Iterable, Iterator, Mapping

from sortedcontainers import SortedDict

from . import serialization
from ._types import Breakpoint, Segment
from .errors import SerializationError
from .options import StoreOptions
from .validation import check_number, check_range

__all__ = ["Breakpoint", "IntensitySegments", "Segment"]

logger = logging.getLogger(__name__)


class IntensitySegments:
    """Track and manipulate intensity over half-open ranges.

    Ranges must satisfy ``start < end``; empty or inverted ranges raise
    :class:`~intensity_segments.errors.InvalidRangeError` and leave the store
    unchanged. Coordinates and amounts may be any finite real number.

    >>> segments = IntensitySegments()
    >>> segments.add(10, 30, 1)
    >>> segments.add(20, 40, 1)
    >>> str(segments)
    '[[10,1],[20,2],[30,1],[40,0]]'
    """

    __slots__ = ("_options", "_deltas", "_stale", "_cache", "_positions", "_lock")

    def __init__(self, *, options: StoreOptions | None = None) -> None:
        self._options = options or StoreOptions()
        self._deltas: SortedDict = SortedDict()
        self._stale = False
        self._cache: tuple[Breakpoint, ...] = ()
        self._positions: tuple[Real, ...] = ()
        self._lock: ContextManager[Any] = (
            threading.RLock() if self._options.thread_safe else nullcontext()
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "IntensitySegments":
        """Create an empty store configured by a ``[tool.intensity_segments]`` mapping."""

        return cls(options=StoreOptions.from_config(config))

    @classmethod
    def from_breakpoints(
        cls,
        breakpoints: Iterable[tuple[Real, Real]],
        *,
        options: StoreOptions | None = None,
    ) -> "IntensitySegments":
        """Rebuild a store from ``(position, value)`` pairs.

        Each value is turned back into the delta against its predecessor, so
        ``from_breakpoints(store.query())`` reproduces ``store``. Positions must
        be strictly increasing and the last value must be ``0``.
        """

        store = cls(options=options)
        previous_position: Real | None = None
        previous_value: Real = 0
        for index, item in enumerate(breakpoints):
            try:
                position, value = item
            except (TypeError, ValueError) as exc:
                raise SerializationError.from_context(
                    f"Breakpoint {index} must be a (position, value) pair.",
                    context={"index": index},
                    logger=logger,
                    level=logging.DEBUG,
                ) from exc
            position = check_number(position, "position")
            value = check_number(value, "value")
            if previous_position is not None and not position > previous_position:
                raise SerializationError.from_context(
                    f"Breakpoint positions must be strictly increasing (index {index}).",
                    context={"index": index, "position": position},
                    logger=logger,
                    level=logging.DEBUG,
                )
            store._deltas[position] = value - previous_value
            previous_position, previous_value = position, value
        if previous_value != 0:
            raise SerializationError.from_context(
                f"The last breakpoint must return the intensity to 0, got {previous_value!r}.",
                context={"position": previous_position, "value": previous_value},
                logger=logger,
                level=logging.DEBUG,
            )
        store._stale = bool(store._deltas)
        return store

    @classmethod
    def from_json(
        cls, text: str | bytes, *, options: StoreOptions | None = None
    ) -> "IntensitySegments":
        """Rebuild a store from the JSON text produced by :meth:`to_json`."""

        return cls.from_breakpoints(serialization.loads(text), options=options)

    @property
    def options(self) -> StoreOptions:
        return self._options

    def add(self, start: Real, end: Real, amount: Real) -> None:
        """Add ``amount`` to the intensity on ``[start, end)``."""

        start, end, amount = check_range(start, end, amount)
        with self._lock:
            self._add(start, end, amount)

    def set(self, start: Real, end: Real, amount: Real) -> None:
        """Overwrite the intensity on ``[start, end)`` with ``amount``.

        The current function is materialised, the delta map cleared and every
        existing segment replayed through :meth:`add` with the part inside
        ``[start, end)`` cut out. Finally ``amount`` is added over the range.
        """

        start, end, amount = check_range(start, end, amount)
        with self._lock:
            previous = tuple(self._iter_segments())
            self._deltas.clear()
            replayed = 0
            for segment in previous:
                if segment.end <= start or segment.start >= end:
                    self._add(segment.start, segment.end, segment.value)
                    replayed += 1
                    continue
                if segment.start < start:
                    self._add(segment.start, start, segment.value)
                    replayed += 1
                if segment.end > end:
                    self._add(end, segment.end, segment.value)
                    replayed += 1
            self._add(start, end, amount)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Overwrote [%r, %r) with %r from %d segments (%d replayed).",
                    start,
                    end,
                    amount,
                    len(previous),
                    replayed,
                    extra={"event": "intensity.set"},
                )

    def query(self) -> tuple[Breakpoint, ...]:
        """Return the canonical breakpoint sequence.

        Positions are strictly increasing and consecutive breakpoints never
        share a value. The intensity is ``0`` before the first breakpoint.
        The result is cached until the next :meth:`add` or :meth:`set`.
        """

        with self._lock:
            return self._query()

    def segments(self) -> Iterator[Segment]:
        """Yield the ``[start, end)`` segments between consecutive breakpoints."""

        with self._lock:
            segments = tuple(self._iter_segments())
        return iter(segments)

    def value_at(self, position: Real) -> Real:
        """Return the intensity at ``position``."""

        position = check_number(position, "position")
        with self._lock:
            breakpoints = self._query()
            index = bisect.bisect_right(self._positions, position) - 1
        if index < 0:
            return 0
        return breakpoints[index].value

    def to_json(self) -> str:
        """Return the breakpoints as ``[[position,value],...]`` JSON text."""

        return serialization.dumps(self.query())

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_json()})"

    def __len__(self) -> int:
        return len(self.query())

    def __bool__(self) -> bool:
        return bool(self.query())

    def __iter__(self) -> Iterator[Breakpoint]:
        return iter(self.query())

    def _add(self, start: Real, end: Real, amount: Real) -> None:
        deltas = self._deltas
        deltas[start] = amount + deltas.get(start, 0)
        deltas[end] = -amount + deltas.get(end, 0)
        self._stale = True

    def _query(self) -> tuple[Breakpoint, ...]:
        if self._stale or not self._options.cache_enabled:
            self._cache = self._recompute()
            self._positions = tuple(breakpoint.position for breakpoint in self._cache)
            self._stale = False
        return self._cache

    def _iter_segments(self) -> Iterator[Segment]:
        breakpoints = self._query()
        for current, following in zip(breakpoints, breakpoints[1:]):
            yield Segment(current.position, following.position, current.value)

    def _recompute(self) -> tuple[Breakpoint, ...]:
        breakpoints: list[Breakpoint] = []
        running: Real = 0
        emitted: Real = 0
        for position, delta in self._deltas.items():
            running += delta
            if running != emitted:
                breakpoints.append(Breakpoint(position, running))
                emitted = running
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Recomputed %d breakpoints from %d deltas.",
                len(breakpoints),
                len(self._deltas),
                extra={"event": "intensity.recompute"},
            )
        return tuple(breakpoints)
