"""JSON encoding of canonical breakpoint sequences.

The textual form is a compact JSON array of ``[position, value]`` pairs in
ascending position order, e.g. ``[[10,1],[20,2],[30,1],[40,0]]``.
"""

from __future__ import annotations

import json
import logging
import math
from numbers import Integral, Real
from typing import Any, Iterable

from ._types import Breakpoint
from .errors import SerializationError

__all__ = ["dumps", "loads"]

logger = logging.getLogger(__name__)


def _encode_number(value: Any) -> int | float:
    # numpy integers and fractions are not natively JSON serialisable
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(breakpoints: Iterable[tuple[Real, Real]]) -> str:
    """Return the compact JSON array-of-pairs text for ``breakpoints``."""

    payload = [[position, value] for position, value in breakpoints]
    return json.dumps(payload, separators=(",", ":"), default=_encode_number)


def _decode_number(value: Any, index: int, field: str) -> Real:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SerializationError.from_context(
            f"Breakpoint {index} has a non-numeric {field}: {value!r}.",
            context={"index": index, "field": field},
            logger=logger,
            level=logging.DEBUG,
        )
    if not math.isfinite(value):
        raise SerializationError.from_context(
            f"Breakpoint {index} has a non-finite {field}: {value!r}.",
            context={"index": index, "field": field},
            logger=logger,
            level=logging.DEBUG,
        )
    return value


def loads(text: str | bytes) -> tuple[Breakpoint, ...]:
    """Decode and validate a JSON array of ``[position, value]`` pairs."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError.from_context(
            f"Invalid breakpoint JSON: {exc.msg}.",
            context={"line": exc.lineno, "column": exc.colno},
            logger=logger,
            level=logging.DEBUG,
        ) from exc

    if not isinstance(payload, list):
        raise SerializationError.from_context(
            "Breakpoint JSON must be an array of [position, value] pairs.",
            context={"type": type(payload).__name__},
            logger=logger,
            level=logging.DEBUG,
        )

    breakpoints: list[Breakpoint] = []
    for index, item in enumerate(payload):
        if not isinstance(item, list) or len(item) != 2:
            raise SerializationError.from_context(
                f"Breakpoint {index} must be a [position, value] pair.",
                context={"index": index},
                logger=logger,
                level=logging.DEBUG,
            )
        position = _decode_number(item[0], index, "position")
        value = _decode_number(item[1], index, "value")
        if breakpoints and not position > breakpoints[-1].position:
            raise SerializationError.from_context(
                f"Breakpoint positions must be strictly increasing (index {index}).",
                context={"index": index, "position": position},
                logger=logger,
                level=logging.DEBUG,
            )
        breakpoints.append(Breakpoint(position, value))
    return tuple(breakpoints)
