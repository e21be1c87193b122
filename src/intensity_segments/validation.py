"""Input validation shared by the store and the decoders."""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any

from .errors import InvalidRangeError, InvalidValueError

__all__ = ["check_number", "check_range"]

logger = logging.getLogger(__name__)


def check_number(value: Any, name: str) -> Real:
    """Return ``value`` when it is a finite real number.

    Booleans are rejected even though :class:`bool` is an :class:`int`
    subclass. The value is returned unchanged so integer and rational inputs
    keep their exact arithmetic.
    """

    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidValueError.from_context(
            f"{name} must be a real number, got {type(value).__name__}.",
            context={"argument": name, "value": value},
            logger=logger,
            level=logging.DEBUG,
        )
    if not math.isfinite(value):
        raise InvalidValueError.from_context(
            f"{name} must be finite, got {value!r}.",
            context={"argument": name, "value": value},
            logger=logger,
            level=logging.DEBUG,
        )
    return value


def check_range(start: Any, end: Any, amount: Any) -> tuple[Real, Real, Real]:
    """Validate a ``[start, end)`` update and return its coerced arguments."""

    start = check_number(start, "start")
    end = check_number(end, "end")
    amount = check_number(amount, "amount")
    if not start < end:
        raise InvalidRangeError.from_context(
            f"Empty or inverted range [{start!r}, {end!r}).",
            context={"start": start, "end": end},
            logger=logger,
            level=logging.DEBUG,
        )
    return start, end, amount
