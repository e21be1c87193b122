"""Exception types raised by the intensity segment store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping, Optional

__all__ = [
    "ConfigurationError",
    "ErrorPayload",
    "IntensityError",
    "InvalidRangeError",
    "InvalidValueError",
    "SerializationError",
    "build_error_payload",
    "log_error",
]


_DEFAULT_CATEGORY = "runtime"
_DEFAULT_LOGGER_NAME = "intensity_segments"


@dataclass(frozen=True, slots=True)
class ErrorPayload:
    """Structured representation of a rejected operation."""

    category: str
    message: str
    context: Mapping[str, Any]

    def as_dict(self) -> Mapping[str, Any]:
        return {
            "category": self.category,
            "message": self.message,
            "context": dict(self.context),
        }


def _normalise_context(context: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if not context:
        return {}
    payload: MutableMapping[str, Any] = {}
    for key, value in context.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            payload[key] = value
        else:
            payload[key] = repr(value)
    return dict(payload)


def build_error_payload(
    message: str,
    *,
    category: str = _DEFAULT_CATEGORY,
    context: Optional[Mapping[str, Any]] = None,
) -> ErrorPayload:
    """Create a :class:`ErrorPayload` with a JSON-safe context."""

    return ErrorPayload(
        category=category or _DEFAULT_CATEGORY,
        message=message,
        context=_normalise_context(context),
    )


def log_error(
    payload: ErrorPayload,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
    exc_info: Optional[BaseException] = None,
) -> None:
    """Emit ``payload`` on ``logger`` with structured context."""

    target = logger or logging.getLogger(_DEFAULT_LOGGER_NAME)
    target.log(
        level,
        payload.message,
        extra={
            "event": "intensity.error",
            "category": payload.category,
            "context": dict(payload.context),
        },
        exc_info=exc_info,
    )


class IntensityError(Exception):
    """Base class for errors raised by :mod:`intensity_segments`."""

    category = _DEFAULT_CATEGORY

    def __init__(
        self,
        message: str,
        *,
        category: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
        payload: Optional[ErrorPayload] = None,
        logged: bool = False,
    ) -> None:
        super().__init__(message)
        resolved_payload = payload or build_error_payload(
            message,
            category=category or type(self).category,
            context=context,
        )
        self.category = resolved_payload.category
        self.context = dict(resolved_payload.context)
        self._payload = resolved_payload
        self.logged = logged

    @property
    def payload(self) -> ErrorPayload:
        return self._payload

    @classmethod
    def from_context(
        cls,
        message: str,
        *,
        context: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
        level: int = logging.ERROR,
        cause: Optional[BaseException] = None,
    ) -> "IntensityError":
        """Build, log and return an error; callers raise the result."""

        payload = build_error_payload(message, category=cls.category, context=context)
        log_error(payload, logger=logger, level=level, exc_info=cause)
        return cls(message, payload=payload, logged=True)


class InvalidRangeError(IntensityError, ValueError):
    """Raised when a range does not satisfy ``from < to``."""

    category = "range"


class InvalidValueError(IntensityError, ValueError):
    """Raised for coordinates or amounts that are not finite real numbers."""

    category = "value"


class SerializationError(IntensityError, ValueError):
    """Raised when breakpoint payloads cannot be decoded."""

    category = "serialization"


class ConfigurationError(IntensityError, ValueError):
    """Raised when a configuration file exists but cannot be parsed."""

    category = "config"
