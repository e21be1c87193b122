"""Logging configuration driven by the ``[logging]`` configuration table."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from ..errors import ConfigurationError

__all__ = ["JsonFormatter", "setup_logging"]

logger = logging.getLogger(__name__)


PACKAGE_LOGGER = "intensity_segments"
_HANDLER_NAME = "intensity_segments.handler"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_RESERVED_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects.

    Structured ``extra`` fields such as ``event``, ``category`` or
    ``context`` are copied into the payload next to the standard keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRIBUTES or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _resolve_level(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError.from_context(
            f"Unknown logging level {value!r}.",
            context={"level": value},
            logger=logger,
            level=logging.DEBUG,
        )
    return level


def _build_handler(output: Any) -> logging.Handler:
    target = str(output).strip()
    if target.lower() == "stdout":
        return logging.StreamHandler(sys.stdout)
    if target.lower() == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf-8")


def _build_formatter(name: Any) -> logging.Formatter:
    lowered = str(name).strip().lower()
    if lowered == "json":
        return JsonFormatter()
    if lowered == "text":
        return logging.Formatter(_TEXT_FORMAT)
    raise ConfigurationError.from_context(
        f"Unknown logging format {name!r}; expected 'json' or 'text'.",
        context={"format": name},
        logger=logger,
        level=logging.DEBUG,
    )


def setup_logging(config: Mapping[str, Any] | None = None) -> logging.Logger:
    """Configure the ``intensity_segments`` logger from ``config['logging']``.

    Recognised keys are ``level`` (default ``info``), ``output`` (``stderr``,
    ``stdout`` or a file path; default ``stderr``) and ``format`` (``json`` or
    ``text``; default ``json``). Calling the function again replaces the
    handler installed by the previous call and leaves other handlers alone.
    """

    logging_cfg: Mapping[str, Any] = {}
    if config:
        candidate = config.get("logging")
        if isinstance(candidate, Mapping):
            logging_cfg = candidate

    level = _resolve_level(logging_cfg.get("level", "info"))
    formatter = _build_formatter(logging_cfg.get("format", "json"))
    handler = _build_handler(logging_cfg.get("output", "stderr"))
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
            existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger
