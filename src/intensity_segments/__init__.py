"""Piecewise-constant intensity functions over half-open ranges.

The package exposes :class:`IntensitySegments`, a store supporting additive
(``add``) and overwriting (``set``) range updates plus a cached ``query`` of
the canonical breakpoint list, together with JSON and numpy helpers and the
configuration and logging plumbing used to embed it.
"""

from ._version import __version__
from ._types import Breakpoint, Segment
from .configuration import load_config_file, load_project_config, load_store_options
from .errors import (
    ConfigurationError,
    IntensityError,
    InvalidRangeError,
    InvalidValueError,
    SerializationError,
)
from .logging.config import JsonFormatter, setup_logging
from .options import StoreOptions
from .sampling import sample, to_arrays
from .serialization import dumps, loads
from .store import IntensitySegments

__all__ = [
    "IntensitySegments",
    "Breakpoint",
    "Segment",
    "StoreOptions",
    "IntensityError",
    "InvalidRangeError",
    "InvalidValueError",
    "SerializationError",
    "ConfigurationError",
    "dumps",
    "loads",
    "sample",
    "to_arrays",
    "load_config_file",
    "load_project_config",
    "load_store_options",
    "JsonFormatter",
    "setup_logging",
    "__version__",
]
