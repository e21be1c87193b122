"""Logging utilities for intensity segment stores."""

from intensity_segments.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
