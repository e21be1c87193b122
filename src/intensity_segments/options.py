"""Runtime configuration for intensity segment stores."""

from __future__ import annotations

from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass
from typing import Any, Mapping

__all__ = ["StoreOptions"]


_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, ABCMapping):
        return value
    return {}


def _coerce_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return fallback


@dataclass(frozen=True, slots=True)
class StoreOptions:
    """Immutable store configuration parsed from TOML sources."""

    cache_enabled: bool = True
    thread_safe: bool = False

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> "StoreOptions":
        """Coerce a raw configuration mapping into store options.

        Settings are read from the ``[store]`` table. Strings such as
        ``"yes"`` or ``"off"`` are accepted for booleans, and anything that
        cannot be interpreted falls back to the defaults.
        """

        defaults = cls()
        store_cfg = _as_mapping(config.get("store")) if config else {}
        return cls(
            cache_enabled=_coerce_bool(
                store_cfg.get("cache_enabled"), defaults.cache_enabled
            ),
            thread_safe=_coerce_bool(store_cfg.get("thread_safe"), defaults.thread_safe),
        )

    def as_dict(self) -> dict[str, bool]:
        return {"cache_enabled": self.cache_enabled, "thread_safe": self.thread_safe}
