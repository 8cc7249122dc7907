"""
tokenvm.config — size caps enforced by the in-process VM.

Each cap may be overridden through a ``TOKENVM_*`` environment variable.
Values are parsed with ``int(raw, 0)`` (so ``0x40`` works), clamped into a
fixed range, and unparsable values fall back to the default with a warning.

==============================  ==========  =================
Variable                        Default     Allowed range
==============================  ==========  =================
TOKENVM_MAX_STORAGE_KEY_BYTES   128         16 .. 1024
TOKENVM_MAX_STORAGE_VAL_BYTES   131072      32 .. 1048576
TOKENVM_MAX_LOGS_PER_CALL       1024        1 .. 10000
==============================  ==========  =================

The result is cached; tests that change the environment call
``load_config.cache_clear()``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any, Dict, NamedTuple, Tuple

log = logging.getLogger(__name__)


class _Cap(NamedTuple):
    field: str
    env: str
    default: int
    lo: int
    hi: int


_CAPS: Tuple[_Cap, ...] = (
    _Cap("max_storage_key_bytes", "TOKENVM_MAX_STORAGE_KEY_BYTES", 128, 16, 1024),
    _Cap("max_storage_value_bytes", "TOKENVM_MAX_STORAGE_VAL_BYTES", 131_072, 32, 1_048_576),
    _Cap("max_logs_per_call", "TOKENVM_MAX_LOGS_PER_CALL", 1024, 1, 10_000),
)


@dataclass(frozen=True)
class VMConfig:
    max_storage_key_bytes: int
    max_storage_value_bytes: int
    max_logs_per_call: int

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _read_cap(cap: _Cap) -> int:
    raw = os.getenv(cap.env)
    if raw is None:
        return cap.default
    try:
        v = int(raw.strip(), 0)
    except ValueError:
        log.warning("ignoring %s=%r (not an integer); using %d", cap.env, raw, cap.default)
        return cap.default
    return min(max(v, cap.lo), cap.hi)


@lru_cache(maxsize=1)
def load_config() -> VMConfig:
    return VMConfig(**{cap.field: _read_cap(cap) for cap in _CAPS})


__all__ = ["VMConfig", "load_config"]
