"""
tokenvm.runtime.storage_api — host hooks for deterministic key/value storage.

Contract-facing storage primitives re-exported by ``stdlib.storage``. Every
access goes through the active :class:`~tokenvm.runtime.journal.Frame`, so
writes are staged until the engine commits the call.

Public API
----------
- get(key: bytes) -> Optional[bytes]
- set(key: bytes, value: bytes) -> None
- delete(key: bytes) -> None
- exists(key: bytes) -> bool
- get_int(key: bytes) -> Optional[int]           # big-endian, unsigned
- set_int(key: bytes, value: int) -> None        # 32-byte big-endian, unsigned

Length caps come from :mod:`tokenvm.config`.
"""

from __future__ import annotations

from typing import Optional

from tokenvm.config import load_config
from tokenvm.errors import StorageError

from .journal import current_frame

U256_MAX = (1 << 256) - 1


# --------------------------- Validation helpers --------------------------- #


def _check_key(key: bytes) -> bytes:
    if not isinstance(key, (bytes, bytearray)):
        raise StorageError("storage key must be bytes", context={"py_type": type(key).__name__})
    if len(key) == 0:
        raise StorageError("storage key must be non-empty")
    cap = load_config().max_storage_key_bytes
    if len(key) > cap:
        raise StorageError(f"storage key too long (>{cap} bytes)", context={"len": len(key)})
    return bytes(key)


def _check_value(value: bytes) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise StorageError("storage value must be bytes", context={"py_type": type(value).__name__})
    cap = load_config().max_storage_value_bytes
    if len(value) > cap:
        raise StorageError(f"storage value too large (>{cap} bytes)", context={"len": len(value)})
    return bytes(value)


# --------------------------- Contract-facing API --------------------------- #


def get(key: bytes) -> Optional[bytes]:
    """Return the value for `key`, or None if not set."""
    return current_frame().read(_check_key(key))


def set(key: bytes, value: bytes) -> None:
    """Set `key` to `value` (overwrites existing)."""
    current_frame().write(_check_key(key), _check_value(value))


def delete(key: bytes) -> None:
    """Delete `key` if present (no-op otherwise)."""
    bkey = _check_key(key)
    frame = current_frame()
    if frame.read(bkey) is not None:
        frame.write(bkey, None)


def exists(key: bytes) -> bool:
    return get(key) is not None


# ------------------------------ Typed helpers ----------------------------- #


def get_int(key: bytes) -> Optional[int]:
    """
    Read big-endian unsigned integer at `key`. Returns None if not set.
    """
    raw = get(key)
    if raw is None:
        return None
    return int.from_bytes(raw, "big") if raw else 0


def set_int(key: bytes, value: int) -> None:
    """
    Store `value` as a 32-byte big-endian unsigned integer (u256).
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise StorageError("set_int value must be int")
    if value < 0 or value > U256_MAX:
        raise StorageError("set_int out of range (must fit in 256 bits)", context={"value": value})
    set(key, value.to_bytes(32, "big"))


__all__ = ["U256_MAX", "get", "set", "delete", "exists", "get_int", "set_int"]
