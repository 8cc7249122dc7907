from __future__ import annotations

from typing import Optional

from tokenvm.runtime import storage_api as _rt


def get(key: bytes, default: Optional[bytes] = None) -> bytes:
    """
    Get the value stored at 'key'. If the key is missing:

      * if 'default' is provided, that default is returned
      * otherwise, an empty byte string is returned (b"")
    """
    v = _rt.get(key)
    if v is not None:
        return v
    return bytes(default) if default is not None else b""


def set(key: bytes, value: bytes) -> None:
    _rt.set(key, value)


def delete(key: bytes) -> None:
    _rt.delete(key)


def exists(key: bytes) -> bool:
    return _rt.exists(key)


def get_int(key: bytes) -> int:
    """Unsigned big-endian int at 'key' (0 when missing)."""
    v = _rt.get_int(key)
    return 0 if v is None else v


def set_int(key: bytes, value: int) -> None:
    _rt.set_int(key, value)


__all__ = ["get", "set", "delete", "exists", "get_int", "set_int"]
