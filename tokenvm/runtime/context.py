"""
tokenvm.runtime.context — address helpers and the per-call environment.

Addresses are raw 20-byte values. Hex strings (with or without "0x") are
accepted at the harness boundary and normalized to bytes here; contract code
only ever sees bytes.

This module intentionally does not expose wall-clock time or other
non-deterministic sources.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Union

from tokenvm.errors import VmError

ADDRESS_LEN = 20

AddressLike = Union[bytes, bytearray, memoryview, str]


class ContextError(VmError):
    """Validation or coercion failure for addresses / CallEnv."""

    default_code = "context_invalid"


def _strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_bytes(value: AddressLike) -> bytes:
    """
    Coerce `value` to bytes.
    - If str, interpret as hex (with or without '0x'); odd-length hex is rejected.
    - If a bytes-like object, copy to immutable bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        h = _strip_0x(value.strip())
        if len(h) % 2 != 0:
            raise ContextError(f"hex string must have even length, got {len(h)}")
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise ContextError(f"invalid hex string: {value!r}") from e
    raise ContextError(f"cannot convert type {type(value).__name__} to bytes")


def to_hex(b: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


def to_address(value: AddressLike) -> bytes:
    """Normalize to a 20-byte address or raise ContextError."""
    b = to_bytes(value)
    if len(b) != ADDRESS_LEN:
        raise ContextError(f"address must be {ADDRESS_LEN} bytes, got {len(b)}")
    return b


@dataclass(frozen=True)
class CallEnv:
    """
    Deterministic per-call environment.

    sender:   identity the call is made as (bytes).
    address:  address of the instance being called (bytes).
    nonce:    engine-wide sequence number of this call.
    static:   True for read-only calls.
    """

    sender: bytes
    address: bytes
    nonce: int = 0
    static: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", to_bytes(self.sender))
        object.__setattr__(self, "address", to_bytes(self.address))
        if self.nonce < 0:
            raise ContextError(f"nonce must be non-negative, got {self.nonce}")

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["sender"] = to_hex(self.sender)
        d["address"] = to_hex(self.address)
        return d


__all__ = [
    "ADDRESS_LEN",
    "AddressLike",
    "ContextError",
    "to_bytes",
    "to_hex",
    "to_address",
    "CallEnv",
]
