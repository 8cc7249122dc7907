# -*- coding: utf-8 -*-
"""
contracts.stdlib
================

Reusable building blocks for token contracts running on tokenvm.

Subpackages
-----------
- ``access``  : role registry (``roles``) and single-owner control (``ownable``)
- ``control`` : one-way latches (``latch``)
- ``math``    : checked U256 arithmetic
- ``token``   : fungible ledger, supply-mutation gate, operator-transfer gate
- ``upgrade`` : initialize-once guard and the code-hash proxy

Every module uses only the contract-facing ``stdlib`` surface (storage,
events, hash, abi) and takes the calling identity as an explicit ``caller``
argument.

This package module itself carries the address conventions shared by all of
them: accounts are 20 raw bytes and the all-zero address is reserved as the
mint source / burn sink.
"""
from __future__ import annotations

from typing import Final

from .errors import InvalidArgumentError

__all__ = [
    "__version__",
    "ADDRESS_LEN",
    "ZERO_ADDRESS",
    "is_zero_address",
    "require_address",
]

__version__ = "0.3.0"

ADDRESS_LEN: Final[int] = 20
ZERO_ADDRESS: Final[bytes] = b"\x00" * ADDRESS_LEN


def is_zero_address(addr: bytes) -> bool:
    return bytes(addr) == ZERO_ADDRESS


def require_address(addr: bytes, what: str = "account") -> bytes:
    """
    Return `addr` as bytes if it is a well-formed, non-zero 20-byte address;
    otherwise raise InvalidArgumentError.
    """
    if not isinstance(addr, (bytes, bytearray)) or len(addr) != ADDRESS_LEN:
        raise InvalidArgumentError(f"{what}: malformed address", context={"what": what})
    if is_zero_address(addr):
        raise InvalidArgumentError(f"{what}: zero address", context={"what": what})
    return bytes(addr)
