# -*- coding: utf-8 -*-
"""
contracts.stdlib.math
=====================

Checked, integer-only U256 arithmetic for token contracts.

- All amounts live in [0, U256_MAX]; Python floats are never used.
- Checked variants revert (``stdlib.abi.revert``) on overflow/underflow
  instead of wrapping.
- ``u256_sub`` takes the revert type and message so ledger code can surface a
  domain error ("ERC20: transfer amount exceeds balance") rather than a
  generic underflow.
"""
from __future__ import annotations

from typing import Final, Type

from stdlib import abi  # type: ignore

U256_MAX: Final[int] = (1 << 256) - 1

ERR_OOB: Final[bytes] = b"UINT:OOB"
ERR_OVER: Final[bytes] = b"UINT:OVERFLOW"
ERR_UNDER: Final[bytes] = b"UINT:UNDERFLOW"


def is_u256(x: object) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and 0 <= x <= U256_MAX


def require_u256(*xs: int) -> None:
    """Revert unless every argument is an int in [0, U256_MAX]."""
    for x in xs:
        if not is_u256(x):
            abi.revert(ERR_OOB)


def u256_add(x: int, y: int) -> int:
    """Checked add: revert on overflow."""
    require_u256(x, y)
    s = x + y
    if s > U256_MAX:
        abi.revert(ERR_OVER)
    return s


def u256_sub(x: int, y: int, *, exc: Type[abi.Revert] = abi.Revert, msg: bytes = ERR_UNDER) -> int:
    """Checked sub: raise `exc(msg)` when y > x."""
    require_u256(x, y)
    if y > x:
        abi.require(False, msg, exc=exc)
    return x - y


__all__ = [
    "U256_MAX",
    "ERR_OOB",
    "ERR_OVER",
    "ERR_UNDER",
    "is_u256",
    "require_u256",
    "u256_add",
    "u256_sub",
]
