# -*- coding: utf-8 -*-
"""
contracts.stdlib.token
======================

Shared conventions for fungible token modules. This package module does not
perform storage I/O or emit events by itself; it only provides prefixes,
event names and argument checks used by:

- :mod:`.fungible` — the ledger (balances, allowances, metadata, supply)
- :mod:`.mintable` — the supply-mutation gate (role + latch guarded mint/burn)
- :mod:`.operator` — the operator-transfer gate

Conventions
-----------
Storage keys (prefixed bytes):
  - balances:   BAL_PREFIX || <addr>
  - allowances: ALLOW_PREFIX || <owner> || b"|" || <spender>

Events (names as bytes):
  - b"Transfer" { "from": bytes, "to": bytes, "value": int }
  - b"Approval" { "owner": bytes, "spender": bytes, "value": int }

Names / symbols are ``str``: printable, 1..64 and 1..11 characters. The
symbol is stored exactly as given (no case folding).

Amounts fit U256 (0 <= n <= 2**256-1); see :mod:`contracts.stdlib.math`.
"""

from __future__ import annotations

from typing import Final

from contracts.stdlib.errors import InvalidArgumentError
from contracts.stdlib.math import is_u256

BAL_PREFIX: Final[bytes] = b"tok:bal:"
ALLOW_PREFIX: Final[bytes] = b"tok:allow:"

EVT_TRANSFER: Final[bytes] = b"Transfer"
EVT_APPROVAL: Final[bytes] = b"Approval"

DEFAULT_DECIMALS: Final[int] = 18

MAX_NAME_LEN: Final[int] = 64
MAX_SYMBOL_LEN: Final[int] = 11


def key_balance(addr: bytes) -> bytes:
    return BAL_PREFIX + bytes(addr)


def key_allow(owner: bytes, spender: bytes) -> bytes:
    return ALLOW_PREFIX + bytes(owner) + b"|" + bytes(spender)


def require_amount(n: int, what: str = "amount") -> int:
    """Ensure `n` is an integer amount in [0, 2**256-1]."""
    if not is_u256(n):
        raise InvalidArgumentError(f"{what}: must be an integer in [0, 2**256-1]", context={"value": repr(n)})
    return n


def _require_text(s: str, what: str, max_len: int) -> str:
    if not isinstance(s, str) or not (1 <= len(s) <= max_len) or not s.isprintable():
        raise InvalidArgumentError(
            f"{what}: must be 1..{max_len} printable characters",
            context={"value": repr(s)},
        )
    return s


def require_name(name: str) -> str:
    return _require_text(name, "name", MAX_NAME_LEN)


def require_symbol(sym: str) -> str:
    return _require_text(sym, "symbol", MAX_SYMBOL_LEN)


__all__ = [
    "BAL_PREFIX",
    "ALLOW_PREFIX",
    "EVT_TRANSFER",
    "EVT_APPROVAL",
    "DEFAULT_DECIMALS",
    "MAX_NAME_LEN",
    "MAX_SYMBOL_LEN",
    "key_balance",
    "key_allow",
    "require_amount",
    "require_name",
    "require_symbol",
]
