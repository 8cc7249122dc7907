# -*- coding: utf-8 -*-
"""
ERC20-style fungible ledger
===========================

Balances, allowances, total supply and immutable metadata kept in contract
storage. Mutating calls take an explicit `caller` (no ambient msg.sender).

Public interface
----------------
# metadata / views (pure)
name() -> str
symbol() -> str
decimals() -> int
total_supply() -> int
balance_of(addr: bytes) -> int
allowance(owner: bytes, spender: bytes) -> int

# state-changing (explicit caller)
transfer(caller, to, amount) -> bool
approve(caller, spender, amount) -> bool
transfer_from(caller, owner, to, amount) -> bool
increase_allowance(caller, spender, added) -> bool
decrease_allowance(caller, spender, subtracted) -> bool

Ledger primitives used by the gates (no authorization here):
``set_metadata``, ``move``, ``mint_to``, ``burn_from_balance``,
``spend_allowance``.

Every balance change emits ``Transfer``; mint/burn use the zero address as
source/sink. Every allowance write emits ``Approval``. An allowance of
``U256_MAX`` is treated as unlimited and is not decremented.
"""

from __future__ import annotations

from typing import Final

from stdlib import events, storage  # type: ignore

from contracts.stdlib import ZERO_ADDRESS, require_address
from contracts.stdlib.errors import (InsufficientAllowanceError,
                                     InsufficientBalanceError,
                                     InvalidArgumentError)
from contracts.stdlib.math import U256_MAX, u256_add, u256_sub

from . import (DEFAULT_DECIMALS, EVT_APPROVAL, EVT_TRANSFER, key_allow,
               key_balance, require_amount, require_name, require_symbol)

K_NAME: Final[bytes] = b"tok:meta:name"
K_SYMBOL: Final[bytes] = b"tok:meta:symbol"
K_DECIMALS: Final[bytes] = b"tok:meta:dec"
K_TOTAL: Final[bytes] = b"tok:meta:total"

ERR_TRANSFER_EXCEEDS: Final[bytes] = b"ERC20: transfer amount exceeds balance"
ERR_BURN_EXCEEDS: Final[bytes] = b"ERC20: burn amount exceeds balance"
ERR_ALLOWANCE: Final[bytes] = b"ERC20: insufficient allowance"
ERR_DECREASE_BELOW_ZERO: Final[bytes] = b"ERC20: decreased allowance below zero"


def _addr(a: bytes, msg: str) -> bytes:
    try:
        return require_address(a)
    except InvalidArgumentError:
        raise InvalidArgumentError(msg) from None


# ------------------------------------------------------------------------------
# Metadata
# ------------------------------------------------------------------------------


def set_metadata(name_: str, symbol_: str, decimals_: int = DEFAULT_DECIMALS) -> None:
    """Record name/symbol/decimals. Callers guard this with the initializer."""
    storage.set(K_NAME, require_name(name_).encode("utf-8"))
    storage.set(K_SYMBOL, require_symbol(symbol_).encode("utf-8"))
    storage.set_int(K_DECIMALS, decimals_)


def name() -> str:
    return storage.get(K_NAME).decode("utf-8")


def symbol() -> str:
    return storage.get(K_SYMBOL).decode("utf-8")


def decimals() -> int:
    return storage.get_int(K_DECIMALS)


def total_supply() -> int:
    return storage.get_int(K_TOTAL)


# ------------------------------------------------------------------------------
# Views
# ------------------------------------------------------------------------------


def balance_of(addr: bytes) -> int:
    return storage.get_int(key_balance(addr))


def allowance(owner: bytes, spender: bytes) -> int:
    return storage.get_int(key_allow(owner, spender))


# ------------------------------------------------------------------------------
# Ledger primitives
# ------------------------------------------------------------------------------


def _set_balance(addr: bytes, n: int) -> None:
    k = key_balance(addr)
    if n == 0:
        storage.delete(k)
    else:
        storage.set_int(k, n)


def _approve(owner: bytes, spender: bytes, amount: int) -> None:
    owner = _addr(owner, "ERC20: approve from the zero address")
    spender = _addr(spender, "ERC20: approve to the zero address")
    storage.set_int(key_allow(owner, spender), amount)
    events.emit(EVT_APPROVAL, {b"owner": owner, b"spender": spender, b"value": amount})


def move(sender: bytes, recipient: bytes, amount: int) -> None:
    """Move `amount` from `sender` to `recipient`; emits Transfer."""
    sender = _addr(sender, "ERC20: transfer from the zero address")
    recipient = _addr(recipient, "ERC20: transfer to the zero address")
    require_amount(amount)

    from_bal = u256_sub(balance_of(sender), amount, exc=InsufficientBalanceError, msg=ERR_TRANSFER_EXCEEDS)
    _set_balance(sender, from_bal)
    # Re-read after the debit so a self-transfer nets to zero.
    _set_balance(recipient, u256_add(balance_of(recipient), amount))

    events.emit(EVT_TRANSFER, {b"from": sender, b"to": recipient, b"value": amount})


def mint_to(to: bytes, amount: int) -> None:
    """Create `amount` for `to`; emits Transfer(ZERO → to)."""
    to = _addr(to, "ERC20: mint to the zero address")
    require_amount(amount)
    storage.set_int(K_TOTAL, u256_add(total_supply(), amount))
    _set_balance(to, u256_add(balance_of(to), amount))
    events.emit(EVT_TRANSFER, {b"from": ZERO_ADDRESS, b"to": to, b"value": amount})


def burn_from_balance(account: bytes, amount: int) -> None:
    """Destroy `amount` held by `account`; emits Transfer(account → ZERO)."""
    account = _addr(account, "ERC20: burn from the zero address")
    require_amount(amount)
    bal = u256_sub(balance_of(account), amount, exc=InsufficientBalanceError, msg=ERR_BURN_EXCEEDS)
    _set_balance(account, bal)
    storage.set_int(K_TOTAL, u256_sub(total_supply(), amount))
    events.emit(EVT_TRANSFER, {b"from": account, b"to": ZERO_ADDRESS, b"value": amount})


def spend_allowance(owner: bytes, spender: bytes, amount: int) -> None:
    """Debit allowance(owner → spender) by `amount`; unlimited allowances stay put."""
    require_amount(amount)
    current = allowance(owner, spender)
    if current == U256_MAX:
        return
    if current < amount:
        raise InsufficientAllowanceError(
            ERR_ALLOWANCE.decode(),
            context={"allowance": current, "amount": amount},
        )
    _approve(owner, spender, current - amount)


# ------------------------------------------------------------------------------
# Mutations (explicit caller)
# ------------------------------------------------------------------------------


def transfer(caller: bytes, to: bytes, amount: int) -> bool:
    move(caller, to, amount)
    return True


def approve(caller: bytes, spender: bytes, amount: int) -> bool:
    _approve(caller, spender, require_amount(amount))
    return True


def transfer_from(caller: bytes, owner: bytes, to: bytes, amount: int) -> bool:
    """
    Spender (`caller`) transfers `amount` from `owner` to `to` using allowance.
    """
    spend_allowance(owner, caller, amount)
    move(owner, to, amount)
    return True


def increase_allowance(caller: bytes, spender: bytes, added: int) -> bool:
    require_amount(added, "added")
    _approve(caller, spender, u256_add(allowance(caller, spender), added))
    return True


def decrease_allowance(caller: bytes, spender: bytes, subtracted: int) -> bool:
    require_amount(subtracted, "subtracted")
    cur = allowance(caller, spender)
    new = u256_sub(cur, subtracted, exc=InsufficientAllowanceError, msg=ERR_DECREASE_BELOW_ZERO)
    _approve(caller, spender, new)
    return True


__all__ = [
    "name",
    "symbol",
    "decimals",
    "total_supply",
    "balance_of",
    "allowance",
    "transfer",
    "approve",
    "transfer_from",
    "increase_allowance",
    "decrease_allowance",
]
