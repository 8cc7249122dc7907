# -*- coding: utf-8 -*-
"""
Supply-mutation gate
====================

Role-gated minting and burning with a one-way "fixed supply" latch.

Check order (observable through which error a failing call raises):

- ``mint``:      latch → MINTER role → arguments (non-zero `to`, amount > 0) → ledger
- ``burn``:      latch → BURNER role → balance
- ``burn_from``: latch → BURNER role → allowance(account → caller) → balance

``disable_modify_supply`` is ADMIN-only and idempotent; it emits
``ModifySupplyDisabled {sender}`` on the first trip only. Once tripped, mint
and burn fail for every caller, whatever roles they hold.
"""

from __future__ import annotations

from typing import Final

from contracts.stdlib.access.roles import Role, require_role
from contracts.stdlib.control import latch
from contracts.stdlib.errors import InvalidArgumentError

from . import fungible

SUPPLY_LATCH: Final[bytes] = b"modify_supply"
EVT_SUPPLY_DISABLED: Final[bytes] = b"ModifySupplyDisabled"

MINT_BLOCKED: Final[str] = "Fixed supply. Mint blocked."
BURN_BLOCKED: Final[str] = "Fixed supply. Burn blocked."


def is_modify_supply_disabled() -> bool:
    return latch.is_tripped(SUPPLY_LATCH)


def disable_modify_supply(caller: bytes) -> bool:
    require_role(Role.ADMIN, caller)
    latch.trip(SUPPLY_LATCH, caller, EVT_SUPPLY_DISABLED)
    return True


def mint(caller: bytes, to: bytes, amount: int) -> bool:
    latch.require_open(SUPPLY_LATCH, MINT_BLOCKED)
    require_role(Role.MINTER, caller)
    if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
        raise InvalidArgumentError("mint amount must be a positive integer", context={"amount": repr(amount)})
    fungible.mint_to(to, amount)
    return True


def burn(caller: bytes, amount: int) -> bool:
    latch.require_open(SUPPLY_LATCH, BURN_BLOCKED)
    require_role(Role.BURNER, caller)
    fungible.burn_from_balance(caller, amount)
    return True


def burn_from(caller: bytes, account: bytes, amount: int) -> bool:
    latch.require_open(SUPPLY_LATCH, BURN_BLOCKED)
    require_role(Role.BURNER, caller)
    fungible.spend_allowance(account, caller, amount)
    fungible.burn_from_balance(account, amount)
    return True


__all__ = [
    "SUPPLY_LATCH",
    "MINT_BLOCKED",
    "BURN_BLOCKED",
    "is_modify_supply_disabled",
    "disable_modify_supply",
    "mint",
    "burn",
    "burn_from",
]
