# -*- coding: utf-8 -*-
"""
Operator-transfer gate
======================

OPERATOR role holders may move tokens between any two accounts without an
allowance, until an ADMIN trips the operator latch.

The role is checked *before* the latch: a non-operator gets an
``AuthorizationError`` even after operators are disabled.
"""

from __future__ import annotations

from typing import Final

from contracts.stdlib.access.roles import Role, require_role
from contracts.stdlib.control import latch

from . import fungible

OPERATORS_LATCH: Final[bytes] = b"operators"
EVT_OPERATORS_DISABLED: Final[bytes] = b"OperatorsDisabled"

OPERATORS_DISABLED: Final[str] = "OperatorTransfer: disabled functionality."


def is_operators_disabled() -> bool:
    return latch.is_tripped(OPERATORS_LATCH)


def disable_operators(caller: bytes) -> bool:
    require_role(Role.ADMIN, caller)
    latch.trip(OPERATORS_LATCH, caller, EVT_OPERATORS_DISABLED)
    return True


def operator_transfer_from(caller: bytes, sender: bytes, recipient: bytes, amount: int) -> bool:
    require_role(Role.OPERATOR, caller)
    latch.require_open(OPERATORS_LATCH, OPERATORS_DISABLED)
    fungible.move(sender, recipient, amount)
    return True


__all__ = [
    "OPERATORS_LATCH",
    "OPERATORS_DISABLED",
    "is_operators_disabled",
    "disable_operators",
    "operator_transfer_from",
]
