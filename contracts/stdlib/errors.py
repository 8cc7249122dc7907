# -*- coding: utf-8 -*-
"""
contracts.stdlib.errors
=======================

Revert types raised by the token libraries. All subclass
:class:`tokenvm.errors.Revert`, so the engine rolls back the call frame and
callers can catch either the precise type or ``Revert``.

Messages follow the wording ERC20 tooling already expects, e.g.
``"ERC20: insufficient allowance"``; tests match on type first and on the
message second.
"""
from __future__ import annotations

from typing import Optional

from stdlib import abi  # type: ignore

Revert = abi.Revert

__all__ = [
    "Revert",
    "AuthorizationError",
    "PolicyDisabledError",
    "InsufficientBalanceError",
    "InsufficientAllowanceError",
    "AlreadyInitializedError",
    "InvalidArgumentError",
]


def _hex(b: bytes) -> str:
    return "0x" + bytes(b).hex()


class AuthorizationError(Revert):
    """Caller lacks the role (or ownership) the operation requires."""

    default_code = "unauthorized"

    def __init__(self, account: bytes, role: Optional[bytes] = None, message: Optional[str] = None) -> None:
        self.account = bytes(account)
        self.role = bytes(role) if role is not None else None
        if message is None:
            if self.role is None:
                message = "Ownable: caller is not the owner"
            else:
                message = f"AccessControl: account {_hex(self.account)} is missing role {_hex(self.role)}"
        ctx = {"account": _hex(self.account)}
        if self.role is not None:
            ctx["role"] = _hex(self.role)
        super().__init__(message, context=ctx)


class PolicyDisabledError(Revert):
    """A one-way latch has been tripped; the operation is permanently off."""

    default_code = "policy_disabled"


class InsufficientBalanceError(Revert):
    default_code = "insufficient_balance"


class InsufficientAllowanceError(Revert):
    default_code = "insufficient_allowance"


class AlreadyInitializedError(Revert):
    default_code = "already_initialized"

    def __init__(self, message: str = "Initializable: contract is already initialized") -> None:
        super().__init__(message)


class InvalidArgumentError(Revert):
    """Zero address, non-positive amount, unknown role id, malformed metadata."""

    default_code = "invalid_argument"
