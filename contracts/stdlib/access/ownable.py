# -*- coding: utf-8 -*-
"""
contracts.stdlib.access.ownable
================================

Single-owner slot:

- read the current owner (`get_owner`)
- set the owner once (`init_owner`)
- check that a caller is the owner (`require_owner`)
- hand ownership to a new account (`transfer_ownership`)

Renouncing ownership is deliberately not offered: a token whose owner is the
zero address could never hand its roles on.

Events:
    - "OwnershipTransferred" args: {"previous": bytes, "new": bytes}
"""
from __future__ import annotations

from typing import Optional

from stdlib import events, storage  # type: ignore

from contracts.stdlib import ZERO_ADDRESS, require_address
from contracts.stdlib.errors import AuthorizationError

from . import OWNER_KEY

__all__ = [
    "OWNER_KEY",
    "get_owner",
    "init_owner",
    "require_owner",
    "transfer_ownership",
]


def get_owner() -> Optional[bytes]:
    """Return the current owner address, or None if not set."""
    v = storage.get(OWNER_KEY)
    return v if v else None


def init_owner(owner: bytes) -> bool:
    """
    Set the owner if none is set yet. Returns True when it was written.
    Emits OwnershipTransferred(ZERO → owner).
    """
    if get_owner() is not None:
        return False
    owner = require_address(owner, "owner")
    storage.set(OWNER_KEY, owner)
    events.emit(b"OwnershipTransferred", {b"previous": ZERO_ADDRESS, b"new": owner})
    return True


def require_owner(caller: bytes) -> None:
    owner = get_owner()
    if owner is None or owner != bytes(caller):
        raise AuthorizationError(caller)


def transfer_ownership(caller: bytes, new_owner: bytes) -> bytes:
    """
    Owner-only: move the owner slot to `new_owner` (non-zero).
    Returns the previous owner.
    """
    require_owner(caller)
    new_owner = require_address(new_owner, "new_owner")
    previous = get_owner() or ZERO_ADDRESS
    storage.set(OWNER_KEY, new_owner)
    events.emit(b"OwnershipTransferred", {b"previous": previous, b"new": new_owner})
    return previous
