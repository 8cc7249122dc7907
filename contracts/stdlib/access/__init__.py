# -*- coding: utf-8 -*-
"""
contracts.stdlib.access
=======================

Access-control helpers for token contracts:

- :mod:`.roles`   — fixed role set (MINTER, BURNER, OPERATOR, ADMIN) with
  keccak256 role ids, grant/revoke/renounce and role checks.
- :mod:`.ownable` — single owner slot with owner-only guard and transfer.

Storage layout (by convention)
------------------------------
- Owner:
    key ``b"access:owner"`` → 20-byte address (absent before initialization).
- Role membership:
    key ``b"access:role:member:" + role + b":" + addr`` → ``b"\\x01"`` if member.

These keys are deterministic byte strings; *do not* change them after deploy.

Events
------
- "OwnershipTransferred" args: {"previous": bytes, "new": bytes}
- "RoleGranted"          args: {"role": bytes, "account": bytes, "sender": bytes}
- "RoleRevoked"          args: {"role": bytes, "account": bytes, "sender": bytes}
"""
from __future__ import annotations

from typing import Final

OWNER_KEY: Final[bytes] = b"access:owner"
ROLE_MEMBER_PREFIX: Final[bytes] = b"access:role:member:"

__all__ = ["OWNER_KEY", "ROLE_MEMBER_PREFIX"]
