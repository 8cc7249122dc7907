# -*- coding: utf-8 -*-
"""
contracts.stdlib.access.roles
=============================

Role registry for a closed set of roles.

Role ids
--------
Each role is identified by ``keccak256(utf8(label))``, the same 32-byte id
other ERC20 access-control tooling derives from these labels:

============  ======================
Role          Label
============  ======================
MINTER        ``MINTER_ROLE``
BURNER        ``BURNER_ROLE``
OPERATOR      ``OPERATOR_ROLE``
ADMIN         ``DEFAULT_ADMIN_ROLE``
============  ======================

ADMIN administers every role, itself included: only an ADMIN holder may
grant or revoke anything. Grant, revoke and renounce reject role ids outside
this set with ``InvalidArgumentError``; ``has_role`` reports False for them.

Mutations are idempotent; ``RoleGranted`` / ``RoleRevoked`` fire only when
membership actually changes.
"""
from __future__ import annotations

import enum
from typing import Dict, List, Union

from stdlib import events, storage  # type: ignore
from stdlib import hash as _hash  # type: ignore

from contracts.stdlib import require_address
from contracts.stdlib.errors import AuthorizationError, InvalidArgumentError

from . import ROLE_MEMBER_PREFIX

__all__ = [
    "Role",
    "RoleLike",
    "role_id",
    "MINTER_ROLE",
    "BURNER_ROLE",
    "OPERATOR_ROLE",
    "DEFAULT_ADMIN_ROLE",
    "ALL_ROLES",
    "normalize_role",
    "has_role",
    "roles_of",
    "get_role_admin",
    "require_role",
    "grant_role",
    "revoke_role",
    "renounce_role",
    "grant_role_unchecked",
    "revoke_role_unchecked",
]


def role_id(label: Union[str, bytes]) -> bytes:
    """keccak256 of the UTF-8 label."""
    if isinstance(label, str):
        label = label.encode("utf-8")
    return _hash.keccak256(bytes(label))


class Role(enum.Enum):
    MINTER = "MINTER_ROLE"
    BURNER = "BURNER_ROLE"
    OPERATOR = "OPERATOR_ROLE"
    ADMIN = "DEFAULT_ADMIN_ROLE"

    @property
    def label(self) -> str:
        return self.value

    @property
    def id(self) -> bytes:
        return _ROLE_IDS[self]


_ROLE_IDS: Dict[Role, bytes] = {r: role_id(r.value) for r in Role}
_BY_ID: Dict[bytes, Role] = {v: k for k, v in _ROLE_IDS.items()}

MINTER_ROLE: bytes = Role.MINTER.id
BURNER_ROLE: bytes = Role.BURNER.id
OPERATOR_ROLE: bytes = Role.OPERATOR.id
DEFAULT_ADMIN_ROLE: bytes = Role.ADMIN.id

# Grant order used at initialization and ownership handoff.
ALL_ROLES = (Role.ADMIN, Role.MINTER, Role.BURNER, Role.OPERATOR)

RoleLike = Union[Role, bytes]


def normalize_role(role: RoleLike) -> bytes:
    """Return the 32-byte id for `role`, rejecting ids outside the known set."""
    if isinstance(role, Role):
        return role.id
    if isinstance(role, (bytes, bytearray)) and bytes(role) in _BY_ID:
        return bytes(role)
    raise InvalidArgumentError(
        "AccessControl: unknown role",
        context={"role": role.hex() if isinstance(role, (bytes, bytearray)) else repr(role)},
    )


def _key_member(role: bytes, account: bytes) -> bytes:
    return ROLE_MEMBER_PREFIX + role + b":" + account


# ---- Queries ----------------------------------------------------------------


def has_role(role: RoleLike, account: bytes) -> bool:
    """Plain membership query; an unknown role id is held by nobody."""
    if isinstance(role, Role):
        rid = role.id
    elif isinstance(role, (bytes, bytearray)) and bytes(role) in _BY_ID:
        rid = bytes(role)
    else:
        return False
    if not account:
        return False
    return storage.get(_key_member(rid, bytes(account))) == b"\x01"


def roles_of(account: bytes) -> List[Role]:
    return [r for r in ALL_ROLES if has_role(r, account)]


def get_role_admin(role: RoleLike) -> bytes:
    """Every role is administered by ADMIN."""
    normalize_role(role)
    return DEFAULT_ADMIN_ROLE


def require_role(role: RoleLike, caller: bytes) -> None:
    rid = normalize_role(role)
    if not has_role(rid, caller):
        raise AuthorizationError(caller, rid)


# ---- Mutations ---------------------------------------------------------------


def grant_role_unchecked(role: RoleLike, account: bytes, sender: bytes) -> bool:
    """
    Grant without an authorization check (initialization / ownership handoff).
    Returns True when membership changed.
    """
    rid = normalize_role(role)
    account = require_address(account)
    if has_role(rid, account):
        return False
    storage.set(_key_member(rid, account), b"\x01")
    events.emit(b"RoleGranted", {b"role": rid, b"account": account, b"sender": bytes(sender)})
    return True


def revoke_role_unchecked(role: RoleLike, account: bytes, sender: bytes) -> bool:
    rid = normalize_role(role)
    account = bytes(account)
    if not has_role(rid, account):
        return False
    storage.delete(_key_member(rid, account))
    events.emit(b"RoleRevoked", {b"role": rid, b"account": account, b"sender": bytes(sender)})
    return True


def grant_role(caller: bytes, role: RoleLike, account: bytes) -> None:
    """ADMIN only. Idempotent; emits RoleGranted on first grant."""
    require_role(get_role_admin(role), caller)
    grant_role_unchecked(role, account, caller)


def revoke_role(caller: bytes, role: RoleLike, account: bytes) -> None:
    """ADMIN only. Idempotent; emits RoleRevoked on change."""
    require_role(get_role_admin(role), caller)
    revoke_role_unchecked(role, account, caller)


def renounce_role(caller: bytes, role: RoleLike, account: bytes) -> None:
    """An account may drop its own roles, and only its own."""
    rid = normalize_role(role)
    if bytes(account) != bytes(caller):
        raise AuthorizationError(caller, rid, "AccessControl: can only renounce roles for self")
    revoke_role_unchecked(rid, account, caller)
