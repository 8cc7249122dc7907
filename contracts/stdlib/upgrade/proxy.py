# -*- coding: utf-8 -*-
"""
contracts.stdlib.upgrade.proxy
==============================

Proxy module that pins an implementation by **code hash**.

The engine deploys a proxied instance by running this module against the
instance's storage: ``initialize`` records the implementation hash and makes
the deployer the *proxy admin*. On every user call the engine reads
``implementation_hash()`` and dispatches to the registered implementation, so
token state lives in the proxy's storage and survives upgrades.

Entry points (run through ``ContractInstance.admin_transact``)
--------------------------------------------------------------
- ``initialize(caller, impl_hash)``     one-time; caller becomes proxy admin
- ``upgrade_to(caller, new_hash)``      proxy admin only
- ``change_admin(caller, new_admin)``   proxy admin only

Views: ``implementation_hash()``, ``admin()``, ``uuid()``.

Events
------
- ``b"PROXY:Initialized" {hash}``
- ``b"PROXY:Upgraded" {old, new}``
- ``b"PROXY:AdminChanged" {previous, new}``

The proxy admin is separate from the token owner: handing token ownership to
a system wallet leaves upgrade authority with the deployer.
"""
from __future__ import annotations

from typing import Final

from stdlib import abi, events, storage  # type: ignore

from contracts.stdlib import require_address
from contracts.stdlib.errors import AuthorizationError

from . import proxiable_uuid

#: Storage key for the current implementation code hash.
_IMPL_HASH_KEY: Final[bytes] = b"proxy:impl_hash"

#: Storage key for the proxy admin address.
_ADMIN_KEY: Final[bytes] = b"proxy:admin"

CODE_HASH_LEN: Final[int] = 32


def uuid() -> bytes:
    return proxiable_uuid()


def _validate_hash(h: bytes) -> bytes:
    if not isinstance(h, (bytes, bytearray)) or len(h) != CODE_HASH_LEN:
        abi.revert(b"PROXY:HASH_LEN")
    return bytes(h)


def _require_admin(caller: bytes) -> None:
    if admin() != bytes(caller):
        raise AuthorizationError(caller, message="Proxy: caller is not the proxy admin")


def implementation_hash() -> bytes:
    """The stored implementation code hash (empty bytes if unset)."""
    return storage.get(_IMPL_HASH_KEY)


def admin() -> bytes:
    return storage.get(_ADMIN_KEY)


def initialize(caller: bytes, impl_hash: bytes) -> None:
    if storage.get(_IMPL_HASH_KEY):
        abi.revert(b"PROXY:ALREADY_INIT")
    impl_hash = _validate_hash(impl_hash)
    storage.set(_ADMIN_KEY, require_address(caller, "proxy admin"))
    storage.set(_IMPL_HASH_KEY, impl_hash)
    events.emit(b"PROXY:Initialized", {b"hash": impl_hash})


def upgrade_to(caller: bytes, new_hash: bytes) -> None:
    _require_admin(caller)
    new_hash = _validate_hash(new_hash)
    old = implementation_hash()
    if old == new_hash:
        abi.revert(b"PROXY:SAME")
    storage.set(_IMPL_HASH_KEY, new_hash)
    events.emit(b"PROXY:Upgraded", {b"old": old, b"new": new_hash})


def change_admin(caller: bytes, new_admin: bytes) -> None:
    _require_admin(caller)
    new_admin = require_address(new_admin, "new_admin")
    previous = admin()
    storage.set(_ADMIN_KEY, new_admin)
    events.emit(b"PROXY:AdminChanged", {b"previous": previous, b"new": new_admin})


__all__ = [
    "uuid",
    "implementation_hash",
    "admin",
    "initialize",
    "upgrade_to",
    "change_admin",
]
