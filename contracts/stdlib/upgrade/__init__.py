# -*- coding: utf-8 -*-
"""
contracts.stdlib.upgrade
========================

Helpers for **upgradeable contracts**:

- This module: the initialize-once guard. Behind a proxy there is no
  constructor, so state setup runs through an ``initialize`` entrypoint that
  must refuse a second run against the same storage.
- :mod:`.proxy`: the proxy module itself (implementation code-hash pin +
  proxy admin), executed by the engine for every call to a proxied instance.

Storage
-------
- ``b"upg:initialized"`` → u256 version of the last completed initializer.

Events
------
- ``b"Initialized" {version}``
"""
from __future__ import annotations

from typing import Final

from stdlib import events, storage  # type: ignore
from stdlib import hash as _hash  # type: ignore

from contracts.stdlib.errors import AlreadyInitializedError

#: Namespace tag used to derive a stable proxiable UUID.
UPGRADE_NAMESPACE: Final[bytes] = b"tokenvm/upgrade/v1"

_INIT_KEY: Final[bytes] = b"upg:initialized"


def proxiable_uuid() -> bytes:
    """32-byte UUID derived from :data:`UPGRADE_NAMESPACE` (keccak256)."""
    return _hash.keccak256(UPGRADE_NAMESPACE)


def initialized_version() -> int:
    return storage.get_int(_INIT_KEY)


def initializer(version: int = 1) -> None:
    """
    Mark initializer `version` as run. Raises AlreadyInitializedError if this
    (or a later) version has already completed.
    """
    if version < 1 or initialized_version() >= version:
        raise AlreadyInitializedError()
    storage.set_int(_INIT_KEY, version)
    events.emit(b"Initialized", {b"version": version})


__all__ = [
    "UPGRADE_NAMESPACE",
    "proxiable_uuid",
    "initialized_version",
    "initializer",
]
