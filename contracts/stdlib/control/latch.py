# -*- coding: utf-8 -*-
"""
contracts.stdlib.control.latch
==============================

One-way latches: ENABLED (key absent) → DISABLED (key = ``b"\\x01"``).

There is no reset path. Once a latch is tripped every later read in every
later call observes it tripped.

Public API
----------
- ``is_tripped(name) -> bool``
- ``require_open(name, reason) -> None``: raise PolicyDisabledError(reason) if tripped
- ``trip(name, caller, event) -> bool``: trip once; emits `event` {"sender"} only
  on the first trip; returns True iff this call tripped it

Authorization is the caller's responsibility.
"""
from __future__ import annotations

from typing import Final

from stdlib import events, storage  # type: ignore

from contracts.stdlib.errors import PolicyDisabledError

LATCH_PREFIX: Final[bytes] = b"control:latch:"

__all__ = ["LATCH_PREFIX", "is_tripped", "require_open", "trip"]


def _key(name: bytes) -> bytes:
    return LATCH_PREFIX + bytes(name)


def is_tripped(name: bytes) -> bool:
    return storage.get(_key(name)) == b"\x01"


def require_open(name: bytes, reason: str) -> None:
    if is_tripped(name):
        raise PolicyDisabledError(reason, context={"latch": bytes(name).decode("ascii")})


def trip(name: bytes, caller: bytes, event: bytes) -> bool:
    if is_tripped(name):
        return False
    storage.set(_key(name), b"\x01")
    events.emit(event, {b"sender": bytes(caller)})
    return True
