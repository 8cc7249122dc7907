"""
tokenvm.stdlib
==============

Contract-facing standard library surface.

Contracts do:

    from stdlib import storage, events, hash, abi

- storage : get(key)->bytes, set(key, value), delete(key), get_int/set_int
- events  : emit(name: bytes, args: dict)
- hash    : keccak256(b), sha3_256(b), sha3_512(b)
- abi     : revert(msg), require(cond, msg)

All calls act on the active call frame; outside an engine call they fail.
"""

from __future__ import annotations

from . import abi, events, hash, storage

__all__ = ("storage", "events", "hash", "abi")
