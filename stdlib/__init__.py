"""
Top-level 'stdlib' shim for the tokenvm contract VM.

Contracts and tests use:

    from stdlib import storage, events, hash, abi
"""

from tokenvm.stdlib import abi, events, hash, storage

__all__ = ["storage", "events", "hash", "abi"]
