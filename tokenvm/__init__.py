"""
tokenvm — in-process, deterministic contract VM for Fan Token.

Contracts are plain Python modules that only touch the sanctioned surface:

    from stdlib import storage, events, hash, abi

The engine binds that surface to a per-call journaled frame, so every call
either commits all of its writes and events or none of them.

Public entrypoints
------------------
- Engine                 : owns deployed instances and the code registry
- ContractInstance       : a deployed contract (storage snapshot + code)
- Receipt                : result envelope of a state-changing call
- load_module(ref)       : load a contract module by import path or file path
"""

from __future__ import annotations

from .version import __version__
from .errors import (ContractNotFound, Revert, StaticCallError,
                     UnknownFunctionError, VmError)
from .runtime.engine import ContractInstance, Engine, Receipt
from .runtime.loader import LoadedCode, load_module


def version() -> str:
    """Return the tokenvm semantic version string."""
    return __version__


__all__ = [
    "__version__",
    "version",
    "Engine",
    "ContractInstance",
    "Receipt",
    "LoadedCode",
    "load_module",
    "VmError",
    "Revert",
    "StaticCallError",
    "UnknownFunctionError",
    "ContractNotFound",
]
