from __future__ import annotations

from tokenvm.runtime.abi import Revert, require, revert

__all__ = ["Revert", "revert", "require"]
