from __future__ import annotations

from tokenvm.runtime.hash_api import keccak256, sha3_256, sha3_512

__all__ = ["keccak256", "sha3_256", "sha3_512"]
