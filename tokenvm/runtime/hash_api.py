"""
tokenvm.runtime.hash_api — deterministic hashing wrappers for the VM runtime.

Strictly bytes-in, bytes-out (no implicit text encoding).

Provided APIs
-------------
- keccak256(data: bytes) -> bytes      # Ethereum-style Keccak-256 (pycryptodome)
- sha3_256(data: bytes) -> bytes       # FIPS-202 SHA3-256 (hashlib)
- sha3_512(data: bytes) -> bytes
- keccak256_hex(...), sha3_256_hex(...)
- hash_concat_keccak256(*chunks: bytes) -> bytes

Keccak-256 differs from SHA3-256 only in padding; role identifiers use
Keccak-256 so they match the ids other ERC20 tooling derives from the same
labels.
"""

from __future__ import annotations

import hashlib

from Crypto.Hash import keccak as _keccak

from tokenvm.errors import VmError


def _ensure_bytes(buf: object, name: str = "data") -> bytes:
    if isinstance(buf, (bytes, bytearray, memoryview)):
        return bytes(buf)
    raise VmError(f"{name} must be bytes-like (got {type(buf).__name__})", code="hash_invalid")


def keccak256(data: bytes) -> bytes:
    h = _keccak.new(digest_bits=256)
    h.update(_ensure_bytes(data))
    return h.digest()


def sha3_256(data: bytes) -> bytes:
    return hashlib.sha3_256(_ensure_bytes(data)).digest()


def sha3_512(data: bytes) -> bytes:
    return hashlib.sha3_512(_ensure_bytes(data)).digest()


def keccak256_hex(data: bytes) -> str:
    return "0x" + keccak256(data).hex()


def sha3_256_hex(data: bytes) -> str:
    return "0x" + sha3_256(data).hex()


def hash_concat_keccak256(*chunks: bytes) -> bytes:
    h = _keccak.new(digest_bits=256)
    for i, c in enumerate(chunks):
        h.update(_ensure_bytes(c, f"chunk[{i}]"))
    return h.digest()


__all__ = [
    "keccak256",
    "sha3_256",
    "sha3_512",
    "keccak256_hex",
    "sha3_256_hex",
    "hash_concat_keccak256",
]
