"""
Error types raised by the tokenvm runtime.

Every error carries a short machine-readable ``code``, a human-readable
``message`` and an optional ``context`` mapping for debugging / tooling:

    VmError("simple message")
    VmError("message", code="some_code", context={...})

``Revert`` is the base for failures raised *by contract code* (a failed
precondition). The engine discards the call frame for any exception, so a
revert never leaves partial state behind.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class VmError(Exception):
    """
    Structured error used inside the tokenvm runtime.

    Attributes:
        code: short machine-readable code string
        message: human-readable message
        context: optional extra fields for debugging / tooling
    """

    default_code = "vm_error"

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code: str = code or self.default_code
        self.message: str = str(message)
        self.context: Dict[str, Any] = dict(context or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }


class Revert(VmError):
    """Raised when contract code rejects a call (abi.revert / failed require)."""

    default_code = "revert"


class StaticCallError(VmError):
    """A read-only call attempted to write storage or emit events."""

    default_code = "static_call"


class UnknownFunctionError(VmError):
    """The resolved implementation has no public function of that name."""

    default_code = "unknown_function"


class ContractNotFound(VmError):
    """No deployed instance, or no registered implementation code, for a reference."""

    default_code = "contract_not_found"


class StorageError(VmError):
    """Invalid storage access (bad key/value type or size, no active frame)."""

    default_code = "storage_invalid"


class EventError(VmError):
    """Invalid event emission (bad name, key or value)."""

    default_code = "event_invalid"


__all__ = [
    "VmError",
    "Revert",
    "StaticCallError",
    "UnknownFunctionError",
    "ContractNotFound",
    "StorageError",
    "EventError",
]
