from __future__ import annotations

from typing import Any, Dict, List, Mapping

from tokenvm.runtime import events_api as _rt

Event = _rt.Event

__all__ = ["Event", "emit", "get_events"]


def _to_str_key(k: Any) -> str:
    """
    stdlib-facing keys are usually bytes; runtime-facing keys must be str.
    Non-ASCII bytes keys are passed through so the runtime rejects them.
    """
    if isinstance(k, (bytes, bytearray)):
        try:
            return bytes(k).decode("ascii")
        except UnicodeDecodeError:
            return bytes(k).hex()
    return k


def emit(name: bytes, args: Mapping[Any, Any]) -> None:
    """
    Contract-facing emit:

        emit(b"Transfer", {b"from": a, b"to": b, b"value": 5})
    """
    converted: Dict[Any, Any] = {_to_str_key(k): v for k, v in args.items()}
    _rt.emit(name, converted)


def get_events() -> List[Event]:
    return _rt.get_events()
