from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from tokenvm.config import load_config
from tokenvm.errors import EventError

from .journal import current_frame

# Basic bounds (kept generous; tests only check that we *validate*).
MAX_EVENT_NAME_BYTES = 64
MAX_KEY_LEN = 64
MAX_BYTES_LEN = 4096
MAX_INT_BITS = 256

# Keys must be identifier-like: letters/underscore, then letters/digits/underscore.
_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Event:
    """In-VM representation of an emitted event."""

    name: bytes
    args: Dict[str, Any]

    @property
    def label(self) -> str:
        return self.name.decode("ascii", errors="replace")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view: bytes become 0x-hex."""
        out: Dict[str, Any] = {}
        for k, v in self.args.items():
            out[k] = "0x" + v.hex() if isinstance(v, bytes) else v
        return {"name": self.label, "args": out}


# --- Validation helpers -----------------------------------------------------


def _check_name(name: Any) -> bytes:
    if not isinstance(name, (bytes, bytearray)):
        raise EventError("event name must be bytes", context={"where": "name_type"})
    b = bytes(name)
    if len(b) == 0:
        raise EventError("event name must be non-empty", context={"where": "name_empty"})
    if len(b) > MAX_EVENT_NAME_BYTES:
        raise EventError("event name too long", context={"where": "name_length", "len": len(b)})
    return b


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise EventError("event key must be str", context={"where": "key_type"})
    if len(key) == 0 or len(key) > MAX_KEY_LEN:
        raise EventError("event key length out of range", context={"where": "key_length", "len": len(key)})
    if not _KEY_RE.match(key):
        raise EventError(
            "event key has invalid characters",
            context={"where": "key_grammar", "key": key},
        )
    return key


def _check_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        b = bytes(value)
        if len(b) > MAX_BYTES_LEN:
            raise EventError("event bytes arg too long", context={"where": "value_bytes_length", "len": len(b)})
        return b

    if isinstance(value, bool):
        # bool is a subclass of int, so check it before int.
        return value

    if isinstance(value, int):
        if value.bit_length() > MAX_INT_BITS:
            raise EventError(
                "event int arg out of range",
                context={"where": "value_int_bits", "bits": value.bit_length()},
            )
        return int(value)

    raise EventError(
        "unsupported event arg type",
        context={"where": "value_type", "py_type": type(value).__name__},
    )


# --- Public API -------------------------------------------------------------


def build_event(name: bytes, args: Mapping[Any, Any]) -> Event:
    bname = _check_name(name)
    if not isinstance(args, Mapping):
        raise EventError("event args must be a mapping", context={"where": "args_type"})
    checked: Dict[str, Any] = {}
    for raw_k, raw_v in args.items():
        checked[_check_key(raw_k)] = _check_value(raw_v)
    return Event(bname, checked)


def emit(name: bytes, args: Mapping[Any, Any]) -> None:
    """Validate and buffer an event in the active call frame."""
    event = build_event(name, args)
    frame = current_frame()
    cap = load_config().max_logs_per_call
    if len(frame.events) >= cap:
        raise EventError("too many events in one call", context={"cap": cap})
    frame.record_event(event)


def get_events() -> List[Event]:
    """Events emitted so far in the active frame (uncommitted)."""
    return list(current_frame().events)


def filter_events(events: Iterable[Event], name: bytes) -> List[Event]:
    return [ev for ev in events if ev.name == name]


__all__ = [
    "Event",
    "build_event",
    "emit",
    "get_events",
    "filter_events",
]
