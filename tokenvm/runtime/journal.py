"""
tokenvm.runtime.journal — per-call write journal and the active frame.

Every contract call runs inside a :class:`Frame`. The frame reads through to
an immutable *base* snapshot of the instance storage and stages writes in an
overlay (``None`` marks a deletion). Emitted events are buffered alongside.

Nothing touches the instance until the engine calls :meth:`Frame.merged`
and swaps the resulting mapping in; a frame that raised is simply dropped.

The active frame is tracked in a :class:`contextvars.ContextVar`, so
concurrent calls on different threads each see their own frame.

Usage
-----
    frame = Frame(base=state, address=addr, sender=caller)
    with activate(frame):
        fn(caller, *args)
    new_state = frame.merged()
"""

from __future__ import annotations

import contextlib
import contextvars
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

from tokenvm.errors import StaticCallError, StorageError

# Sentinel for "no snapshot yet"; an empty read-only mapping.
EMPTY_STATE: Mapping[bytes, bytes] = MappingProxyType({})


@dataclass
class Frame:
    """
    A single call frame.

    - ``base``: committed storage snapshot (never mutated).
    - ``writes``: staged storage changes; ``None`` means deletion.
    - ``events``: validated events in emission order.
    - ``static``: read-only frame; any write or emit fails.
    """

    base: Mapping[bytes, bytes]
    address: bytes = b""
    sender: bytes = b""
    static: bool = False
    writes: Dict[bytes, Optional[bytes]] = field(default_factory=dict)
    events: List[Any] = field(default_factory=list)

    # --- storage ops ---

    def read(self, key: bytes) -> Optional[bytes]:
        if key in self.writes:
            return self.writes[key]
        return self.base.get(key)

    def write(self, key: bytes, value: Optional[bytes]) -> None:
        if self.static:
            raise StaticCallError(
                "state write in read-only call",
                context={"key": "0x" + key.hex()},
            )
        self.writes[key] = value

    def record_event(self, event: Any) -> None:
        if self.static:
            raise StaticCallError("event emitted in read-only call")
        self.events.append(event)

    @property
    def dirty(self) -> bool:
        return bool(self.writes) or bool(self.events)

    # --- commit ---

    def merged(self) -> Mapping[bytes, bytes]:
        """
        Return a new read-only mapping: ``base`` with ``writes`` applied.
        O(len(base) + len(writes)); the base snapshot is left untouched.
        """
        if not self.writes:
            return self.base
        out: Dict[bytes, bytes] = dict(self.base)
        for k, v in self.writes.items():
            if v is None:
                out.pop(k, None)
            else:
                out[k] = v
        return MappingProxyType(out)


_current: contextvars.ContextVar[Optional[Frame]] = contextvars.ContextVar(
    "tokenvm_frame", default=None
)


def current_frame() -> Frame:
    """Return the active frame, or fail if called outside a contract call."""
    frame = _current.get()
    if frame is None:
        raise StorageError("no active call frame (contract code run outside the engine)")
    return frame


def has_frame() -> bool:
    return _current.get() is not None


@contextlib.contextmanager
def activate(frame: Frame) -> Iterator[Frame]:
    token = _current.set(frame)
    try:
        yield frame
    finally:
        _current.reset(token)


__all__ = ["EMPTY_STATE", "Frame", "current_frame", "has_frame", "activate"]
