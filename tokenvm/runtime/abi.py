from __future__ import annotations

from typing import Any, Mapping, NoReturn, Optional, Type, Union

from tokenvm.errors import Revert

__all__ = ["Revert", "revert", "require"]


def _as_text(msg: Union[str, bytes]) -> str:
    if isinstance(msg, (bytes, bytearray)):
        return bytes(msg).decode("utf-8", errors="replace")
    return str(msg)


def revert(
    msg: Union[str, bytes] = "revert",
    *,
    code: Optional[str] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> NoReturn:
    """
    Abort the current call. The engine discards the call frame, so no
    staged writes or events survive.
    """
    raise Revert(_as_text(msg), code=code, context=context)


def require(
    cond: Any,
    msg: Union[str, bytes] = "require failed",
    *,
    exc: Type[Revert] = Revert,
) -> None:
    """Revert with `msg` (as `exc`) unless `cond` is truthy."""
    if not cond:
        raise exc(_as_text(msg))
