# -*- coding: utf-8 -*-
"""
Helpers shared by the deploy CLI, the client harness and tests:

- canonical JSON for deterministic artifacts (the deployments registry)
- atomic file writes (temp file in the target dir, fsync, rename)
- logging setup for CLI entry points, as text or one JSON object per line

Library modules never configure logging themselves; they only do
``log = logging.getLogger(__name__)``.
"""
from __future__ import annotations

import datetime as _dt
import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Final, Union

__all__ = [
    "canonical_json_str",
    "atomic_write_text",
    "setup_logging",
    "JsonFormatter",
]

PathLike = Union[str, os.PathLike]

_TEXT_FORMAT: Final[str] = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _encode_extra(o: Any) -> Any:
    """bytes → 0x-hex, paths → str; anything else is a caller error."""
    if isinstance(o, (bytes, bytearray, memoryview)):
        return "0x" + bytes(o).hex()
    if isinstance(o, Path):
        return os.fspath(o)
    raise TypeError(f"not JSON serializable: {type(o).__name__}")


def canonical_json_str(obj: Any) -> str:
    """Sorted keys, no whitespace, no NaN; bytes rendered as 0x-hex."""
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_encode_extra,
    )


def atomic_write_text(path: PathLike, text: str) -> Path:
    """Replace `path` with `text` (UTF-8) so readers never see a partial file."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(text.encode("utf-8"))
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, target)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
    return target


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, msg (+ exc)."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": _dt.datetime.fromtimestamp(record.created, tz=_dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=_encode_extra)


def setup_logging(level: Union[str, int] = "info", *, json_logs: bool = False) -> None:
    """Configure the root logger for a CLI process (stderr, replacing prior handlers)."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        lvl = resolved if isinstance(resolved, int) else logging.INFO
    else:
        lvl = level
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_logs else logging.Formatter(_TEXT_FORMAT))
    logging.basicConfig(level=lvl, handlers=[handler], force=True)
