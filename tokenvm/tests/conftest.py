from __future__ import annotations

from pathlib import Path

import pytest

from tokenvm import Engine
from tokenvm.config import load_config

# A tiny contract exercising storage, events and reverts.
COUNTER_SRC = '''
from stdlib import abi, events, storage

KEY = b"counter"


def init(caller, start):
    storage.set_int(KEY, start)


def inc(caller, by):
    abi.require(by > 0, b"COUNTER:BAD_STEP")
    storage.set_int(KEY, storage.get_int(KEY) + by)
    events.emit(b"Incremented", {b"by": by, b"sender": caller})
    return storage.get_int(KEY)


def inc_then_fail(caller, by):
    inc(caller, by)
    abi.revert(b"COUNTER:BOOM")


def get():
    return storage.get_int(KEY)


def put(caller, key, value):
    storage.set(key, value)


def drop(caller, key):
    storage.delete(key)


def read(key):
    return storage.get(key)


def has(key):
    return storage.exists(key)


def spam(caller, n):
    for i in range(n):
        events.emit(b"Tick", {b"i": i})


def write_in_view():
    storage.set(b"x", b"1")


def emit_in_view():
    events.emit(b"Nope", {})


def _helper():
    return 1
'''

ALICE = b"\xa1" * 20
BOB = b"\xb0" * 20


@pytest.fixture
def counter_path(tmp_path) -> Path:
    p = tmp_path / "counter.py"
    p.write_text(COUNTER_SRC, encoding="utf-8")
    return p


@pytest.fixture
def engine() -> Engine:
    return Engine()


@pytest.fixture
def counter(engine, counter_path):
    return engine.deploy(counter_path, sender=ALICE, constructor="init", args=(5,))


@pytest.fixture
def vm_env(monkeypatch):
    """Set TOKENVM_* caps for one test; the cached config is rebuilt around it."""
    load_config.cache_clear()
    yield monkeypatch
    monkeypatch.undo()
    load_config.cache_clear()
