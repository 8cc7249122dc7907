"""
tokenvm.runtime.engine — in-process execution of Python contracts.

The engine keeps two tables:

  - a code registry keyed by code hash (see :mod:`tokenvm.runtime.loader`),
  - deployed :class:`ContractInstance` objects keyed by 20-byte address.

Execution model
---------------
Each call runs in a fresh :class:`~tokenvm.runtime.journal.Frame` over the
instance's current committed snapshot:

  - ``transact(sender, fn, *args)`` invokes ``fn(sender, *args)``. Mutating
    calls on one instance are serialized by a re-entrant lock. On return the
    staged writes are merged into a *new* snapshot which replaces the old one
    in a single reference swap, and the buffered events land in the
    :class:`Receipt`. Any exception drops the frame untouched and propagates.
  - ``call(fn, *args)`` is read-only: it runs against whatever snapshot is
    current when it starts, takes no lock, and fails with
    :class:`~tokenvm.errors.StaticCallError` on any write or emit.

Proxies
-------
A proxy instance runs a small proxy module (for example
``contracts.stdlib.upgrade.proxy``) that keeps the implementation code hash
and the proxy admin in the instance's own storage. For every call the engine
asks the proxy module for ``implementation_hash()`` *inside the same frame*
and dispatches to the registered implementation, so an upgrade swaps code
while state stays put.

Contract authors never import this module; they use ``stdlib``.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from tokenvm.errors import ContractNotFound, UnknownFunctionError

from .context import AddressLike, CallEnv, to_address, to_hex
from .events_api import Event
from .hash_api import keccak256
from .journal import EMPTY_STATE, Frame, activate
from .loader import CodeRef, LoadedCode, load_module

log = logging.getLogger(__name__)

_CREATE_TAG = b"tokenvm/create"


@dataclass(frozen=True)
class Receipt:
    """Outcome of a committed mutating call."""

    env: CallEnv
    function: str
    result: Any
    events: Tuple[Event, ...]

    @property
    def sender(self) -> bytes:
        return self.env.sender

    @property
    def address(self) -> bytes:
        return self.env.address

    def events_named(self, name: bytes) -> List[Event]:
        return [ev for ev in self.events if ev.name == name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "env": self.env.to_dict(),
            "function": self.function,
            "events": [ev.to_dict() for ev in self.events],
        }


class ContractInstance:
    """
    A deployed contract: an address, a storage snapshot and the code that
    runs against it (directly, or through a proxy module).
    """

    def __init__(
        self,
        engine: "Engine",
        address: bytes,
        code: LoadedCode,
        *,
        proxy: bool = False,
    ) -> None:
        self.engine = engine
        self.address = address
        self.code = code
        self.is_proxy = proxy
        self._state: Mapping[bytes, bytes] = EMPTY_STATE
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        kind = "proxy" if self.is_proxy else "direct"
        return f"ContractInstance({to_hex(self.address)}, {kind}, code={self.code.name})"

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #

    def _target(self) -> LoadedCode:
        """Resolve the code that handles user calls. Must run inside a frame."""
        if not self.is_proxy:
            return self.code
        code_hash = self.code.function("implementation_hash")()
        if not code_hash:
            raise ContractNotFound("proxy has no implementation", context={"address": to_hex(self.address)})
        return self.engine.code(code_hash)

    @property
    def implementation(self) -> LoadedCode:
        frame = Frame(base=self._state, address=self.address, static=True)
        with activate(frame):
            return self._target()

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    def _run(
        self,
        env: CallEnv,
        resolve: Callable[[], Callable],
        args: Sequence[Any],
        base: Mapping[bytes, bytes],
    ) -> Tuple[Frame, Any]:
        frame = Frame(base=base, address=env.address, sender=env.sender, static=env.static)
        with activate(frame):
            fn = resolve()
            result = fn(*args)
        return frame, result

    def _commit(self, env: CallEnv, name: str, resolve: Callable[[], Callable], args: Sequence[Any]) -> Receipt:
        with self._lock:
            try:
                frame, result = self._run(env, resolve, args, self._state)
            except Exception as e:
                log.debug("call %s on %s reverted: %s", name, to_hex(self.address), e)
                raise
            self._state = frame.merged()
        receipt = Receipt(env=env, function=name, result=result, events=tuple(frame.events))
        log.debug(
            "call %s on %s by %s committed: %d writes, %d events",
            name,
            to_hex(self.address),
            to_hex(env.sender),
            len(frame.writes),
            len(receipt.events),
        )
        return receipt

    def transact(self, sender: AddressLike, name: str, *args: Any) -> Receipt:
        """Run a mutating call as `sender`; the function receives `sender` first."""
        who = to_address(sender)
        env = CallEnv(sender=who, address=self.address, nonce=self.engine.next_nonce())
        return self._commit(env, name, lambda: self._target().function(name), (who,) + args)

    def call(self, name: str, *args: Any) -> Any:
        """Run a read-only call against the current committed snapshot."""
        env = CallEnv(sender=b"", address=self.address, static=True)
        _, result = self._run(env, lambda: self._target().function(name), args, self._state)
        return result

    def _require_proxy(self, name: str) -> None:
        if not self.is_proxy:
            raise UnknownFunctionError(
                "not a proxy instance",
                context={"function": name, "address": to_hex(self.address)},
            )

    def admin_transact(self, sender: AddressLike, name: str, *args: Any) -> Receipt:
        """Run a mutating call against the proxy module itself (upgrade, change admin)."""
        self._require_proxy(name)
        who = to_address(sender)
        env = CallEnv(sender=who, address=self.address, nonce=self.engine.next_nonce())
        return self._commit(env, name, lambda: self.code.function(name), (who,) + args)

    def admin_call(self, name: str, *args: Any) -> Any:
        self._require_proxy(name)
        env = CallEnv(sender=b"", address=self.address, static=True)
        _, result = self._run(env, lambda: self.code.function(name), args, self._state)
        return result

    # ------------------------------------------------------------------ #
    # Inspection
    # ------------------------------------------------------------------ #

    def storage_snapshot(self) -> Dict[bytes, bytes]:
        """Copy of the committed storage (for tests and tooling)."""
        return dict(self._state)


class Engine:
    """Code registry plus the set of deployed instances."""

    def __init__(self) -> None:
        self._codes: Dict[bytes, LoadedCode] = {}
        self._instances: Dict[bytes, ContractInstance] = {}
        self._deploy_nonces: Dict[bytes, int] = {}
        self._seq = itertools.count()
        self._lock = threading.RLock()

    # ---- code registry ----

    def register(self, ref: CodeRef) -> LoadedCode:
        code = ref if isinstance(ref, LoadedCode) else load_module(ref)
        with self._lock:
            existing = self._codes.get(code.code_hash)
            if existing is not None:
                return existing
            self._codes[code.code_hash] = code
        log.info("registered code %s (%s)", code.name, code.code_hash_hex)
        return code

    def code(self, code_hash: bytes) -> LoadedCode:
        try:
            return self._codes[bytes(code_hash)]
        except KeyError:
            raise ContractNotFound(
                "no registered code for hash", context={"code_hash": to_hex(code_hash)}
            ) from None

    # ---- instances ----

    def next_nonce(self) -> int:
        return next(self._seq)

    def _new_address(self, deployer: bytes) -> bytes:
        with self._lock:
            n = self._deploy_nonces.get(deployer, 0)
            self._deploy_nonces[deployer] = n + 1
        return keccak256(_CREATE_TAG + deployer + n.to_bytes(8, "big"))[-20:]

    def _add(self, inst: ContractInstance) -> ContractInstance:
        with self._lock:
            self._instances[inst.address] = inst
        return inst

    def at(self, address: AddressLike) -> ContractInstance:
        addr = to_address(address)
        try:
            return self._instances[addr]
        except KeyError:
            raise ContractNotFound("no instance at address", context={"address": to_hex(addr)}) from None

    def instances(self) -> List[ContractInstance]:
        with self._lock:
            return list(self._instances.values())

    def deploy(
        self,
        impl: CodeRef,
        *,
        sender: AddressLike,
        constructor: Optional[str] = None,
        args: Sequence[Any] = (),
    ) -> ContractInstance:
        """Deploy `impl` directly (no proxy); optionally run `constructor`."""
        deployer = to_address(sender)
        code = self.register(impl)
        inst = ContractInstance(self, self._new_address(deployer), code)
        if constructor is not None:
            inst.transact(deployer, constructor, *args)
        log.info("deployed %s at %s", code.name, to_hex(inst.address))
        return self._add(inst)

    def deploy_proxy(
        self,
        impl: CodeRef,
        *,
        sender: AddressLike,
        proxy: CodeRef,
        initializer: Optional[str] = "initialize",
        args: Sequence[Any] = (),
    ) -> ContractInstance:
        """
        Deploy a proxy in front of `impl`: pin the implementation hash with
        `sender` as proxy admin, then run `initializer(sender, *args)`
        through the proxy. The instance is only published once both succeed.
        """
        deployer = to_address(sender)
        impl_code = self.register(impl)
        proxy_code = proxy if isinstance(proxy, LoadedCode) else load_module(proxy)
        inst = ContractInstance(self, self._new_address(deployer), proxy_code, proxy=True)
        inst.admin_transact(deployer, "initialize", impl_code.code_hash)
        if initializer is not None:
            inst.transact(deployer, initializer, *args)
        log.info(
            "deployed proxy %s -> %s (%s)",
            to_hex(inst.address),
            impl_code.name,
            impl_code.code_hash_hex,
        )
        return self._add(inst)

    def upgrade_to(self, instance: ContractInstance, impl: CodeRef, *, sender: AddressLike) -> Receipt:
        """Register `impl` and point the proxy at it (proxy admin only)."""
        code = self.register(impl)
        receipt = instance.admin_transact(sender, "upgrade_to", code.code_hash)
        log.info("upgraded %s -> %s (%s)", to_hex(instance.address), code.name, code.code_hash_hex)
        return receipt


__all__ = ["Receipt", "ContractInstance", "Engine"]
