"""
tokenvm.runtime.loader — resolve a contract module and compute its code hash.

A contract is an ordinary Python module of plain functions that import the
contract-facing ``stdlib`` surface. The loader accepts:

  - an already-imported module object,
  - a dotted module name (``"contracts.fan_token.contract"``),
  - a path to a ``.py`` file.

and returns a :class:`LoadedCode` carrying the module, its public function
table and a stable code hash (sha3-256 over the module source bytes). The
engine registers implementations by that hash; proxies pin it.

Public functions are the module's callables listed in ``__all__`` (when
present) or every top-level function not starting with ``_``.
"""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Callable, Dict, Union

from tokenvm.errors import ContractNotFound, UnknownFunctionError

from .hash_api import sha3_256

log = logging.getLogger(__name__)

CodeRef = Union[ModuleType, str, Path]


@dataclass(frozen=True)
class LoadedCode:
    name: str
    module: ModuleType = field(repr=False, compare=False)
    code_hash: bytes
    exports: Dict[str, Callable] = field(repr=False, compare=False, default_factory=dict)

    @property
    def code_hash_hex(self) -> str:
        return "0x" + self.code_hash.hex()

    def function(self, name: str) -> Callable:
        fn = self.exports.get(name)
        if fn is None:
            raise UnknownFunctionError(
                f"no public function {name!r} in {self.name}",
                context={"function": name, "code_hash": self.code_hash_hex},
            )
        return fn


def _import_path(path: Path) -> ModuleType:
    if not path.is_file():
        raise ContractNotFound(f"contract source not found: {path}")
    mod_name = f"tokenvm_contract_{sha3_256(str(path.resolve()).encode()).hex()[:16]}"
    spec = importlib.util.spec_from_file_location(mod_name, path)
    if spec is None or spec.loader is None:
        raise ContractNotFound(f"cannot load contract source: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _resolve(ref: CodeRef) -> ModuleType:
    if isinstance(ref, ModuleType):
        return ref
    if isinstance(ref, Path) or (isinstance(ref, str) and ref.endswith(".py")):
        return _import_path(Path(ref))
    if isinstance(ref, str):
        try:
            return importlib.import_module(ref)
        except ModuleNotFoundError as e:
            raise ContractNotFound(f"contract module not found: {ref}") from e
    raise ContractNotFound(f"unsupported contract reference type: {type(ref).__name__}")


def _source_bytes(module: ModuleType) -> bytes:
    path = getattr(module, "__file__", None)
    if path and Path(path).is_file():
        return Path(path).read_bytes()
    # Modules without a backing file (built dynamically); hash their source text.
    return inspect.getsource(module).encode("utf-8")


def _exports(module: ModuleType) -> Dict[str, Callable]:
    names = getattr(module, "__all__", None)
    out: Dict[str, Callable] = {}
    if names is not None:
        for nm in names:
            obj = getattr(module, nm, None)
            if inspect.isfunction(obj):
                out[nm] = obj
        return out
    for nm, obj in vars(module).items():
        if nm.startswith("_") or not inspect.isfunction(obj):
            continue
        out[nm] = obj
    return out


def load_module(ref: CodeRef) -> LoadedCode:
    module = _resolve(ref)
    code = LoadedCode(
        name=module.__name__,
        module=module,
        code_hash=sha3_256(_source_bytes(module)),
        exports=_exports(module),
    )
    log.debug("loaded contract %s hash=%s exports=%d", code.name, code.code_hash_hex, len(code.exports))
    return code


__all__ = ["CodeRef", "LoadedCode", "load_module"]
