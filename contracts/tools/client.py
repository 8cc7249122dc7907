# -*- coding: utf-8 -*-
"""
Typed client for a deployed Fan Token instance.

    client = TokenClient(deployment.instance)
    alice = client.connect(ALICE)            # same instance, calls sent as ALICE
    alice.transfer(BOB, 50)
    client.balance_of(BOB)                    # 50

Views run as read-only calls; mutating methods run as ``transact`` with the
connected signer and return the :class:`tokenvm.Receipt`. Addresses may be
given as bytes or 0x-hex; roles as :class:`Role` or raw 32-byte ids.

``balance_changes`` mirrors the "changes token balances" assertion style:
run an action and report the per-account deltas it produced.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional, Union

from tokenvm import ContractInstance, Receipt
from tokenvm.runtime.context import AddressLike, to_address

from contracts.stdlib.access.roles import Role

RoleArg = Union[Role, bytes]


def _role(r: RoleArg) -> bytes:
    return r.id if isinstance(r, Role) else bytes(r)


class TokenClient:
    def __init__(self, instance: ContractInstance, signer: Optional[AddressLike] = None) -> None:
        self.instance = instance
        self._signer = to_address(signer) if signer is not None else None

    def __repr__(self) -> str:
        who = "0x" + self._signer.hex() if self._signer else None
        return f"TokenClient({self.instance!r}, signer={who})"

    def connect(self, signer: AddressLike) -> "TokenClient":
        return TokenClient(self.instance, signer)

    @property
    def signer(self) -> bytes:
        if self._signer is None:
            raise ValueError("no signer connected; use client.connect(address)")
        return self._signer

    def _tx(self, fn: str, *args: Any) -> Receipt:
        return self.instance.transact(self.signer, fn, *args)

    def _view(self, fn: str, *args: Any) -> Any:
        return self.instance.call(fn, *args)

    # ---- views ----

    def name(self) -> str:
        return self._view("name")

    def symbol(self) -> str:
        return self._view("symbol")

    def decimals(self) -> int:
        return self._view("decimals")

    def total_supply(self) -> int:
        return self._view("total_supply")

    def balance_of(self, account: AddressLike) -> int:
        return self._view("balance_of", to_address(account))

    def allowance(self, owner: AddressLike, spender: AddressLike) -> int:
        return self._view("allowance", to_address(owner), to_address(spender))

    def owner(self) -> bytes:
        return self._view("owner")

    def has_role(self, role: RoleArg, account: AddressLike) -> bool:
        return self._view("has_role", _role(role), to_address(account))

    def get_role_admin(self, role: RoleArg) -> bytes:
        return self._view("get_role_admin", _role(role))

    def is_modify_supply_disabled(self) -> bool:
        return self._view("is_modify_supply_disabled")

    def is_operators_disabled(self) -> bool:
        return self._view("is_operators_disabled")

    # ---- ERC20 ----

    def transfer(self, to: AddressLike, amount: int) -> Receipt:
        return self._tx("transfer", to_address(to), amount)

    def approve(self, spender: AddressLike, amount: int) -> Receipt:
        return self._tx("approve", to_address(spender), amount)

    def transfer_from(self, owner: AddressLike, to: AddressLike, amount: int) -> Receipt:
        return self._tx("transfer_from", to_address(owner), to_address(to), amount)

    def increase_allowance(self, spender: AddressLike, added: int) -> Receipt:
        return self._tx("increase_allowance", to_address(spender), added)

    def decrease_allowance(self, spender: AddressLike, subtracted: int) -> Receipt:
        return self._tx("decrease_allowance", to_address(spender), subtracted)

    # ---- supply ----

    def mint(self, to: AddressLike, amount: int) -> Receipt:
        return self._tx("mint", to_address(to), amount)

    def burn(self, amount: int) -> Receipt:
        return self._tx("burn", amount)

    def burn_from(self, account: AddressLike, amount: int) -> Receipt:
        return self._tx("burn_from", to_address(account), amount)

    def disable_modify_supply(self) -> Receipt:
        return self._tx("disable_modify_supply")

    # ---- operators ----

    def operator_transfer_from(self, sender: AddressLike, recipient: AddressLike, amount: int) -> Receipt:
        return self._tx("operator_transfer_from", to_address(sender), to_address(recipient), amount)

    def disable_operators(self) -> Receipt:
        return self._tx("disable_operators")

    # ---- roles / ownership ----

    def grant_role(self, role: RoleArg, account: AddressLike) -> Receipt:
        return self._tx("grant_role", _role(role), to_address(account))

    def revoke_role(self, role: RoleArg, account: AddressLike) -> Receipt:
        return self._tx("revoke_role", _role(role), to_address(account))

    def renounce_role(self, role: RoleArg, account: AddressLike) -> Receipt:
        return self._tx("renounce_role", _role(role), to_address(account))

    def transfer_ownership(self, new_owner: AddressLike) -> Receipt:
        return self._tx("transfer_ownership", to_address(new_owner))


def balance_changes(
    client: TokenClient,
    accounts: Iterable[AddressLike],
    action: Callable[[], Any],
) -> Dict[bytes, int]:
    """Run `action` and return balance deltas for `accounts` (after - before)."""
    addrs = [to_address(a) for a in accounts]
    before = {a: client.balance_of(a) for a in addrs}
    action()
    return {a: client.balance_of(a) - before[a] for a in addrs}


__all__ = ["TokenClient", "balance_changes"]
