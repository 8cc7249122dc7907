# -*- coding: utf-8 -*-
"""
Fan Token
=========

Upgradeable ERC20-style token composed from the contracts stdlib:

- ledger ............ contracts.stdlib.token.fungible
- mint / burn ....... contracts.stdlib.token.mintable  (MINTER / BURNER + supply latch)
- operator moves .... contracts.stdlib.token.operator  (OPERATOR + operator latch)
- roles ............. contracts.stdlib.access.roles    (ADMIN administers all roles)
- owner ............. contracts.stdlib.access.ownable
- initialize-once ... contracts.stdlib.upgrade

Runs behind ``contracts.stdlib.upgrade.proxy``; there is no constructor.
``initialize`` sets metadata (decimals fixed at 18), makes the caller owner,
grants the caller every role and mints the initial supply to the caller.

``transfer_ownership`` hands the owner slot *and* every role the previous
owner holds to the new owner, so the new owner ends up with ADMIN authority
and the previous owner with none.

Mutating entrypoints take the calling identity first; views take none.
"""

from __future__ import annotations

from contracts.stdlib.access import ownable, roles
from contracts.stdlib.access.roles import Role
from contracts.stdlib.token import fungible, mintable, operator
from contracts.stdlib.upgrade import initializer, initialized_version

VERSION = 1


# ---- construction -------------------------------------------------------------


def initialize(caller: bytes, name: str, symbol: str, initial_supply: int) -> None:
    initializer(VERSION)
    fungible.set_metadata(name, symbol)
    ownable.init_owner(caller)
    for role in roles.ALL_ROLES:
        roles.grant_role_unchecked(role, caller, caller)
    if initial_supply:
        fungible.mint_to(caller, initial_supply)


def version() -> int:
    return initialized_version()


# ---- metadata & views -----------------------------------------------------------

name = fungible.name
symbol = fungible.symbol
decimals = fungible.decimals
total_supply = fungible.total_supply
balance_of = fungible.balance_of
allowance = fungible.allowance

# ---- ERC20 ----------------------------------------------------------------------

transfer = fungible.transfer
approve = fungible.approve
transfer_from = fungible.transfer_from
increase_allowance = fungible.increase_allowance
decrease_allowance = fungible.decrease_allowance

# ---- supply mutation ------------------------------------------------------------

mint = mintable.mint
burn = mintable.burn
burn_from = mintable.burn_from
disable_modify_supply = mintable.disable_modify_supply
is_modify_supply_disabled = mintable.is_modify_supply_disabled

# ---- operator transfers ---------------------------------------------------------

operator_transfer_from = operator.operator_transfer_from
disable_operators = operator.disable_operators
is_operators_disabled = operator.is_operators_disabled

# ---- roles ----------------------------------------------------------------------

has_role = roles.has_role
get_role_admin = roles.get_role_admin
grant_role = roles.grant_role
revoke_role = roles.revoke_role
renounce_role = roles.renounce_role


def minter_role() -> bytes:
    return Role.MINTER.id


def burner_role() -> bytes:
    return Role.BURNER.id


def operator_role() -> bytes:
    return Role.OPERATOR.id


def default_admin_role() -> bytes:
    return Role.ADMIN.id


# ---- ownership ------------------------------------------------------------------


def owner() -> bytes:
    return ownable.get_owner() or b""


def transfer_ownership(caller: bytes, new_owner: bytes) -> None:
    previous = ownable.transfer_ownership(caller, new_owner)
    if previous == bytes(new_owner):
        return
    for role in roles.roles_of(previous):
        roles.grant_role_unchecked(role, new_owner, caller)
        roles.revoke_role_unchecked(role, previous, caller)


__all__ = [
    "initialize",
    "version",
    "name",
    "symbol",
    "decimals",
    "total_supply",
    "balance_of",
    "allowance",
    "transfer",
    "approve",
    "transfer_from",
    "increase_allowance",
    "decrease_allowance",
    "mint",
    "burn",
    "burn_from",
    "disable_modify_supply",
    "is_modify_supply_disabled",
    "operator_transfer_from",
    "disable_operators",
    "is_operators_disabled",
    "has_role",
    "get_role_admin",
    "grant_role",
    "revoke_role",
    "renounce_role",
    "minter_role",
    "burner_role",
    "operator_role",
    "default_admin_role",
    "owner",
    "transfer_ownership",
]
