# -*- coding: utf-8 -*-
"""
Fan Token behavior: deployment, transfers, operator transfers, roles,
minting and burning, with the exact error each failure path raises.
"""
from __future__ import annotations

import re

import pytest

from contracts.stdlib import ZERO_ADDRESS
from contracts.stdlib.access.roles import Role
from contracts.stdlib.errors import (AlreadyInitializedError,
                                     AuthorizationError,
                                     InsufficientAllowanceError,
                                     InsufficientBalanceError,
                                     InvalidArgumentError,
                                     PolicyDisabledError)
from contracts.tools.client import balance_changes

from .conftest import INITIAL_SUPPLY

MISSING_ROLE = re.compile(r"AccessControl: account 0x[0-9a-f]{40} is missing role 0x[0-9a-f]{64}")


@pytest.fixture
def accts(funded_accounts):
    return funded_accounts


# ---------------------------------------------------------------------------
# Deployment
# ---------------------------------------------------------------------------


class TestDeployment:
    def test_sets_owner(self, token, accts):
        assert token.owner() == accts["deployer"]

    def test_assigns_total_supply_to_owner(self, token, accts):
        assert token.total_supply() == INITIAL_SUPPLY
        assert token.balance_of(accts["deployer"]) == token.total_supply()

    def test_metadata(self, token):
        assert token.name() == "Fan Token"
        assert token.symbol() == "FAN"
        assert token.decimals() == 18

    def test_deployer_holds_every_role(self, token, accts):
        for role in Role:
            assert token.has_role(role, accts["deployer"]), role

    def test_role_admin_is_admin_for_all_roles(self, token):
        for role in Role:
            assert token.get_role_admin(role) == Role.ADMIN.id

    def test_latches_start_enabled(self, token):
        assert token.is_modify_supply_disabled() is False
        assert token.is_operators_disabled() is False

    def test_initialize_runs_once(self, token, accts):
        with pytest.raises(AlreadyInitializedError, match="already initialized"):
            token.instance.transact(accts["alice"], "initialize", "Other", "OTH", 5)
        assert token.owner() == accts["deployer"]
        assert token.total_supply() == INITIAL_SUPPLY


# ---------------------------------------------------------------------------
# Transfers
# ---------------------------------------------------------------------------


class TestTransactions:
    def test_transfer_between_accounts(self, token, accts):
        alice, bob = accts["alice"], accts["bob"]
        token.transfer(alice, 50)
        assert token.balance_of(accts["deployer"]) == 950
        assert token.balance_of(alice) == 50

        token.connect(alice).transfer(bob, 50)
        assert token.balance_of(alice) == 0
        assert token.balance_of(bob) == 50
        assert token.total_supply() == INITIAL_SUPPLY

    def test_transfer_emits_event(self, token, accts):
        r = token.transfer(accts["alice"], 50)
        (ev,) = r.events_named(b"Transfer")
        assert ev.args == {"from": accts["deployer"], "to": accts["alice"], "value": 50}

    def test_fails_on_insufficient_balance(self, token, accts):
        before = token.balance_of(accts["deployer"])
        with pytest.raises(InsufficientBalanceError, match="ERC20: transfer amount exceeds balance"):
            token.connect(accts["alice"]).transfer(accts["deployer"], 1)
        assert token.balance_of(accts["deployer"]) == before

    def test_transfer_to_zero_address_rejected(self, token):
        with pytest.raises(InvalidArgumentError, match="zero address"):
            token.transfer(ZERO_ADDRESS, 1)

    def test_self_transfer_keeps_balance(self, token, accts):
        token.transfer(accts["deployer"], 10)
        assert token.balance_of(accts["deployer"]) == INITIAL_SUPPLY

    def test_zero_value_transfer_allowed(self, token, accts):
        r = token.transfer(accts["alice"], 0)
        assert r.events_named(b"Transfer")[0].args["value"] == 0


class TestAllowances:
    def test_approve_and_transfer_from(self, token, accts):
        alice, bob = accts["alice"], accts["bob"]
        r = token.approve(alice, 100)
        assert r.events_named(b"Approval")[0].args == {
            "owner": accts["deployer"],
            "spender": alice,
            "value": 100,
        }
        token.connect(alice).transfer_from(accts["deployer"], bob, 60)
        assert token.balance_of(bob) == 60
        assert token.allowance(accts["deployer"], alice) == 40

    def test_transfer_from_without_allowance(self, token, accts):
        with pytest.raises(InsufficientAllowanceError, match="ERC20: insufficient allowance"):
            token.connect(accts["alice"]).transfer_from(accts["deployer"], accts["bob"], 1)

    def test_unlimited_allowance_not_decremented(self, token, accts):
        unlimited = (1 << 256) - 1
        token.approve(accts["alice"], unlimited)
        token.connect(accts["alice"]).transfer_from(accts["deployer"], accts["bob"], 10)
        assert token.allowance(accts["deployer"], accts["alice"]) == unlimited

    def test_increase_and_decrease(self, token, accts):
        alice = accts["alice"]
        token.increase_allowance(alice, 30)
        token.increase_allowance(alice, 20)
        assert token.allowance(accts["deployer"], alice) == 50
        token.decrease_allowance(alice, 45)
        assert token.allowance(accts["deployer"], alice) == 5
        with pytest.raises(InsufficientAllowanceError, match="decreased allowance below zero"):
            token.decrease_allowance(alice, 6)
        assert token.allowance(accts["deployer"], alice) == 5

    def test_approve_zero_spender_rejected(self, token):
        with pytest.raises(InvalidArgumentError):
            token.approve(ZERO_ADDRESS, 1)


# ---------------------------------------------------------------------------
# Operator transfers
# ---------------------------------------------------------------------------


class TestOperatorTransactions:
    def test_operator_moves_without_allowance(self, token, accts):
        token.transfer(accts["alice"], 100)
        token.operator_transfer_from(accts["alice"], accts["bob"], 40)
        assert token.balance_of(accts["alice"]) == 60
        assert token.balance_of(accts["bob"]) == 40
        assert token.allowance(accts["alice"], accts["deployer"]) == 0

    def test_non_operator_rejected(self, token, accts):
        with pytest.raises(AuthorizationError, match=MISSING_ROLE) as ei:
            token.connect(accts["alice"]).operator_transfer_from(accts["deployer"], accts["alice"], 1)
        assert ei.value.account == accts["alice"]
        assert ei.value.role == Role.OPERATOR.id

    def test_insufficient_balance(self, token, accts):
        with pytest.raises(InsufficientBalanceError, match="ERC20: transfer amount exceeds balance"):
            token.operator_transfer_from(accts["alice"], accts["bob"], 1)

    def test_disable_operators(self, token, accts):
        r = token.disable_operators()
        assert [e.args for e in r.events_named(b"OperatorsDisabled")] == [{"sender": accts["deployer"]}]
        assert token.is_operators_disabled() is True
        with pytest.raises(PolicyDisabledError, match=re.escape("OperatorTransfer: disabled functionality.")):
            token.operator_transfer_from(accts["deployer"], accts["alice"], 1)

    def test_role_checked_before_latch(self, token, accts):
        token.disable_operators()
        with pytest.raises(AuthorizationError):
            token.connect(accts["alice"]).operator_transfer_from(accts["deployer"], accts["alice"], 1)

    def test_disable_is_idempotent(self, token):
        token.disable_operators()
        r = token.disable_operators()
        assert r.events == ()
        assert token.is_operators_disabled() is True

    def test_disable_requires_admin(self, token, accts):
        with pytest.raises(AuthorizationError):
            token.connect(accts["alice"]).disable_operators()
        assert token.is_operators_disabled() is False


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


class TestRoles:
    def test_grant_and_revoke(self, token, accts):
        alice = accts["alice"]
        r = token.grant_role(Role.MINTER, alice)
        assert r.events_named(b"RoleGranted")[0].args == {
            "role": Role.MINTER.id,
            "account": alice,
            "sender": accts["deployer"],
        }
        token.connect(alice).mint(alice, 5)
        assert token.balance_of(alice) == 5

        token.revoke_role(Role.MINTER, alice)
        assert not token.has_role(Role.MINTER, alice)
        with pytest.raises(AuthorizationError, match=MISSING_ROLE):
            token.connect(alice).mint(alice, 5)

    def test_grant_is_idempotent(self, token, accts):
        token.grant_role(Role.BURNER, accts["alice"])
        r = token.grant_role(Role.BURNER, accts["alice"])
        assert r.events == ()

    def test_revoke_missing_is_noop(self, token, accts):
        r = token.revoke_role(Role.BURNER, accts["alice"])
        assert r.events == ()

    def test_only_admin_grants(self, token, accts):
        alice = accts["alice"]
        token.grant_role(Role.MINTER, alice)
        with pytest.raises(AuthorizationError) as ei:
            token.connect(alice).grant_role(Role.MINTER, accts["bob"])
        assert ei.value.role == Role.ADMIN.id

    def test_unknown_role_rejected(self, token, accts):
        with pytest.raises(InvalidArgumentError, match="unknown role"):
            token.grant_role(b"\x11" * 32, accts["alice"])

    def test_has_role_for_unknown_id_is_false(self, token, accts):
        assert token.has_role(b"\x11" * 32, accts["alice"]) is False
        assert token.has_role(b"\x11" * 32, accts["deployer"]) is False

    def test_renounce_self_only(self, token, accts):
        alice = accts["alice"]
        token.grant_role(Role.OPERATOR, alice)
        with pytest.raises(AuthorizationError, match="only renounce roles for self"):
            token.connect(accts["bob"]).renounce_role(Role.OPERATOR, alice)
        token.connect(alice).renounce_role(Role.OPERATOR, alice)
        assert not token.has_role(Role.OPERATOR, alice)

    def test_admin_may_revoke_own_admin(self, token, accts):
        token.revoke_role(Role.ADMIN, accts["deployer"])
        with pytest.raises(AuthorizationError):
            token.grant_role(Role.MINTER, accts["alice"])


# ---------------------------------------------------------------------------
# Minting
# ---------------------------------------------------------------------------


class TestMinting:
    def test_owner_mints_to_self(self, token, accts):
        owner = accts["deployer"]
        r = token.mint(owner, 50)
        assert token.total_supply() == 1050
        assert token.balance_of(owner) == 1050
        assert r.events_named(b"Transfer")[0].args == {"from": ZERO_ADDRESS, "to": owner, "value": 50}

    def test_mint_to_other_account(self, token, accts):
        r = token.mint(accts["alice"], 50)
        assert token.total_supply() == 1050
        assert token.balance_of(accts["alice"]) == 50
        assert r.events_named(b"Transfer")[0].args == {"from": ZERO_ADDRESS, "to": accts["alice"], "value": 50}

    def test_non_minter(self, token, accts):
        with pytest.raises(AuthorizationError, match=MISSING_ROLE):
            token.connect(accts["alice"]).mint(accts["alice"], 50)

    def test_mint_after_disable(self, token, accts):
        r = token.disable_modify_supply()
        assert r.events_named(b"ModifySupplyDisabled")[0].args == {"sender": accts["deployer"]}
        with pytest.raises(PolicyDisabledError, match=re.escape("Fixed supply. Mint blocked.")):
            token.mint(accts["alice"], 50)
        assert token.total_supply() == INITIAL_SUPPLY

    def test_non_minter_after_disable_sees_fixed_supply(self, token, accts):
        token.disable_modify_supply()
        with pytest.raises(PolicyDisabledError, match=re.escape("Fixed supply. Mint blocked.")):
            token.connect(accts["alice"]).mint(accts["alice"], 50)
        assert token.total_supply() == INITIAL_SUPPLY

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amount(self, token, accts, amount):
        with pytest.raises(InvalidArgumentError):
            token.mint(accts["alice"], amount)

    def test_mint_to_zero_address(self, token):
        with pytest.raises(InvalidArgumentError, match="zero address"):
            token.mint(ZERO_ADDRESS, 1)

    def test_disable_modify_supply_requires_admin(self, token, accts):
        with pytest.raises(AuthorizationError):
            token.connect(accts["alice"]).disable_modify_supply()
        assert token.is_modify_supply_disabled() is False


# ---------------------------------------------------------------------------
# Burning
# ---------------------------------------------------------------------------


class TestBurning:
    def test_burn(self, token, accts):
        r = token.burn(50)
        assert token.total_supply() == 950
        assert token.balance_of(accts["deployer"]) == 950
        assert r.events_named(b"Transfer")[0].args == {"from": accts["deployer"], "to": ZERO_ADDRESS, "value": 50}

    def test_burn_exceeding_balance(self, token):
        with pytest.raises(InsufficientBalanceError, match="ERC20: burn amount exceeds balance"):
            token.burn(INITIAL_SUPPLY + 1)

    def test_burn_from_without_allowance(self, token, accts):
        token.transfer(accts["alice"], 100)
        with pytest.raises(InsufficientAllowanceError, match="ERC20: insufficient allowance"):
            token.burn_from(accts["alice"], 10)

    def test_burn_from_with_allowance(self, token, accts):
        alice = accts["alice"]
        token.transfer(alice, 100)
        token.connect(alice).approve(accts["deployer"], 30)
        token.burn_from(alice, 20)
        assert token.balance_of(alice) == 80
        assert token.allowance(alice, accts["deployer"]) == 10
        assert token.total_supply() == 980

    def test_non_burner_burn_from(self, token, accts):
        with pytest.raises(AuthorizationError, match=MISSING_ROLE):
            token.connect(accts["alice"]).burn_from(accts["deployer"], 1)

    def test_non_burner_burn(self, token, accts):
        token.transfer(accts["alice"], 10)
        with pytest.raises(AuthorizationError):
            token.connect(accts["alice"]).burn(1)

    def test_burn_after_disable(self, token, accts):
        token.disable_modify_supply()
        with pytest.raises(PolicyDisabledError, match=re.escape("Fixed supply. Burn blocked.")):
            token.burn(1)
        # latch is checked before the allowance
        with pytest.raises(PolicyDisabledError, match=re.escape("Fixed supply. Burn blocked.")):
            token.burn_from(accts["alice"], 1)
        assert token.total_supply() == INITIAL_SUPPLY

    def test_non_burner_after_disable_sees_fixed_supply(self, token, accts):
        alice = accts["alice"]
        token.transfer(alice, 10)
        token.approve(alice, 5)
        token.disable_modify_supply()
        blocked = re.escape("Fixed supply. Burn blocked.")
        with pytest.raises(PolicyDisabledError, match=blocked):
            token.connect(alice).burn(1)
        with pytest.raises(PolicyDisabledError, match=blocked):
            token.connect(alice).burn_from(accts["deployer"], 1)
        assert token.balance_of(alice) == 10
        assert token.allowance(accts["deployer"], alice) == 5

    def test_disable_modify_supply_idempotent(self, token):
        token.disable_modify_supply()
        r = token.disable_modify_supply()
        assert r.events == ()
        assert token.is_modify_supply_disabled() is True


# ---------------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------------


class TestOwnership:
    def test_transfer_moves_owner_and_roles(self, token, accts):
        wallet = accts["system_wallet"]
        r = token.transfer_ownership(wallet)
        assert r.events_named(b"OwnershipTransferred")[0].args == {"previous": accts["deployer"], "new": wallet}
        assert token.owner() == wallet
        for role in Role:
            assert token.has_role(role, wallet)
            assert not token.has_role(role, accts["deployer"])
        with pytest.raises(AuthorizationError):
            token.mint(accts["alice"], 1)
        token.connect(wallet).mint(accts["alice"], 1)

    def test_balances_stay_put(self, token, accts):
        token.transfer_ownership(accts["system_wallet"])
        assert token.balance_of(accts["deployer"]) == INITIAL_SUPPLY
        assert token.balance_of(accts["system_wallet"]) == 0

    def test_non_owner_rejected(self, token, accts):
        with pytest.raises(AuthorizationError, match="Ownable: caller is not the owner"):
            token.connect(accts["alice"]).transfer_ownership(accts["alice"])

    def test_zero_new_owner_rejected(self, token):
        with pytest.raises(InvalidArgumentError):
            token.transfer_ownership(ZERO_ADDRESS)

    def test_transfer_to_self_keeps_roles(self, token, accts):
        token.transfer_ownership(accts["deployer"])
        for role in Role:
            assert token.has_role(role, accts["deployer"])


def test_balance_changes_helper(token, accts):
    alice, bob = accts["alice"], accts["bob"]
    token.transfer(alice, 100)
    deltas = balance_changes(token, [alice, bob], lambda: token.connect(alice).transfer(bob, 30))
    assert deltas == {alice: -30, bob: 30}
