# -*- coding: utf-8 -*-
"""
contracts.tests.conftest
========================

Pytest fixtures for the Fan Token suite.

- **funded_accounts**: stable 20-byte addresses derived from tags (sha3).
- **settings**: a fully populated :class:`Settings` built from explicit
  overrides, so the developer's shell environment / `.env` never leaks in.
- **deployment**: a fresh engine with the token deployed behind its proxy.
  Ownership is *not* handed off, so the deployer holds every role, matching
  the usual "deployer is admin" test setup.
- **token**: a :class:`TokenClient` connected as the deployer.

Usage (inside a test file):
    def test_transfer(token, funded_accounts):
        alice = funded_accounts["alice"]
        token.transfer(alice, 50)
        assert token.balance_of(alice) == 50
"""
from __future__ import annotations

import hashlib
import json
import os
from typing import Any, Dict, List, Mapping, Optional

import pytest

from tokenvm import Engine

from contracts.stdlib.token import BAL_PREFIX
from contracts.stdlib.token.fungible import K_TOTAL
from contracts.tools.client import TokenClient
from contracts.tools.config import Settings, load_settings
from contracts.tools.deploy import Deployment, deploy_token

# --- stable env for tests -----------------------------------------------------

os.environ.setdefault("PYTHONHASHSEED", "0")
os.environ.setdefault("TZ", "UTC")

INITIAL_SUPPLY = 1000

ENV_KEYS = (
    "APP_ID",
    "LOG_LEVEL",
    "TOKEN_NAME",
    "TOKEN_SYMBOL",
    "TOKEN_SUPPLY",
    "TOKEN_SYSTEM_WALLET",
    "ROLES_MINTER",
    "ROLES_BURNER",
    "ROLES_OPERATOR",
    "ROLES_DEFAULT_ADMIN",
)


# --- tiny deterministic helpers ----------------------------------------------


def det_address(tag: str) -> bytes:
    """Stable 20-byte address from a tag."""
    return hashlib.sha3_256(tag.encode("utf-8")).digest()[:20]


def base_env(system_wallet: bytes) -> Dict[str, str]:
    return {
        "APP_ID": "fan-token-tests",
        "LOG_LEVEL": "debug",
        "TOKEN_NAME": "Fan Token",
        "TOKEN_SYMBOL": "FAN",
        "TOKEN_SUPPLY": str(INITIAL_SUPPLY),
        "TOKEN_SYSTEM_WALLET": "0x" + system_wallet.hex(),
        "ROLES_MINTER": "MINTER_ROLE",
        "ROLES_BURNER": "BURNER_ROLE",
        "ROLES_OPERATOR": "OPERATOR_ROLE",
        "ROLES_DEFAULT_ADMIN": "DEFAULT_ADMIN_ROLE",
    }


def sum_balances(snapshot: Mapping[bytes, bytes]) -> int:
    return sum(int.from_bytes(v, "big") for k, v in snapshot.items() if k.startswith(BAL_PREFIX))


def stored_total(snapshot: Mapping[bytes, bytes]) -> int:
    v = snapshot.get(K_TOTAL)
    return int.from_bytes(v, "big") if v else 0


# --- fixtures ----------------------------------------------------------------


@pytest.fixture(scope="session")
def funded_accounts() -> Dict[str, bytes]:
    return {
        "deployer": det_address("deployer"),
        "alice": det_address("alice"),
        "bob": det_address("bob"),
        "carol": det_address("carol"),
        "system_wallet": det_address("system-wallet"),
    }


@pytest.fixture
def token_env(funded_accounts) -> Dict[str, str]:
    return base_env(funded_accounts["system_wallet"])


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No harness variables in the environment and no stray `.env` in cwd."""
    for k in ENV_KEYS:
        monkeypatch.delenv(k, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def settings(token_env, clean_env) -> Settings:
    return load_settings(**{k.lower(): v for k, v in token_env.items()})


@pytest.fixture
def engine() -> Engine:
    return Engine()


@pytest.fixture
def deployment(settings, engine, funded_accounts) -> Deployment:
    return deploy_token(settings, engine=engine, deployer=funded_accounts["deployer"], hand_off=False)


@pytest.fixture
def token(deployment, funded_accounts) -> TokenClient:
    return TokenClient(deployment.instance, funded_accounts["deployer"])


# --- pretty assertion diffs for bytes & small dicts --------------------------


def pytest_assertrepr_compare(op: str, left: Any, right: Any) -> Optional[List[str]]:
    if isinstance(left, (bytes, bytearray)) and isinstance(right, (bytes, bytearray)) and op == "==":
        return [
            "bytes differ:",
            f" left: 0x{bytes(left).hex()}",
            f"right: 0x{bytes(right).hex()}",
        ]
    if isinstance(left, dict) and isinstance(right, dict) and op == "==":
        try:
            lj = json.dumps(left, sort_keys=True, indent=2, default=str)
            rj = json.dumps(right, sort_keys=True, indent=2, default=str)
        except (TypeError, ValueError):
            return None
        return ["dicts differ (compact JSON):", " left:", lj, " right:", rj]
    return None
