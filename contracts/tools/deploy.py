# -*- coding: utf-8 -*-
"""
Deploy the Fan Token behind an upgradeable proxy on a local tokenvm engine.

Steps (each one logged):
  1) load settings (env / .env; see contracts.tools.config)
  2) check the configured role labels hash to the contract's role ids
  3) register the implementation and deploy the proxy, running
     ``initialize(deployer, name, symbol, supply)`` through it
  4) hand ownership (and every role) to TOKEN_SYSTEM_WALLET
  5) optionally merge the result into a deployments registry JSON file

Usage
-----
  python -m contracts.tools.deploy \\
    [--env-file .env] \\
    [--deployer 0x…] \\
    [--no-handoff] \\
    [--out build/deployments.json] \\
    [--log-level debug]

Prints a canonical JSON summary on stdout. Exit codes: 0 ok, 2 config error,
3 deploy failure.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from tokenvm import ContractInstance, Engine, VmError
from tokenvm.runtime.context import to_address, to_hex
from tokenvm.runtime.hash_api import keccak256

from contracts.fan_token import CONTRACT_MODULE
from contracts.stdlib.access.roles import Role

from . import atomic_write_text, canonical_json_str, setup_logging
from .config import ConfigError, Settings, load_settings

log = logging.getLogger(__name__)

PROXY_MODULE = "contracts.stdlib.upgrade.proxy"

#: Deterministic local deployer identity used when none is given.
DEFAULT_DEPLOYER: bytes = keccak256(b"tokenvm/local-deployer")[-20:]


@dataclass
class Deployment:
    engine: Engine
    instance: ContractInstance
    deployer: bytes
    settings: Settings

    @property
    def address(self) -> bytes:
        return self.instance.address

    def to_dict(self) -> Dict[str, Any]:
        inst = self.instance
        return {
            "appId": self.settings.app_id,
            "address": to_hex(inst.address),
            "implementation": inst.implementation.name,
            "codeHash": inst.implementation.code_hash_hex,
            "proxyAdmin": to_hex(inst.admin_call("admin")),
            "owner": to_hex(inst.call("owner")),
            "deployer": to_hex(self.deployer),
            "name": inst.call("name"),
            "symbol": inst.call("symbol"),
            "decimals": inst.call("decimals"),
            "totalSupply": inst.call("total_supply"),
        }


def verify_role_labels(settings: Settings) -> None:
    """Raise ConfigError unless every configured role label hashes to the contract's id."""
    configured = settings.role_ids()
    for role in Role:
        got = configured[role.name]
        if got != role.id:
            raise ConfigError(
                f"Role label mismatch for {role.name}: configured "
                f"{settings.roles.labels()[role.name]!r} ({to_hex(got)}) "
                f"but contract uses {role.label!r} ({to_hex(role.id)})",
                key=f"ROLES_{'DEFAULT_ADMIN' if role is Role.ADMIN else role.name}",
            )


def deploy_token(
    settings: Settings,
    *,
    engine: Optional[Engine] = None,
    deployer: Any = DEFAULT_DEPLOYER,
    hand_off: bool = True,
) -> Deployment:
    engine = engine or Engine()
    deployer_b = to_address(deployer)
    tok = settings.token

    verify_role_labels(settings)

    log.info(
        "Deploying %s (%s) supply=%d from %s",
        tok.name,
        tok.symbol,
        tok.supply,
        to_hex(deployer_b),
    )
    inst = engine.deploy_proxy(
        CONTRACT_MODULE,
        sender=deployer_b,
        proxy=PROXY_MODULE,
        initializer="initialize",
        args=(tok.name, tok.symbol, tok.supply),
    )
    log.info("Token deployed at %s", to_hex(inst.address))

    if hand_off:
        wallet = tok.system_wallet_bytes
        log.info("Transferring ownership to system wallet %s", to_hex(wallet))
        inst.transact(deployer_b, "transfer_ownership", wallet)
        log.info("Ownership transferred")

    return Deployment(engine=engine, instance=inst, deployer=deployer_b, settings=settings)


def write_registry(path: Path, deployment: Deployment) -> Path:
    """Merge this deployment into the JSON registry at `path`, keyed by app id."""
    current: Dict[str, Any] = {}
    if path.is_file():
        try:
            current = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            log.warning("registry %s is not valid JSON; rewriting it", path)
            current = {}
    current[deployment.settings.app_id] = deployment.to_dict()
    atomic_write_text(path, canonical_json_str(current))
    return path


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="contracts.tools.deploy",
        description="Deploy the Fan Token behind a proxy on a local tokenvm engine.",
    )
    p.add_argument("--env-file", type=Path, default=None, help="Read settings from this .env file")
    p.add_argument("--deployer", type=str, default=None, help="Deployer address (0x + 40 hex)")
    p.add_argument("--no-handoff", action="store_true", help="Keep ownership with the deployer")
    p.add_argument("--out", type=Path, default=None, help="Write/merge a deployments registry JSON file")
    p.add_argument("--log-level", type=str, default=None, help="Override LOG_LEVEL")
    p.add_argument("--json-logs", action="store_true", help="Emit log records as JSON lines")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    setup_logging(args.log_level or "info", json_logs=args.json_logs)

    try:
        settings = load_settings(args.env_file)
    except ConfigError as exc:
        log.error("%s", exc)
        return 2
    if args.log_level is None:
        setup_logging(settings.log_level, json_logs=args.json_logs)
    log.debug("settings: %s", settings.redacted())

    try:
        deployment = deploy_token(
            settings,
            deployer=args.deployer or DEFAULT_DEPLOYER,
            hand_off=not args.no_handoff,
        )
    except ConfigError as exc:
        log.error("%s", exc)
        return 2
    except VmError as exc:
        log.error("deploy failed: %s", exc, exc_info=log.isEnabledFor(logging.DEBUG))
        return 3

    if args.out is not None:
        path = write_registry(args.out, deployment)
        log.info("registry updated: %s", path)

    sys.stdout.write(canonical_json_str(deployment.to_dict()) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
