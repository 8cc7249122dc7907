"""
Fan Token: upgradeable ERC20-style token with role-based minting/burning,
operator transfers and one-way disable switches.

The contract module (:mod:`.contract`) is deployed behind
``contracts.stdlib.upgrade.proxy``; see ``contracts.tools.deploy``.
"""

CONTRACT_MODULE = "contracts.fan_token.contract"

__all__ = ["CONTRACT_MODULE"]
