"""
Configuration for the Fan Token deploy/test harness.

- Reads environment variables (optionally from `.env`) via pydantic-settings.
- Fails fast: a missing or empty required variable raises
  ``ConfigError("Required environment variable is not set: KEY")``.
- No process-wide singleton: build a :class:`Settings` with
  :func:`load_settings` and pass it explicitly to the deploy routine.

Environment variables:
    APP_ID                  (str, required)      — Application identifier
    LOG_LEVEL               (str, default info)  — debug | info | warning | error | critical

Token:
    TOKEN_NAME              (str, required)
    TOKEN_SYMBOL            (str, required)
    TOKEN_SUPPLY            (int >= 0, required) — initial supply minted to the deployer
    TOKEN_SYSTEM_WALLET     (0x + 40 hex, required) — receives ownership after deploy

Role labels (role id = keccak256(label)):
    ROLES_MINTER            (str, required)      — normally MINTER_ROLE
    ROLES_BURNER            (str, required)      — normally BURNER_ROLE
    ROLES_OPERATOR          (str, required)      — normally OPERATOR_ROLE
    ROLES_DEFAULT_ADMIN     (str, required)      — normally DEFAULT_ADMIN_ROLE
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tokenvm.runtime.hash_api import keccak256

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class ConfigError(ValueError):
    """Configuration is missing or malformed."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


# ----------------------------- Sub-views ------------------------------------ #


class TokenConfig(BaseModel):
    name: str
    symbol: str
    supply: int = Field(ge=0)
    system_wallet: str

    @property
    def system_wallet_bytes(self) -> bytes:
        return bytes.fromhex(self.system_wallet[2:])


class RolesConfig(BaseModel):
    minter: str
    burner: str
    operator: str
    default_admin: str

    def labels(self) -> Dict[str, str]:
        return {
            "MINTER": self.minter,
            "BURNER": self.burner,
            "OPERATOR": self.operator,
            "ADMIN": self.default_admin,
        }

    def ids(self) -> Dict[str, bytes]:
        """Role name → keccak256(label)."""
        return {k: keccak256(v.encode("utf-8")) for k, v in self.labels().items()}


# --------------------------------- Settings ---------------------------------- #


class Settings(BaseSettings):
    app_id: str = Field(min_length=1, description="Application identifier")
    log_level: str = Field("info", description="Logging level")

    token_name: str = Field(min_length=1)
    token_symbol: str = Field(min_length=1)
    token_supply: int = Field(ge=0, description="Initial supply minted to the deployer")
    token_system_wallet: str = Field(min_length=1, description="Ownership handoff target (0x-hex)")

    roles_minter: str = Field(min_length=1)
    roles_burner: str = Field(min_length=1)
    roles_operator: str = Field(min_length=1)
    roles_default_admin: str = Field(min_length=1)

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _norm_level(cls, v: Any) -> str:
        s = str(v or "info").strip().lower()
        if s not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}")
        return s

    @field_validator("token_system_wallet")
    @classmethod
    def _check_wallet(cls, v: str) -> str:
        s = v.strip().lower()
        if not s.startswith("0x"):
            s = "0x" + s
        if len(s) != 42:
            raise ValueError("must be a 20-byte hex address")
        try:
            raw = bytes.fromhex(s[2:])
        except ValueError as e:
            raise ValueError("must be a 20-byte hex address") from e
        if not any(raw):
            raise ValueError("must be a non-zero 20-byte hex address")
        return s

    # --- Structured views ---------------------------------------------------

    @property
    def token(self) -> TokenConfig:
        return TokenConfig(
            name=self.token_name,
            symbol=self.token_symbol,
            supply=self.token_supply,
            system_wallet=self.token_system_wallet,
        )

    @property
    def roles(self) -> RolesConfig:
        return RolesConfig(
            minter=self.roles_minter,
            burner=self.roles_burner,
            operator=self.roles_operator,
            default_admin=self.roles_default_admin,
        )

    def role_ids(self) -> Dict[str, bytes]:
        return self.roles.ids()

    def redacted(self) -> Dict[str, Any]:
        """Config summary safe to log."""
        return {
            "app_id": self.app_id,
            "log_level": self.log_level,
            "token": self.token.model_dump(),
            "roles": self.roles.labels(),
        }


def _env_key(loc: Any) -> str:
    field = loc[0] if isinstance(loc, (tuple, list)) and loc else loc
    return str(field).upper()


def load_settings(env_file: Optional[Union[str, os.PathLike[str]]] = None, **overrides: Any) -> Settings:
    """
    Build Settings from the environment (and `.env`, or `env_file` if given).
    Keyword overrides take precedence over the environment.

    Raises ConfigError naming the first offending variable.
    """
    kwargs: Dict[str, Any] = dict(overrides)
    if env_file is not None:
        kwargs["_env_file"] = Path(env_file)
    try:
        return Settings(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        key = _env_key(err.get("loc", ("?",)))
        if err.get("type") in ("missing", "string_too_short"):
            raise ConfigError(f"Required environment variable is not set: {key}", key=key) from None
        raise ConfigError(f"Invalid value for environment variable {key}: {err.get('msg')}", key=key) from None


__all__ = ["ConfigError", "TokenConfig", "RolesConfig", "Settings", "load_settings"]
