"""Application configuration read from the process environment.

Domain infrastructure (databases, brokers, event store) lives in
``domain.toml``. This module covers the storefront's own integration
settings: the public base URL, the JazzCash wallet credentials, the
email provider key and the static auth tokens used outside production.

In production every required value must be present; a missing or
placeholder value raises ``ConfigurationError`` when the config is
loaded, so the process never starts half-configured.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from protean.exceptions import ConfigurationError

_PRODUCTION_ENVS = {"production", "staging"}

_REQUIRED_IN_PRODUCTION = (
    "MINIWORLD_BASE_URL",
    "JAZZCASH_MERCHANT_ID",
    "JAZZCASH_PASSWORD",
    "JAZZCASH_HASH_KEY",
    "RESEND_API_KEY",
)

# Sandbox credentials shipped with the storefront for local development
_SANDBOX_MERCHANT_ID = "MW_MERCHANT_001"
_SANDBOX_PASSWORD = "miniworld_password"
_SANDBOX_HASH_KEY = "miniworld_hash_key_12345"


@dataclass(frozen=True)
class JazzCashSettings:
    merchant_id: str
    password: str
    hash_key: str
    return_url: str
    cancel_url: str
    is_sandbox: bool = True


@dataclass(frozen=True)
class AppConfig:
    environment: str
    base_url: str
    jazzcash: JazzCashSettings
    resend_api_key: str | None = None
    email_from: str = "MiniHub Support Team <support@minihubpk.com>"
    admin_tokens: dict[str, str] = field(default_factory=dict)

    @property
    def is_production(self) -> bool:
        return self.environment in _PRODUCTION_ENVS

    @property
    def simulate_email(self) -> bool:
        """Emails are simulated outside production or when no provider key is set."""
        return not self.is_production or not self.resend_api_key


def _is_placeholder(value: str | None) -> bool:
    return not value or value.strip().lower().startswith("your-")


def _parse_tokens(raw: str | None) -> dict[str, str]:
    """Parse ``token:email`` pairs separated by commas."""
    tokens: dict[str, str] = {}
    if not raw:
        return tokens

    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        token, sep, email = pair.partition(":")
        if not sep or not token or not email:
            raise ConfigurationError(f"Malformed ADMIN_API_TOKENS entry: {pair!r}")
        tokens[token.strip()] = email.strip().lower()
    return tokens


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Build the application config from the environment."""
    env = os.environ if environ is None else environ
    environment = (env.get("PROTEAN_ENV") or env.get("ENVIRONMENT") or "development").lower()

    if environment in _PRODUCTION_ENVS:
        missing = [name for name in _REQUIRED_IN_PRODUCTION if _is_placeholder(env.get(name))]
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

    base_url = (env.get("MINIWORLD_BASE_URL") or "http://localhost:8000").rstrip("/")

    jazzcash = JazzCashSettings(
        merchant_id=env.get("JAZZCASH_MERCHANT_ID") or _SANDBOX_MERCHANT_ID,
        password=env.get("JAZZCASH_PASSWORD") or _SANDBOX_PASSWORD,
        hash_key=env.get("JAZZCASH_HASH_KEY") or _SANDBOX_HASH_KEY,
        return_url=f"{base_url}/checkout/jazzcash/success",
        cancel_url=f"{base_url}/checkout/jazzcash/cancel",
        is_sandbox=_as_bool(env.get("JAZZCASH_SANDBOX"), default=environment not in _PRODUCTION_ENVS),
    )

    return AppConfig(
        environment=environment,
        base_url=base_url,
        jazzcash=jazzcash,
        resend_api_key=env.get("RESEND_API_KEY") or None,
        email_from=env.get("EMAIL_FROM") or "MiniHub Support Team <support@minihubpk.com>",
        admin_tokens=_parse_tokens(env.get("ADMIN_API_TOKENS")),
    )
