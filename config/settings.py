"""Non-secret runtime settings read from the environment."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_EXCHANGE_ID = "binance"

EXCHANGE_ENV = "TRADE_EXCHANGE"
SANDBOX_ENV = "TRADE_SANDBOX"


def _parse_bool_env(value: Optional[str], *, default: bool = False) -> bool:
    """Convert environment string to bool with sensible defaults."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    logging.warning("Invalid boolean environment value '%s'; using default %s", value, default)
    return default


def _load_exchange_id(raw: Optional[str], default: str = DEFAULT_EXCHANGE_ID) -> str:
    """Resolve the ccxt exchange id, falling back to the default."""
    if not raw:
        return default
    value = raw.strip().lower()
    return value or default


@dataclass(frozen=True)
class Settings:
    """Settings for a single CLI run.

    Attributes:
        exchange_id: ccxt exchange id, e.g. "binance" or "kraken".
        sandbox: Route requests to the exchange's testnet when supported.
    """

    exchange_id: str = DEFAULT_EXCHANGE_ID
    sandbox: bool = False


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    *,
    exchange_id: Optional[str] = None,
) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.
        exchange_id: Explicit exchange id (e.g. from ``--exchange``); wins
            over ``TRADE_EXCHANGE`` when given.
    """
    env = os.environ if environ is None else environ
    return Settings(
        exchange_id=_load_exchange_id(exchange_id or env.get(EXCHANGE_ENV)),
        sandbox=_parse_bool_env(env.get(SANDBOX_ENV)),
    )
