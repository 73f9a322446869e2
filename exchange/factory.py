"""
Exchange client construction.

Builds a CcxtExchangeClient for the exchange named in Settings, using the
resolved Credentials. Nothing is cached: each CLI run builds one client and
closes it after its single request.
"""
from __future__ import annotations

import logging

import ccxt
import ccxt.async_support as ccxt_async

from config.credentials import Credentials
from config.settings import Settings
from exchange.base import ExchangeConfigError
from exchange.ccxt_client import CcxtExchangeClient


def build_exchange_client(credentials: Credentials, settings: Settings) -> CcxtExchangeClient:
    """Return a ccxt-backed client for ``settings.exchange_id``.

    Raises:
        ExchangeConfigError: If ccxt does not know the exchange id, or sandbox
            mode was requested for an exchange without a testnet.
    """
    exchange_id = settings.exchange_id
    if exchange_id not in ccxt_async.exchanges:
        raise ExchangeConfigError(f"Unsupported exchange '{exchange_id}'")

    exchange_class = getattr(ccxt_async, exchange_id)
    exchange = exchange_class({
        "apiKey": credentials.apikey,
        "secret": credentials.apisecret,
        "enableRateLimit": True,
        "options": {"warnOnFetchOpenOrdersWithoutSymbol": False},
    })

    if settings.sandbox:
        # ccxt fails with a TypeError rather than NotSupported when urls['test'] is absent.
        if not (getattr(exchange, "urls", None) or {}).get("test"):
            raise ExchangeConfigError(f"Exchange '{exchange_id}' has no sandbox mode")
        try:
            exchange.set_sandbox_mode(True)
        except (ccxt.NotSupported, TypeError) as exc:
            raise ExchangeConfigError(f"Exchange '{exchange_id}' has no sandbox mode") from exc

    logging.debug("Initialized %s client (sandbox=%s)", exchange_id, settings.sandbox)
    return CcxtExchangeClient(exchange)
