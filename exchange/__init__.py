"""Exchange integration layer for trading operations."""
from exchange.base import (
    CancelResult,
    ExchangeClient,
    ExchangeConfigError,
    OpenOrder,
    OpenOrdersResult,
    OrderResult,
)
from exchange.ccxt_client import CcxtExchangeClient, parse_open_order, to_ccxt_symbol
from exchange.factory import build_exchange_client

__all__ = [
    # Base types
    "OrderResult",
    "CancelResult",
    "OpenOrder",
    "OpenOrdersResult",
    "ExchangeClient",
    "ExchangeConfigError",
    # ccxt implementation
    "CcxtExchangeClient",
    "parse_open_order",
    "to_ccxt_symbol",
    # Factory functions
    "build_exchange_client",
]
