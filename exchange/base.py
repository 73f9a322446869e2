"""Exchange client base definitions and abstract interface.

This module defines the unified result structures and the asynchronous
protocol the CLI dispatches against. Concrete adapters translate library
responses and errors into these shapes so the CLI only ever inspects
``success``, ``errors`` and the payload.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


class ExchangeConfigError(ValueError):
    """Raised when an exchange client cannot be built from the given settings."""


@dataclass(slots=True)
class OrderResult:
    """Unified result of placing a limit order.

    Attributes:
        success: Whether the exchange accepted the order.
        backend: Exchange identifier, e.g. "binance" or "kraken".
        errors: User-facing error summaries; empty on success.
        order_id: Exchange-assigned order id (uuid) when accepted.
        raw: Raw response from the exchange library, for debugging.
        extra: Backend-specific details that do not fit the unified schema.
    """

    success: bool
    backend: str
    errors: List[str]
    order_id: Optional[str] = None
    raw: Optional[Any] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class CancelResult:
    """Unified result of cancelling an order, mirroring OrderResult."""

    success: bool
    backend: str
    errors: List[str]
    order_id: Optional[str] = None
    raw: Optional[Any] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class OpenOrder:
    """An open order as reported by the exchange. Display only."""

    order_id: str
    market: str
    order_type: str
    opened: Optional[datetime]
    quantity_remaining: Optional[float]
    limit_price: Optional[float]
    raw: Optional[Any] = None


@dataclass(slots=True)
class OpenOrdersResult:
    success: bool
    backend: str
    errors: List[str]
    orders: List[OpenOrder] = field(default_factory=list)
    raw: Optional[Any] = None


@runtime_checkable
class ExchangeClient(Protocol):
    """Asynchronous trading interface used by the command dispatcher.

    Every method performs at most one remote request. Remote rejections are
    reported through the returned result, never raised.
    """

    async def place_limit_buy(self, market: str, rate: float, quantity: float) -> OrderResult:
        ...

    async def place_limit_sell(self, market: str, rate: float, quantity: float) -> OrderResult:
        ...

    async def cancel_order(self, uuid: str, market: Optional[str] = None) -> CancelResult:
        ...

    async def list_open_orders(self, market: Optional[str] = None) -> OpenOrdersResult:
        ...

    async def close(self) -> None:
        """Release the underlying HTTP session."""
        ...
