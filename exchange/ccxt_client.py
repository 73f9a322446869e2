"""ccxt exchange client implementation.

This module provides the ExchangeClient implementation backed by
``ccxt.async_support``. It works with any exchange ccxt supports.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import ccxt

from exchange.base import CancelResult, OpenOrder, OpenOrdersResult, OrderResult


def _safe_float(value: Any) -> Optional[float]:
    """Safely convert a value to float, keeping None for missing values."""
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return None if result != result else result  # NaN check


def _error_message(exc: Exception) -> str:
    message = str(exc).strip()
    return message or exc.__class__.__name__


def to_ccxt_symbol(market: str) -> str:
    """Convert a market name to a ccxt unified symbol.

    Supports:
    - ccxt format: LTC/BTC -> LTC/BTC (unchanged)
    - Bittrex style, quote first: BTC-LTC -> LTC/BTC
    """
    value = market.strip().upper()
    if "/" in value or "-" not in value:
        return value
    quote, base = value.split("-", 1)
    return f"{base}/{quote}"


def _parse_opened(order: Dict[str, Any]) -> Optional[datetime]:
    """Extract the order's opened time as an aware UTC datetime."""
    timestamp = order.get("timestamp")
    if timestamp is not None:
        try:
            return datetime.fromtimestamp(int(timestamp) / 1000, tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            pass

    raw = order.get("datetime")
    if not raw:
        return None
    try:
        opened = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        return None
    if opened.tzinfo is None:
        opened = opened.replace(tzinfo=timezone.utc)
    return opened.astimezone(timezone.utc)


def _order_type(order: Dict[str, Any]) -> str:
    """Render type and side the way exchanges label them, e.g. LIMIT_BUY."""
    order_type = str(order.get("type") or "").upper()
    side = str(order.get("side") or "").upper()
    if order_type and side:
        return f"{order_type}_{side}"
    return order_type or side


def parse_open_order(order: Dict[str, Any]) -> OpenOrder:
    """Convert a ccxt unified order structure into an OpenOrder."""
    return OpenOrder(
        order_id=str(order.get("id") or ""),
        market=str(order.get("symbol") or ""),
        order_type=_order_type(order),
        opened=_parse_opened(order),
        quantity_remaining=_safe_float(order.get("remaining")),
        limit_price=_safe_float(order.get("price")),
        raw=order,
    )


class CcxtExchangeClient:
    """ExchangeClient implementation for any ccxt async exchange."""

    def __init__(self, exchange: Any) -> None:
        self._exchange = exchange

    @property
    def backend(self) -> str:
        return str(getattr(self._exchange, "id", None) or "ccxt")

    async def place_limit_buy(self, market: str, rate: float, quantity: float) -> OrderResult:
        return await self._place_limit("buy", market, rate, quantity)

    async def place_limit_sell(self, market: str, rate: float, quantity: float) -> OrderResult:
        return await self._place_limit("sell", market, rate, quantity)

    async def _place_limit(
        self,
        side: str,
        market: str,
        rate: float,
        quantity: float,
    ) -> OrderResult:
        symbol = to_ccxt_symbol(market)
        extra: Dict[str, Any] = {"symbol": symbol, "side": side}
        logging.debug(
            "Placing limit %s on %s: symbol=%s amount=%s price=%s",
            side, self.backend, symbol, quantity, rate,
        )
        try:
            if side == "buy":
                order = await self._exchange.create_limit_buy_order(symbol, quantity, rate)
            else:
                order = await self._exchange.create_limit_sell_order(symbol, quantity, rate)
        except ccxt.BaseError as exc:
            logging.warning("Limit %s on %s rejected by %s: %s", side, symbol, self.backend, exc)
            return OrderResult(
                success=False,
                backend=self.backend,
                errors=[_error_message(exc)],
                extra=extra,
            )

        order_id = order.get("id") if isinstance(order, dict) else None
        errors: List[str] = []
        if not order_id:
            errors.append("Exchange response did not include an order id")
        extra["order"] = order

        return OrderResult(
            success=not errors,
            backend=self.backend,
            errors=errors,
            order_id=str(order_id) if order_id else None,
            raw=order,
            extra=extra,
        )

    async def cancel_order(self, uuid: str, market: Optional[str] = None) -> CancelResult:
        symbol = to_ccxt_symbol(market) if market else None
        logging.debug("Cancelling order %s on %s (symbol=%s)", uuid, self.backend, symbol)
        try:
            response = await self._exchange.cancel_order(uuid, symbol)
        except ccxt.BaseError as exc:
            logging.warning("Cancel of %s rejected by %s: %s", uuid, self.backend, exc)
            return CancelResult(
                success=False,
                backend=self.backend,
                errors=[_error_message(exc)],
                order_id=uuid,
            )

        return CancelResult(
            success=True,
            backend=self.backend,
            errors=[],
            order_id=uuid,
            raw=response,
            extra={"symbol": symbol} if symbol else {},
        )

    async def list_open_orders(self, market: Optional[str] = None) -> OpenOrdersResult:
        symbol = to_ccxt_symbol(market) if market else None
        logging.debug("Fetching open orders on %s (symbol=%s)", self.backend, symbol)
        try:
            raw_orders = await self._exchange.fetch_open_orders(symbol)
        except ccxt.BaseError as exc:
            logging.warning("Open orders request rejected by %s: %s", self.backend, exc)
            return OpenOrdersResult(
                success=False,
                backend=self.backend,
                errors=[_error_message(exc)],
            )

        orders = [parse_open_order(o) for o in raw_orders or [] if isinstance(o, dict)]
        return OpenOrdersResult(
            success=True,
            backend=self.backend,
            errors=[],
            orders=orders,
            raw=raw_orders,
        )

    async def close(self) -> None:
        await self._exchange.close()
