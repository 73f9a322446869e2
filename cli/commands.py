"""
Command dispatch for the trade CLI.

Each sub-command is represented by its own frozen argument type, so the
fields a command needs are present by construction. ``dispatch`` maps one
of them to exactly one ExchangeClient call and turns the unified result
into a CommandResult the CLI can print.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from cli.output import format_order_cancelled, format_order_created, render_open_orders
from exchange.base import ExchangeClient, OrderResult


@dataclass(frozen=True)
class BuyArgs:
    market: str
    rate: float
    quantity: float


@dataclass(frozen=True)
class SellArgs:
    market: str
    rate: float
    quantity: float


@dataclass(frozen=True)
class CancelArgs:
    uuid: str
    market: Optional[str] = None


@dataclass(frozen=True)
class ListArgs:
    market: Optional[str] = None


TradeArgs = Union[BuyArgs, SellArgs, CancelArgs, ListArgs]


@dataclass
class CommandResult:
    """Outcome of one dispatched command.

    Attributes:
        success: Whether the remote operation succeeded.
        message: Text to show; stdout on success, stderr otherwise.
    """
    success: bool
    message: str


def _failure(errors: List[str]) -> CommandResult:
    message = "; ".join(e for e in errors if e) or "Request was not accepted by the exchange"
    return CommandResult(success=False, message=message)


def _order_result(result: OrderResult) -> CommandResult:
    if not result.success or not result.order_id:
        return _failure(result.errors)
    return CommandResult(success=True, message=format_order_created(result.order_id))


async def dispatch(client: ExchangeClient, args: TradeArgs) -> CommandResult:
    """Issue the single remote call that ``args`` describes."""
    logging.debug("Dispatching %r", args)

    if isinstance(args, BuyArgs):
        return _order_result(await client.place_limit_buy(args.market, args.rate, args.quantity))

    if isinstance(args, SellArgs):
        return _order_result(await client.place_limit_sell(args.market, args.rate, args.quantity))

    if isinstance(args, CancelArgs):
        cancelled = await client.cancel_order(args.uuid, args.market)
        if not cancelled.success:
            return _failure(cancelled.errors)
        # Confirm with the uuid that was requested, not whatever the exchange echoed.
        return CommandResult(success=True, message=format_order_cancelled(args.uuid))

    if isinstance(args, ListArgs):
        listed = await client.list_open_orders(args.market)
        if not listed.success:
            return _failure(listed.errors)
        return CommandResult(success=True, message=render_open_orders(listed.orders))

    raise TypeError(f"Unsupported command arguments: {args!r}")


async def run_command(client: ExchangeClient, args: TradeArgs) -> CommandResult:
    """Dispatch ``args`` and always close the client afterwards."""
    try:
        return await dispatch(client, args)
    finally:
        await client.close()
