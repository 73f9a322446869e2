"""
Output formatting utilities for CLI.

Renders command results as terminal text: single lines for order
placement and cancellation, an aligned column table for open orders.
"""
from __future__ import annotations

import sys
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, List, NoReturn, Optional, Sequence

from exchange.base import OpenOrder


ORDER_COLUMNS = ("Order Date", "Order ID", "Exchange", "Order Type", "Quantity", "Price")
ORDER_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
COLUMN_GAP = "  "


def format_order_date(opened: Optional[datetime]) -> str:
    """Format an order's opened time in UTC, blank when unknown."""
    if opened is None:
        return ""
    if opened.tzinfo is not None:
        opened = opened.astimezone(timezone.utc)
    return opened.strftime(ORDER_DATE_FORMAT)


def format_number(value: Any) -> str:
    """Render a quantity or price without exponent notation or trailing zeros.

    >>> format_number(10.0)
    '10'
    >>> format_number(1e-05)
    '0.00001'
    """
    if value is None:
        return ""
    try:
        text = format(Decimal(repr(value) if isinstance(value, float) else str(value)), "f")
    except (InvalidOperation, ValueError):
        return str(value)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def order_row(order: OpenOrder) -> List[str]:
    """Cells for one open order, in ORDER_COLUMNS order."""
    return [
        format_order_date(order.opened),
        order.order_id,
        order.market,
        order.order_type,
        format_number(order.quantity_remaining),
        format_number(order.limit_price),
    ]


def render_table(columns: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Left-align every column to its widest cell (header included)."""
    widths = [len(title) for title in columns]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    lines = []
    for row in [list(columns), *rows]:
        line = COLUMN_GAP.join(cell.ljust(width) for cell, width in zip(row, widths))
        lines.append(line.rstrip())
    return "\n".join(lines)


def render_open_orders(orders: Sequence[OpenOrder]) -> str:
    return render_table(ORDER_COLUMNS, [order_row(order) for order in orders])


def format_order_created(uuid: str) -> str:
    return f"Order created, uuid: {uuid}"


def format_order_cancelled(uuid: str) -> str:
    return f"Order {uuid} cancelled."


def print_result(message: str, success: bool = True) -> None:
    """Print command result to terminal.
    
    Args:
        message: Text produced by the command dispatcher.
        success: Whether the command succeeded; failures go to stderr
            and exit with code 1.
    """
    if not success:
        print_error(message)
    print(message)


def print_error(message: str) -> NoReturn:
    """Print error message to stderr and exit with code 1.
    
    Args:
        message: Error message to display.
    """
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)
