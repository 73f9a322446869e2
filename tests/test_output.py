from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from cli.output import (
    ORDER_COLUMNS,
    format_number,
    format_order_date,
    print_error,
    print_result,
    render_open_orders,
)
from exchange.base import OpenOrder


class TestFormatOrderDate:
    def test_utc(self):
        opened = datetime(2017, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
        assert format_order_date(opened) == "2017-03-04 05:06:07"

    def test_converts_to_utc(self):
        opened = datetime(2017, 3, 4, 7, 6, 7, tzinfo=timezone(timedelta(hours=2)))
        assert format_order_date(opened) == "2017-03-04 05:06:07"

    def test_month_and_minute_are_distinct(self):
        opened = datetime(2017, 11, 2, 13, 45, 9, tzinfo=timezone.utc)
        assert format_order_date(opened) == "2017-11-02 13:45:09"

    def test_none(self):
        assert format_order_date(None) == ""


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (10.0, "10"),
            (0.5, "0.5"),
            (1e-05, "0.00001"),
            (0.00012345678, "0.00012345678"),
            (3, "3"),
            (None, ""),
        ],
    )
    def test_values(self, value, expected):
        assert format_number(value) == expected


class TestRenderOpenOrders:
    def test_empty_renders_header_only(self):
        text = render_open_orders([])

        assert text.splitlines() == ["  ".join(ORDER_COLUMNS)]

    def test_columns_are_aligned(self):
        orders = [
            OpenOrder("short", "LTC/BTC", "LIMIT_BUY", None, 1.0, 0.01),
            OpenOrder("a-much-longer-order-id", "ETH/BTC", "LIMIT_SELL", None, 25.5, 0.2),
        ]
        lines = render_open_orders(orders).splitlines()

        exchange_col = lines[0].index("Exchange")
        assert lines[1].index("LTC/BTC") == exchange_col
        assert lines[2].index("ETH/BTC") == exchange_col
        assert lines[0].startswith("Order Date")


class TestPrint:
    def test_print_result_success(self, capsys):
        print_result("Order X cancelled.")

        captured = capsys.readouterr()
        assert captured.out == "Order X cancelled.\n"
        assert captured.err == ""

    def test_print_result_failure_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            print_result("Invalid market", success=False)

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.err == "Error: Invalid market\n"
        assert captured.out == ""

    def test_print_error_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            print_error("boom")

        assert exc_info.value.code == 1
        assert "Error: boom" in capsys.readouterr().err
