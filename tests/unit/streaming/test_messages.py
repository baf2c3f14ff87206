"""Tests for outbound WebSocket messages"""

import pytest

from rofex.domain.models.enums import (
    Market,
    MDEntry,
    OrderType,
    Side,
    TimeInForce,
)
from rofex.domain.models.orders import NewOrder
from rofex.streaming.messages import (
    cancel_order_message,
    market_data_request,
    new_order_message,
    order_report_request,
)


@pytest.mark.unit
def test_market_data_request():
    message = market_data_request(
        ["DLR/DIC23", "DLR/ENE24"],
        [MDEntry.BIDS, MDEntry.OFFERS, "LA"],
        depth=5,
        market=Market.ROFEX,
    )

    assert message == {
        "type": "smd",
        "level": 1,
        "depth": 5,
        "entries": ["BI", "OF", "LA"],
        "products": [
            {"symbol": "DLR/DIC23", "marketId": "ROFX"},
            {"symbol": "DLR/ENE24", "marketId": "ROFX"},
        ],
    }


@pytest.mark.unit
def test_order_report_request():
    assert order_report_request("REM1234", True) == {
        "type": "os",
        "account": {"id": "REM1234"},
        "snapshotOnlyActive": True,
    }


@pytest.mark.unit
def test_new_order_message_limit_day():
    """Numbers are sent as strings and price only for limit orders"""
    order = NewOrder(
        symbol="DLR/DIC23",
        side=Side.BUY,
        qty=10,
        price=180.0,
        account="REM1234",
        ws_cl_ord_id="abc",
    )

    assert new_order_message(order) == {
        "type": "no",
        "product": {"marketId": "ROFX", "symbol": "DLR/DIC23"},
        "quantity": "10",
        "ordType": "LIMIT",
        "side": "BUY",
        "account": "REM1234",
        "allOrNone": "false",
        "timeInForce": "DAY",
        "price": "180",
        "wsClOrdId": "abc",
    }


@pytest.mark.unit
def test_new_order_message_optional_fields():
    order = NewOrder(
        symbol="GGAL/DIC23",
        side="sell",
        qty=100,
        type=OrderType.LIMIT,
        price=101.25,
        time_in_force=TimeInForce.GTD,
        expire_date="2023-12-29",
        account="REM1234",
        iceberg=True,
        display_qty=20,
        all_or_none=True,
    )

    message = new_order_message(order)

    assert message["side"] == "SELL"
    assert message["price"] == "101.25"
    assert message["iceberg"] == "true"
    assert message["displayQuantity"] == "20"
    assert message["expireDate"] == "2023-12-29"
    assert message["allOrNone"] == "true"
    assert "wsClOrdId" not in message


@pytest.mark.unit
def test_market_order_has_no_price():
    order = NewOrder(
        symbol="DLR/DIC23",
        side=Side.SELL,
        qty=1,
        type=OrderType.MARKET,
        price=99.0,
        account="REM1234",
    )

    assert "price" not in new_order_message(order)


@pytest.mark.unit
def test_cancel_order_message():
    assert cancel_order_message("123", "PBCP") == {
        "type": "co",
        "clientId": "123",
        "proprietary": "PBCP",
    }
