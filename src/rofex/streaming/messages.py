"""Outbound WebSocket messages"""

from typing import Any

from rofex.domain.models.enums import (
    Market,
    MDEntry,
    OrderType,
    TimeInForce,
    WSMessageType,
)
from rofex.domain.models.orders import NewOrder
from rofex.shared.formatting import enum_value, format_bool, format_number


def market_data_request(
    symbols: list[str],
    entries: list[MDEntry | str],
    depth: int = 1,
    market: Market | str = Market.ROFEX,
) -> dict[str, Any]:
    """``smd`` subscription for the given symbols of one market"""
    market_id = enum_value(market)
    return {
        "type": WSMessageType.SUBSCRIBE_MARKET_DATA.value,
        "level": 1,
        "depth": depth,
        "entries": [enum_value(e) for e in entries],
        "products": [{"symbol": s, "marketId": market_id} for s in symbols],
    }


def order_report_request(
    account: str, snapshot_only_active: bool = False
) -> dict[str, Any]:
    """``os`` subscription to the execution reports of an account"""
    return {
        "type": WSMessageType.ORDER_SUBSCRIPTION.value,
        "account": {"id": account},
        "snapshotOnlyActive": snapshot_only_active,
    }


def new_order_message(order: NewOrder) -> dict[str, Any]:
    """``no`` message; numeric fields travel as strings"""
    message: dict[str, Any] = {
        "type": WSMessageType.NEW_ORDER.value,
        "product": {
            "marketId": enum_value(order.market),
            "symbol": order.symbol,
        },
        "quantity": str(order.qty),
        "ordType": enum_value(order.type),
        "side": enum_value(order.side).upper(),
        "account": order.account,
        "allOrNone": format_bool(order.all_or_none),
        "timeInForce": enum_value(order.time_in_force).upper(),
    }
    if order.type == OrderType.LIMIT and order.price is not None:
        message["price"] = format_number(order.price)
    if order.iceberg and order.display_qty is not None:
        message["iceberg"] = "true"
        message["displayQuantity"] = str(order.display_qty)
    if order.time_in_force == TimeInForce.GTD and order.expire_date:
        message["expireDate"] = order.expire_date
    if order.ws_cl_ord_id:
        message["wsClOrdId"] = order.ws_cl_ord_id
    return message


def cancel_order_message(client_id: str, proprietary: str) -> dict[str, Any]:
    return {
        "type": WSMessageType.CANCEL_ORDER.value,
        "clientId": client_id,
        "proprietary": proprietary,
    }
