"""Order entry and order queries (REST and one-shot WebSocket)"""

from loguru import logger

from rofex.domain.models.enums import Market, OrderType, TimeInForce
from rofex.domain.models.orders import NewOrder
from rofex.domain.models.responses import (
    AllOrdersStatusResponse,
    OrderResponse,
    OrderStatusResponse,
)
from rofex.infrastructure.protocols import WebSocketConnector
from rofex.infrastructure.requests import RofexRequestClient
from rofex.shared.constants import (
    AUTH_HEADER,
    PATH_ACTIVE_ORDERS,
    PATH_ALL_ORDERS,
    PATH_CANCEL_ORDER,
    PATH_FILLED_ORDERS,
    PATH_NEW_ORDER,
    PATH_ORDER_BY_EXEC_ID,
    PATH_ORDER_BY_ORDER_ID,
    PATH_ORDER_HISTORY,
    PATH_ORDER_STATUS,
    PATH_REPLACE_ORDER,
)
from rofex.shared.exceptions import AuthTokenError, StreamError, ValidationError
from rofex.shared.formatting import enum_value, escape, format_bool, format_number
from rofex.streaming.connection import StreamConnection
from rofex.streaming.messages import cancel_order_message, new_order_message


class OrdersService:
    """Order management operations

    REST order entry answers with the client order id only; the final
    state has to be checked with ``order_status`` or an order report
    subscription.
    """

    def __init__(
        self,
        client: RofexRequestClient,
        connector: WebSocketConnector | None = None,
    ) -> None:
        """Initialize orders service

        Args:
            client: Request client
            connector: WebSocket connector for the one-shot WS commands
        """
        self.client = client
        self.connector = connector

    def _proprietary(self, proprietary: str | None) -> str:
        if proprietary is None or not proprietary.strip():
            return self.client.config.proprietary
        return proprietary

    async def send_order(self, order: NewOrder) -> OrderResponse:
        """Send a new single order

        Raises:
            ValidationError: If the order is incomplete
        """
        order.validate()
        market = order.market or Market.ROFEX
        path = PATH_NEW_ORDER.format(
            market=enum_value(market),
            symbol=escape(order.symbol),
            qty=order.qty,
            ord_type=enum_value(order.type),
            side=enum_value(order.side),
            tif=enum_value(order.time_in_force),
            account=order.account,
            cancel_previous=format_bool(order.cancel_previous),
        )
        if order.type == OrderType.LIMIT and order.price is not None:
            path += f"&price={format_number(order.price)}"
        if order.time_in_force == TimeInForce.GTD and order.expire_date:
            path += f"&expireDate={order.expire_date}"
        if order.iceberg and order.display_qty is not None:
            path += f"&iceberg=true&displayQty={order.display_qty}"

        logger.info(
            f"Sending {enum_value(order.type)} order: {enum_value(order.side)} "
            f"{order.qty} {order.symbol} price={order.price}"
        )
        return await self.client.get_typed(path, OrderResponse)

    async def cancel_order(
        self, cl_ord_id: str, proprietary: str | None = None
    ) -> OrderResponse:
        if not cl_ord_id:
            raise ValidationError("clientOrderID", "required")
        path = PATH_CANCEL_ORDER.format(
            cl_ord_id=cl_ord_id, proprietary=self._proprietary(proprietary)
        )
        logger.info(f"Cancelling order {cl_ord_id}")
        return await self.client.get_typed(path, OrderResponse)

    async def replace_order(
        self,
        cl_ord_id: str,
        proprietary: str | None = None,
        new_qty: int | None = None,
        new_price: float | None = None,
    ) -> OrderResponse:
        """Modify quantity and/or price; only the given fields are sent"""
        if not cl_ord_id:
            raise ValidationError("clOrdID", "required")
        path = PATH_REPLACE_ORDER.format(
            cl_ord_id=cl_ord_id, proprietary=self._proprietary(proprietary)
        )
        if new_qty is not None:
            path += f"&orderQty={new_qty}"
        if new_price is not None:
            path += f"&price={format_number(new_price)}"
        logger.info(f"Replacing order {cl_ord_id}: qty={new_qty} price={new_price}")
        return await self.client.get_typed(path, OrderResponse)

    async def order_status(
        self, cl_ord_id: str, proprietary: str | None = None
    ) -> OrderStatusResponse:
        if not cl_ord_id:
            raise ValidationError("clientOrderID", "required")
        path = PATH_ORDER_STATUS.format(
            cl_ord_id=cl_ord_id, proprietary=self._proprietary(proprietary)
        )
        return await self.client.get_typed(path, OrderStatusResponse)

    async def order_history_by_cl_ord_id(
        self, cl_ord_id: str, proprietary: str | None = None
    ) -> AllOrdersStatusResponse:
        """Every state the order went through"""
        if not cl_ord_id:
            raise ValidationError("clOrdID", "required")
        path = PATH_ORDER_HISTORY.format(
            cl_ord_id=cl_ord_id, proprietary=self._proprietary(proprietary)
        )
        return await self.client.get_typed(path, AllOrdersStatusResponse)

    async def order_by_order_id(self, order_id: str) -> OrderStatusResponse:
        if not order_id.strip():
            raise ValidationError("orderID", "required")
        return await self.client.get_typed(
            PATH_ORDER_BY_ORDER_ID.format(order_id=order_id), OrderStatusResponse
        )

    async def order_by_exec_id(self, exec_id: str) -> OrderStatusResponse:
        if not exec_id.strip():
            raise ValidationError("execID", "required")
        return await self.client.get_typed(
            PATH_ORDER_BY_EXEC_ID.format(exec_id=exec_id), OrderStatusResponse
        )

    async def filled_orders(self, account: str) -> AllOrdersStatusResponse:
        return await self._orders_by_account(PATH_FILLED_ORDERS, account)

    async def active_orders(self, account: str) -> AllOrdersStatusResponse:
        return await self._orders_by_account(PATH_ACTIVE_ORDERS, account)

    async def all_orders_status(self, account: str) -> AllOrdersStatusResponse:
        return await self._orders_by_account(PATH_ALL_ORDERS, account)

    async def _orders_by_account(
        self, template: str, account: str
    ) -> AllOrdersStatusResponse:
        if not account:
            raise ValidationError("account", "required")
        return await self.client.get_typed(
            template.format(account=account), AllOrdersStatusResponse
        )

    async def send_order_ws(self, order: NewOrder) -> None:
        """Send a new order over a short-lived WebSocket connection

        The result arrives as an execution report on an order report
        subscription (match it with ``ws_cl_ord_id``).

        Raises:
            ValidationError: If the order is incomplete
            AuthTokenError: If no token can be obtained
            StreamError: If the connection or the write fails
        """
        order.validate()
        if not order.market:
            order.market = Market.ROFEX
        await self._send_ws(new_order_message(order))

    async def cancel_order_ws(
        self, cl_ord_id: str, proprietary: str | None = None
    ) -> None:
        """Cancel an order over a short-lived WebSocket connection"""
        if not cl_ord_id:
            raise ValidationError("clientOrderID", "required")
        await self._send_ws(
            cancel_order_message(cl_ord_id, self._proprietary(proprietary))
        )

    async def _send_ws(self, message: dict) -> None:
        try:
            token = await self.client.ws_auth_token()
        except Exception as e:
            raise AuthTokenError(f"auth token error: {e}") from e

        conn = StreamConnection(
            self.client.config.ws_url, {AUTH_HEADER: token}, self.connector
        )
        try:
            await conn.connect()
        except StreamError as e:
            raise StreamError(f"connection failed: {e}") from e
        try:
            await conn.write_json(message)
            logger.info(f"Sent {message['type']} message over WebSocket")
        finally:
            await conn.disconnect()
