"""
Spot orders — authenticated. No TOTP is needed for order calls.
"""

from typing import Optional

from nobitex.models.order import (
    CancelOrderBulkParams,
    CancelOrderParams,
    CancelOrderResponse,
    CreateOrderParams,
    GetOrdersListParams,
    GetOrderStatusParams,
    GetUserTradesParams,
    OrdersList,
    OrderStatus,
    UserTrades,
)
from nobitex.transport.http import HttpClient, RequestDescriptor


class OrdersAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def _call(self, method: str, endpoint: str, body, result, timeout: Optional[float]):
        return await self._http.execute(RequestDescriptor(
            method, endpoint, auth=True, body=body, result=result, timeout=timeout,
        ))

    async def create(self, params: CreateOrderParams, timeout: Optional[float] = None) -> OrderStatus:
        """Place an order — POST /market/orders/add"""
        return await self._call("POST", "/market/orders/add", params, OrderStatus, timeout)

    async def cancel(self, params: CancelOrderParams, timeout: Optional[float] = None) -> CancelOrderResponse:
        """Cancel one order by id or client order id — POST /market/orders/update-status

        Cancelling an already-cancelled order returns the same {"status": "ok"}.
        """
        params = params.model_copy(update={"status": "canceled"})
        return await self._call("POST", "/market/orders/update-status", params, CancelOrderResponse, timeout)

    async def cancel_bulk(
        self, params: Optional[CancelOrderBulkParams] = None, timeout: Optional[float] = None,
    ) -> CancelOrderResponse:
        """Cancel every order matching the filters — POST /market/orders/cancel-old"""
        return await self._call(
            "POST", "/market/orders/cancel-old", params or CancelOrderBulkParams(), CancelOrderResponse, timeout,
        )

    async def history(
        self, params: Optional[GetOrdersListParams] = None, timeout: Optional[float] = None,
    ) -> OrdersList:
        """Order history — GET /market/orders/list"""
        return await self._call("GET", "/market/orders/list", params or GetOrdersListParams(), OrdersList, timeout)

    async def open_orders(
        self, params: Optional[GetOrdersListParams] = None, timeout: Optional[float] = None,
    ) -> OrdersList:
        """Same as history() with status forced to "open"."""
        params = (params or GetOrdersListParams()).model_copy(update={"status": "open"})
        return await self._call("GET", "/market/orders/list", params, OrdersList, timeout)

    async def status(self, params: GetOrderStatusParams, timeout: Optional[float] = None) -> OrderStatus:
        """Single order detail — POST /market/orders/status"""
        return await self._call("POST", "/market/orders/status", params, OrderStatus, timeout)

    async def user_trades(
        self, params: Optional[GetUserTradesParams] = None, timeout: Optional[float] = None,
    ) -> UserTrades:
        """Own trade history, paginated via from_id — GET /market/trades/list"""
        return await self._call("GET", "/market/trades/list", params or GetUserTradesParams(), UserTrades, timeout)
