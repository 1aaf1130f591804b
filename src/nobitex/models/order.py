"""
Spot order models — create, cancel, status, history, user trades.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Params(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateOrderParams(_Params):
    execution: str = "limit"  # "limit" | "market" | "stop_limit" | "stop_market"
    type: str                 # "buy" | "sell"
    src_currency: str = Field(alias="srcCurrency")
    dst_currency: str = Field(alias="dstCurrency")
    amount: Optional[str] = None
    price: Optional[str] = None
    stop_price: Optional[str] = Field(None, alias="stopPrice")
    stop_limit_price: Optional[str] = Field(None, alias="stopLimitPrice")
    client_order_id: Optional[str] = Field(None, alias="clientOrderId")


class CancelOrderParams(_Params):
    id: Optional[int] = None
    client_order_id: Optional[str] = Field(None, alias="clientOrderId")
    status: str = "canceled"


class CancelOrderBulkParams(_Params):
    hours: Optional[float] = None
    execution: Optional[str] = None
    trade_type: Optional[str] = Field(None, alias="tradeType")
    src_currency: Optional[str] = Field(None, alias="srcCurrency")
    dst_currency: Optional[str] = Field(None, alias="dstCurrency")


class CancelOrderResponse(BaseModel):
    status: str = ""


class GetOrderStatusParams(_Params):
    id: Optional[int] = None
    client_order_id: Optional[str] = Field(None, alias="clientOrderId")


class GetOrdersListParams(_Params):
    status: Optional[str] = None
    type: Optional[str] = None
    execution: Optional[str] = None
    trade_type: Optional[str] = Field(None, alias="tradeType")
    src_currency: Optional[str] = Field(None, alias="srcCurrency")
    dst_currency: Optional[str] = Field(None, alias="dstCurrency")
    details: Optional[int] = None
    from_id: Optional[int] = Field(None, alias="fromId")
    order: Optional[str] = None


class GetUserTradesParams(_Params):
    src_currency: Optional[str] = Field(None, alias="srcCurrency")
    dst_currency: Optional[str] = Field(None, alias="dstCurrency")
    from_id: Optional[str] = Field(None, alias="fromId")


class Order(BaseModel):
    """Order as returned by add/status/list. Fields vary a little per endpoint."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: Optional[int] = None
    type: str = ""
    execution: Optional[str] = None
    status: Optional[str] = None
    src_currency: str = Field("", alias="srcCurrency")
    dst_currency: str = Field("", alias="dstCurrency")
    price: str = ""
    amount: str = ""
    total_price: Optional[str] = Field(None, alias="totalPrice")
    matched_amount: Optional[str] = Field(None, alias="matchedAmount")
    unmatched_amount: Optional[str] = Field(None, alias="unmatchedAmount")
    average_price: Optional[str] = Field(None, alias="averagePrice")
    fee: Optional[str] = None
    partial: Optional[bool] = None
    is_my_order: Optional[bool] = Field(None, alias="isMyOrder")
    client_order_id: Optional[str] = Field(None, alias="clientOrderId")
    created_at: Optional[datetime] = None


class OrderStatus(BaseModel):
    status: str = ""
    order: Optional[Order] = None


class OrdersList(BaseModel):
    status: str = ""
    orders: list[Order] = []


class UserTrade(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: int = 0
    order_id: Optional[str] = Field(None, alias="orderId")
    src_currency: str = Field("", alias="srcCurrency")
    dst_currency: str = Field("", alias="dstCurrency")
    market: str = ""
    timestamp: Optional[datetime] = None
    type: str = ""
    price: str = ""
    amount: str = ""
    total: Optional[str] = None
    fee: Optional[str] = None


class UserTrades(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = ""
    trades: list[UserTrade] = []
    has_next: bool = Field(False, alias="hasNext")
