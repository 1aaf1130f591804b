"""
Public market data models — options, stats, order book, trades.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NobitexOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    all_currencies: list[str] = Field(default_factory=list, alias="allCurrencies")
    active_currencies: list[str] = Field(default_factory=list, alias="activeCurrencies")
    amount_precisions: dict[str, str] = Field(default_factory=dict, alias="amountPrecisions")
    price_precisions: dict[str, str] = Field(default_factory=dict, alias="pricePrecisions")


class Config(BaseModel):
    nobitex: NobitexOptions = NobitexOptions()


class GetTickersParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    src_currency: str = Field(alias="srcCurrency")
    dst_currency: str = Field(alias="dstCurrency")


class Ticker(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_closed: bool = Field(False, alias="isClosed")
    best_sell: Optional[str] = Field(None, alias="bestSell")
    best_buy: Optional[str] = Field(None, alias="bestBuy")
    volume_src: Optional[str] = Field(None, alias="volumeSrc")
    volume_dst: Optional[str] = Field(None, alias="volumeDst")
    latest: Optional[str] = None
    mark: Optional[str] = None
    day_low: Optional[str] = Field(None, alias="dayLow")
    day_high: Optional[str] = Field(None, alias="dayHigh")
    day_open: Optional[str] = Field(None, alias="dayOpen")
    day_close: Optional[str] = Field(None, alias="dayClose")
    day_change: Optional[str] = Field(None, alias="dayChange")


class Tickers(BaseModel):
    status: str = ""
    stats: dict[str, Ticker] = {}


class OrderBook(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = ""
    last_update: Optional[int] = Field(None, alias="lastUpdate")
    last_trade_price: Optional[str] = Field(None, alias="lastTradePrice")
    asks: list[list[str]] = []
    bids: list[list[str]] = []


class Trade(BaseModel):
    time: Optional[datetime] = None
    price: str = ""
    volume: str = ""
    type: str = ""  # "buy" | "sell"


class Trades(BaseModel):
    status: str = ""
    trades: list[Trade] = []
