"""
Public market data — no authentication required.
"""

from typing import Optional

from nobitex.models.market import Config, GetTickersParams, OrderBook, Tickers, Trades
from nobitex.transport.http import HttpClient, RequestDescriptor


class MarketAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def get_config(self, timeout: Optional[float] = None) -> Config:
        """Currencies and precisions — GET /v2/options"""
        return await self._http.execute(RequestDescriptor(
            "GET", "/options", version="v2", result=Config, timeout=timeout,
        ))

    async def get_tickers(self, params: GetTickersParams, timeout: Optional[float] = None) -> Tickers:
        """Market stats for a pair — GET /market/stats"""
        return await self._http.execute(RequestDescriptor(
            "GET", "/market/stats", body=params, result=Tickers, timeout=timeout,
        ))

    async def get_order_book(self, symbol: str, timeout: Optional[float] = None) -> OrderBook:
        """Order book, e.g. BTCUSDT — GET /v3/orderbook/{symbol}"""
        return await self._http.execute(RequestDescriptor(
            "GET", f"/orderbook/{symbol}", version="v3", result=OrderBook, timeout=timeout,
        ))

    async def get_recent_trades(self, symbol: str, timeout: Optional[float] = None) -> Trades:
        """Latest trades, newest first — GET /v2/trades/{symbol}"""
        return await self._http.execute(RequestDescriptor(
            "GET", f"/trades/{symbol}", version="v2", result=Trades, timeout=timeout,
        ))
