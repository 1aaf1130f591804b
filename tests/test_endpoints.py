"""
Endpoint methods and client wiring, against a mocked exchange.
"""

import asyncio
import json
import threading

import httpx
import pytest

from nobitex import AsyncNobitex, Nobitex
from nobitex.errors import ConfigurationError, CredentialsError
from nobitex.models.market import GetTickersParams
from nobitex.models.order import (
    CancelOrderBulkParams,
    CancelOrderParams,
    CreateOrderParams,
    GetOrdersListParams,
    GetOrderStatusParams,
    GetUserTradesParams,
)
from nobitex.models.wallet import GetWalletParams

ORDER = {
    "id": 12345,
    "type": "buy",
    "srcCurrency": "btc",
    "dstCurrency": "usdt",
    "price": "60000",
    "amount": "0.01",
    "totalPrice": "600",
    "matchedAmount": "0",
    "unmatchedAmount": "0.01",
    "fee": "0",
    "partial": False,
    "status": "Active",
    "created_at": "2024-05-01T10:00:00+00:00",
}


class Exchange:
    """Minimal fake Nobitex: canned responses per path, records requests."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.canceled: set[int] = set()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/auth/login/":
            return httpx.Response(200, json={"status": "ok", "key": "issued-key", "device": "dev"})
        if path == "/v2/options":
            return httpx.Response(200, json={"nobitex": {
                "allCurrencies": ["btc", "usdt"], "activeCurrencies": ["btc"],
                "amountPrecisions": {"BTCUSDT": "0.000001"}, "pricePrecisions": {"BTCUSDT": "0.01"},
            }})
        if path == "/market/stats":
            return httpx.Response(200, json={"status": "ok", "stats": {
                "btc-usdt": {"isClosed": False, "latest": "61000", "bestBuy": "60990", "bestSell": "61010"},
            }})
        if path == "/v3/orderbook/BTCUSDT":
            return httpx.Response(200, json={
                "status": "ok", "lastUpdate": 1714557600000, "lastTradePrice": "61000",
                "asks": [["61010", "0.2"]], "bids": [["60990", "0.1"]],
            })
        if path == "/v2/trades/BTCUSDT":
            return httpx.Response(200, json={"status": "ok", "trades": [
                {"time": 1714557600000, "price": "61000", "volume": "0.01", "type": "sell"},
            ]})
        if path == "/v2/wallets":
            return httpx.Response(200, json={"status": "ok", "wallets": {
                "BTC": {"id": 1, "balance": "0.5", "blocked": "0"},
            }})
        if path == "/market/orders/add":
            return httpx.Response(200, json={"status": "ok", "order": ORDER})
        if path == "/market/orders/update-status":
            self.canceled.add(json.loads(request.content)["id"])
            return httpx.Response(200, json={"status": "ok"})
        if path == "/market/orders/cancel-old":
            return httpx.Response(200, json={"status": "ok"})
        if path == "/market/orders/list":
            return httpx.Response(200, json={"status": "ok", "orders": [ORDER]})
        if path == "/market/orders/status":
            return httpx.Response(200, json={"status": "ok", "order": {**ORDER, "isMyOrder": True}})
        if path == "/market/trades/list":
            return httpx.Response(200, json={"status": "ok", "hasNext": True, "trades": [{
                "id": 9, "orderId": "12345", "srcCurrency": "btc", "dstCurrency": "usdt", "market": "BTC-USDT",
                "timestamp": "2024-05-01T10:00:00+00:00", "type": "buy", "price": "60000", "amount": "0.01",
                "total": 600, "fee": "0.6",
            }]})
        return httpx.Response(404, json={"detail": "Not found."})


@pytest.fixture
def exchange():
    return Exchange()


class TestMarketAPI:
    @pytest.mark.asyncio
    async def test_get_config(self, make_client, exchange):
        config = await make_client(exchange).market.get_config()
        assert config.nobitex.active_currencies == ["btc"]
        assert config.nobitex.price_precisions["BTCUSDT"] == "0.01"

    @pytest.mark.asyncio
    async def test_get_tickers(self, make_client, exchange):
        tickers = await make_client(exchange).market.get_tickers(GetTickersParams(src_currency="btc", dst_currency="usdt"))
        assert tickers.stats["btc-usdt"].latest == "61000"
        assert exchange.requests[0].url.query == b"srcCurrency=btc&dstCurrency=usdt"

    @pytest.mark.asyncio
    async def test_get_order_book(self, make_client, exchange):
        book = await make_client(exchange).market.get_order_book("BTCUSDT")
        assert book.bids[0] == ["60990", "0.1"]
        assert book.last_trade_price == "61000"

    @pytest.mark.asyncio
    async def test_get_recent_trades(self, make_client, exchange):
        trades = await make_client(exchange).market.get_recent_trades("BTCUSDT")
        assert trades.trades[0].type == "sell"
        assert "Authorization" not in exchange.requests[0].headers

    @pytest.mark.asyncio
    async def test_unknown_symbol(self, make_client, exchange):
        from nobitex.errors import APIError

        with pytest.raises(APIError) as exc_info:
            await make_client(exchange).market.get_order_book("NOPE")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Not found."


class TestAccountAPIs:
    @pytest.mark.asyncio
    async def test_get_wallets(self, make_client, exchange):
        wallets = await make_client(exchange, api_key="k").wallets.get_wallets(
            GetWalletParams(currencies=["btc", "rls"], trade_type="spot"),
        )
        assert wallets.wallets["BTC"].balance == "0.5"
        request = exchange.requests[0]
        assert request.url.params["assets"] == "btc,rls"
        assert request.headers["Authorization"] == "Token k"

    @pytest.mark.asyncio
    async def test_create_order(self, make_client, exchange):
        status = await make_client(exchange, api_key="k").orders.create(
            CreateOrderParams(type="buy", src_currency="btc", dst_currency="usdt", amount="0.01", price="60000"),
        )
        assert status.order.id == 12345
        assert status.order.unmatched_amount == "0.01"
        assert "X-TOTP" not in exchange.requests[0].headers

    @pytest.mark.asyncio
    async def test_cancel_forces_status(self, make_client, exchange):
        client = make_client(exchange, api_key="k")
        await client.orders.cancel(CancelOrderParams(id=12345, status="active"))
        assert json.loads(exchange.requests[0].content) == {"id": 12345, "status": "canceled"}

    @pytest.mark.asyncio
    async def test_cancel_resubmission_acknowledged(self, make_client, exchange):
        client = make_client(exchange, api_key="k")
        params = CancelOrderParams(id=12345)
        first = await client.orders.cancel(params)
        second = await client.orders.cancel(params)
        assert first.status == second.status == "ok"
        assert exchange.canceled == {12345}
        assert len(exchange.requests) == 2

    @pytest.mark.asyncio
    async def test_cancel_bulk(self, make_client, exchange):
        result = await make_client(exchange, api_key="k").orders.cancel_bulk(CancelOrderBulkParams(hours=6))
        assert result.status == "ok"
        assert json.loads(exchange.requests[0].content) == {"hours": 6.0}

    @pytest.mark.asyncio
    async def test_history_and_open_orders(self, make_client, exchange):
        client = make_client(exchange, api_key="k")
        history = await client.orders.history(GetOrdersListParams(src_currency="btc"))
        await client.orders.open_orders(GetOrdersListParams(src_currency="btc", status="done"))
        assert history.orders[0].matched_amount == "0"
        assert exchange.requests[0].url.query == b"srcCurrency=btc"
        assert exchange.requests[1].url.query == b"status=open&srcCurrency=btc"

    @pytest.mark.asyncio
    async def test_order_status(self, make_client, exchange):
        status = await make_client(exchange, api_key="k").orders.status(GetOrderStatusParams(id=12345))
        assert status.order.is_my_order is True
        assert exchange.requests[0].method == "POST"

    @pytest.mark.asyncio
    async def test_user_trades(self, make_client, exchange):
        trades = await make_client(exchange, api_key="k").orders.user_trades(GetUserTradesParams(from_id="100"))
        assert trades.has_next is True
        assert trades.trades[0].total == "600"
        assert exchange.requests[0].url.query == b"fromId=100"

    @pytest.mark.asyncio
    async def test_account_calls_need_key(self, make_client, exchange):
        from nobitex.errors import AuthenticationError

        with pytest.raises(AuthenticationError):
            await make_client(exchange).orders.open_orders()
        assert exchange.requests == []


class TestClientLifecycle:
    @pytest.mark.asyncio
    async def test_open_logs_in(self, make_client, exchange):
        client = make_client(exchange, username="u", password="p", otp_secret="SECRET")
        async with client:
            assert client.authenticated
            assert client.session.key == "issued-key"
            await client.wallets.get_wallets()
        assert [r.url.path for r in exchange.requests] == ["/auth/login/", "/v2/wallets"]

    @pytest.mark.asyncio
    async def test_pre_issued_key_skips_login(self, make_client, exchange):
        async with make_client(exchange, username="u", password="p", otp_secret="SECRET", api_key="k") as client:
            assert client.session.key == "k"
        assert exchange.requests == []

    @pytest.mark.asyncio
    async def test_anonymous_client(self, make_client, exchange):
        async with make_client(exchange) as client:
            assert not client.authenticated
            await client.market.get_config()

    @pytest.mark.asyncio
    async def test_auto_auth_disabled(self, make_client, exchange):
        async with make_client(exchange, username="u", password="p", otp_secret="SECRET", auto_auth=False) as client:
            assert not client.authenticated
        assert exchange.requests == []

    @pytest.mark.asyncio
    async def test_login_needs_one_time_code(self, make_client, exchange):
        client = make_client(exchange, username="u", password="p")
        with pytest.raises(ConfigurationError):
            await client.open()
        assert exchange.requests == []

    @pytest.mark.asyncio
    async def test_login_needs_both_credentials(self, make_client, exchange):
        client = make_client(exchange, username="u", otp_secret="SECRET")
        with pytest.raises(CredentialsError):
            await client.open()

    @pytest.mark.asyncio
    async def test_injected_http_client_not_closed(self, exchange):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(exchange))
        async with AsyncNobitex(http_client=http_client, base_url="https://api.test"):
            pass
        assert not http_client.is_closed
        await http_client.aclose()


class TestSyncClient:
    def test_constructor_logs_in(self, clock, otp, exchange):
        client = Nobitex(
            username="u", password="p", otp_secret="SECRET", user_agent="TestBot/1.0",
            base_url="https://api.test", otp_provider=otp, clock=clock,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(exchange)),
        )
        with client:
            assert client.authenticated
            wallets = client.wallets.get_wallets()
            assert wallets.wallets["BTC"].balance == "0.5"
            assert client.ensure_fresh().key == "issued-key"
        assert [r.url.path for r in exchange.requests] == ["/auth/login/", "/v2/wallets"]

    def test_constructor_error_propagates(self, clock, exchange):
        with pytest.raises(CredentialsError):
            Nobitex(
                username="u", otp_secret="SECRET", base_url="https://api.test", clock=clock,
                http_client=httpx.AsyncClient(transport=httpx.MockTransport(exchange)),
            )

    def test_shared_between_threads(self, exchange):
        async def slow(request):
            await asyncio.sleep(0.05)
            return exchange(request)

        client = Nobitex(
            base_url="https://api.test",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(slow)),
        )
        results, errors = [], []

        def worker():
            try:
                results.append(client.market.get_config())
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)
        client.close()

        assert errors == []
        assert [c.nobitex.active_currencies for c in results] == [["btc"], ["btc"]]
        assert len(exchange.requests) == 2
