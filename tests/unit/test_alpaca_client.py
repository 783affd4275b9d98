import httpx
import pytest

import app.infrastructure.market_data.alpaca_client as alpaca_module
from app.infrastructure.market_data.alpaca_client import AlpacaDataClient, MarketDataError, OPERATIONS


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _fake_client_factory(response=None, error=None, calls=None):
    class FakeClient:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def get(self, url, headers=None, params=None):
            if calls is not None:
                calls.append({"url": url, "headers": headers, "params": params})
            if error is not None:
                raise error
            return response

    return FakeClient


@pytest.mark.unit
def test_catalog_covers_market_data_surface():
    assert len(OPERATIONS) == 41
    assert OPERATIONS["stock_bars"].path == "/v2/stocks/bars"
    assert OPERATIONS["movers"].path_params == ["market_type"]
    assert OPERATIONS["stock_meta_exchanges"].path_params == []


@pytest.mark.unit
def test_build_url_fills_path_and_query():
    client = AlpacaDataClient(base_url="https://data.example.com/")
    url, query = client.build_url(
        "crypto_latest_quotes",
        {"loc": "us", "symbols": ["BTC/USD", "ETH/USD"], "feed": None},
    )
    assert url == "https://data.example.com/v1beta3/crypto/us/latest/quotes"
    assert query == {"symbols": "BTC/USD,ETH/USD"}


@pytest.mark.unit
def test_build_url_quotes_path_values():
    client = AlpacaDataClient()
    url, _ = client.build_url("stock_bar_single", {"symbol": "BRK/B"})
    assert url == "https://data.alpaca.markets/v2/stocks/BRK%2FB/bars"


@pytest.mark.unit
def test_build_url_rejects_unknown_operation_and_missing_path_param():
    client = AlpacaDataClient()
    with pytest.raises(ValueError):
        client.build_url("stock_candles", {})
    with pytest.raises(ValueError):
        client.build_url("logos", {})


@pytest.mark.asyncio
async def test_stock_bars_sends_auth_headers(monkeypatch):
    calls = []
    payload = {"bars": {"AAPL": [{"o": 74.06}]}, "next_page_token": None}
    monkeypatch.setattr(
        alpaca_module.httpx, "AsyncClient",
        _fake_client_factory(FakeResponse(200, payload), calls=calls),
    )

    client = AlpacaDataClient(api_key=" key-id ", api_secret="secret")
    data = await client.stock_bars(["AAPL"], timeframe="1Day", start="2020-01-01T00:00:00Z", limit=1)

    assert data == payload
    assert calls[0]["url"] == "https://data.alpaca.markets/v2/stocks/bars"
    assert calls[0]["headers"]["APCA-API-KEY-ID"] == "key-id"
    assert calls[0]["headers"]["APCA-API-SECRET-KEY"] == "secret"
    assert calls[0]["params"] == {
        "symbols": "AAPL",
        "timeframe": "1Day",
        "start": "2020-01-01T00:00:00Z",
        "limit": 1,
    }


@pytest.mark.asyncio
async def test_error_status_raises_with_api_message(monkeypatch):
    monkeypatch.setattr(
        alpaca_module.httpx, "AsyncClient",
        _fake_client_factory(FakeResponse(403, {"message": "forbidden."})),
    )
    client = AlpacaDataClient()
    with pytest.raises(MarketDataError) as excinfo:
        await client.request("stock_meta_exchanges")
    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "forbidden."


@pytest.mark.asyncio
async def test_error_status_without_message(monkeypatch):
    monkeypatch.setattr(
        alpaca_module.httpx, "AsyncClient",
        _fake_client_factory(FakeResponse(500, None, text="<html>")),
    )
    with pytest.raises(MarketDataError) as excinfo:
        await AlpacaDataClient().request("news")
    assert excinfo.value.message == "Unknown error"


@pytest.mark.asyncio
async def test_transport_error_is_wrapped(monkeypatch):
    monkeypatch.setattr(
        alpaca_module.httpx, "AsyncClient",
        _fake_client_factory(error=httpx.ConnectError("boom")),
    )
    with pytest.raises(MarketDataError) as excinfo:
        await AlpacaDataClient().request("news")
    assert excinfo.value.status_code is None
