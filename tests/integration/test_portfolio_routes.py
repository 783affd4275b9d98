from datetime import date, timedelta

import pytest

from app.utils.time import today_utc
from tests.stubs import StubPriceProvider
from app.infrastructure.market_data.alpaca_client import MarketDataError


@pytest.mark.asyncio
@pytest.mark.integration
async def test_performance_endpoint(client, price_provider):
    resp = await client.get(
        "/api/v1/portfolio/performance",
        params={"symbol": "ibm", "start_date": "2022-01-03", "end_date": "2024-01-03"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["symbol"] == "IBM"
    assert data["start_price"] == 100.0
    assert data["end_price"] == 121.0
    assert data["profit"] == pytest.approx(21.0)
    assert data["annualized_return"] == pytest.approx(0.1, abs=1e-3)
    assert data["annualized_return_pct"] == pytest.approx(10.0, abs=0.1)
    assert data["prices_missing"] == []
    assert price_provider.calls == [("IBM", date(2022, 1, 3)), ("IBM", date(2024, 1, 3))]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_performance_endpoint_reports_missing_prices(client):
    resp = await client.get(
        "/api/v1/portfolio/performance",
        params={"symbol": "AMZN", "start_date": "2022-01-03", "end_date": "2024-01-03"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["profit"] == 0.0
    assert data["annualized_return"] == 0.0
    assert data["prices_missing"] == ["2022-01-03", "2024-01-03"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_performance_endpoint_validation(client):
    resp = await client.get("/api/v1/portfolio/performance", params={"symbol": "TSLA"})
    assert resp.status_code == 400

    tomorrow = (today_utc() + timedelta(days=1)).isoformat()
    resp = await client.get("/api/v1/portfolio/performance", params={"end_date": tomorrow})
    assert resp.status_code == 400

    resp = await client.get("/api/v1/portfolio/performance", params={"start_date": "01/01/2020"})
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_performance_endpoint_upstream_error(app, client):
    app.state.market_data_provider = StubPriceProvider(error=MarketDataError("forbidden.", status_code=403))
    resp = await client.get("/api/v1/portfolio/performance", params={"start_date": "2022-01-03"})
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Error fetching data for AAPL: forbidden."


@pytest.mark.asyncio
@pytest.mark.integration
async def test_symbols_endpoint(client):
    resp = await client.get("/api/v1/portfolio/symbols")
    assert resp.status_code == 200
    data = resp.json()
    assert data["symbols"] == ["AAPL", "AMZN", "IBM", "GOOGL"]
    assert data["default_symbol"] == "AAPL"
    assert data["default_start_date"] == "2020-01-01"
    assert data["default_end_date"] == today_utc().isoformat()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_market_data_routes(client):
    resp = await client.get("/api/v1/market-data/status")
    assert resp.status_code == 200
    assert resp.json()["provider"] == "stub"

    resp = await client.get("/api/v1/market-data/endpoints")
    assert resp.status_code == 200
    names = {op["name"] for op in resp.json()}
    assert {"stock_bars", "crypto_bars", "option_chain", "movers", "news"} <= names

    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_performance_endpoint_overflowing_return_is_null(app, client):
    app.state.market_data_provider = StubPriceProvider({
        ("AAPL", date(2024, 1, 2)): 1.0,
        ("AAPL", date(2024, 1, 3)): 10.0,
    })
    resp = await client.get(
        "/api/v1/portfolio/performance",
        params={"symbol": "AAPL", "start_date": "2024-01-02", "end_date": "2024-01-03"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["profit"] == pytest.approx(9.0)
    assert data["annualized_return"] is None
    assert data["annualized_return_pct"] is None
