from datetime import date
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.api.routes import health, portfolio, market_data
from app.domain.services.config_engine import ConfigEngine
from app.infrastructure.market_data.alpaca_client import MarketDataError
from app.web import routes as web_routes
from tests.stubs import StubGreetingService, StubPriceProvider


@pytest.fixture()
def config_engine() -> ConfigEngine:
    engine = ConfigEngine()
    engine.load_all()
    return engine


@pytest.fixture()
def price_provider() -> StubPriceProvider:
    return StubPriceProvider({
        ("AAPL", date(2020, 1, 2)): 74.06,
        ("AAPL", date(2024, 1, 2)): 187.15,
        ("IBM", date(2022, 1, 3)): 100.0,
        ("IBM", date(2024, 1, 3)): 121.0,
    })


@pytest.fixture()
def failing_provider() -> StubPriceProvider:
    return StubPriceProvider(error=MarketDataError("forbidden.", status_code=403))


@pytest.fixture()
def app(config_engine, price_provider) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])
    app.include_router(market_data.router, prefix="/api/v1/market-data", tags=["Market Data"])
    app.include_router(web_routes.router, tags=["Web"])

    app.state.config_engine = config_engine
    app.state.market_data_provider = price_provider
    app.dependency_overrides[web_routes.get_greeting_service] = lambda: StubGreetingService()
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
