"""
FastAPI Main Application
Stock portfolio profit and annualized return, backed by Alpaca market data
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from app.config import settings
from app.core.logging import setup_logging
from app.domain.services.config_engine import ConfigEngine
from app.infrastructure.market_data.provider_factory import get_market_data_provider

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Loads configuration and builds the market data provider
    """
    logger.info("="*60)
    logger.info("🚀 Starting Stocks Portfolio")
    logger.info("="*60)

    logger.info("⚙️  Loading configuration...")
    config_engine = ConfigEngine()
    config_engine.load_all()
    app.state.config_engine = config_engine
    logger.info(f"   📊 Stock Universe: {', '.join(config_engine.stock_universe.symbols)}")

    logger.info("🏗️  Initializing market data provider...")
    provider = get_market_data_provider(config_engine)
    app.state.market_data_provider = provider
    status = provider.describe()
    logger.info(f"   ✅ Provider: {status['provider']} ({status['base_url']})")
    if not status["credentials_configured"]:
        logger.warning("   ⚠️ ALPACA_API_KEY / ALPACA_API_SECRET not set")

    logger.info(f"   ✅ API Server: http://{settings.API_HOST}:{settings.API_PORT}")

    yield

    logger.info("👋 Stocks Portfolio shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Stocks Portfolio",
    description="Profit and annualized return for a stock over a date range",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# Import and include routers
from app.api.routes import health, portfolio, market_data
from app.web import routes as web_routes

app.include_router(health.router, tags=["Health"])
app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])
app.include_router(market_data.router, prefix="/api/v1/market-data", tags=["Market Data"])
app.include_router(web_routes.router, tags=["Web"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
