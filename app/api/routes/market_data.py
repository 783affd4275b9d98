"""
Market Data routes - provider status & operation catalog.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_market_provider
from app.infrastructure.market_data.alpaca_client import AlpacaDataClient
from app.infrastructure.market_data.types import MarketDataProvider

router = APIRouter()


@router.get("/status")
async def market_data_status(provider: MarketDataProvider = Depends(get_market_provider)):
    """Return current market data provider and credential status."""
    return provider.describe()


@router.get("/endpoints")
async def market_data_endpoints():
    """List the market data operations the client can call."""
    return [
        {
            "name": op.name,
            "path": op.path,
            "path_params": op.path_params,
            "summary": op.summary,
        }
        for op in AlpacaDataClient.list_operations()
    ]
