"""
Portfolio API Routes
Profit and annualized return for a stock over a date range
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from datetime import date
from typing import Optional
import logging
import math

from app.api.dependencies import get_config_engine, get_market_provider
from app.domain.schemas.portfolio import PerformanceResponse, SymbolsResponse
from app.domain.services.config_engine import ConfigEngine
from app.infrastructure.market_data.types import MarketDataProvider
from app.services.portfolio_service import PortfolioService
from app.utils.time import today_utc

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/symbols", response_model=SymbolsResponse)
async def get_symbols(config_engine: ConfigEngine = Depends(get_config_engine)):
    """Selectable stocks and default date range"""
    universe = config_engine.stock_universe
    return SymbolsResponse(
        symbols=universe.symbols,
        default_symbol=universe.default_symbol,
        default_start_date=universe.default_start_date,
        default_end_date=today_utc(),
    )


@router.get("/performance", response_model=PerformanceResponse)
async def get_performance(
    symbol: Optional[str] = Query(None, description="Stock symbol"),
    start_date: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    config_engine: ConfigEngine = Depends(get_config_engine),
    provider: MarketDataProvider = Depends(get_market_provider),
):
    """
    Profit and annualized return between two dates

    Prices are the daily opening prices on (or the first trading day
    after) each date. A missing price is valued at 0 and listed in
    ``prices_missing``.
    """
    universe = config_engine.stock_universe
    symbol = (symbol or universe.default_symbol).upper()
    start_date = start_date or universe.default_start_date
    end_date = end_date or today_utc()

    if not universe.is_valid_symbol(symbol):
        raise HTTPException(status_code=400, detail=f"Unknown symbol: {symbol}")
    if end_date > today_utc():
        raise HTTPException(status_code=400, detail="End date cannot be in the future")

    result = await PortfolioService(provider).get_performance(symbol, start_date, end_date)
    if result.error:
        raise HTTPException(status_code=502, detail=result.error)

    annualized = result.annualized_return if math.isfinite(result.annualized_return) else None

    return PerformanceResponse(
        symbol=result.symbol,
        start_date=result.start_date,
        end_date=result.end_date,
        start_price=result.start_price,
        end_price=result.end_price,
        profit=result.profit,
        annualized_return=annualized,
        annualized_return_pct=annualized * 100.0 if annualized is not None else None,
        prices_missing=result.prices_missing,
    )
