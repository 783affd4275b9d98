"""
Single-page portfolio view
Stock selector, date range, profit and annualized return cards
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api.dependencies import get_config_engine, get_market_provider
from app.domain.services.config_engine import ConfigEngine
from app.infrastructure.market_data.types import MarketDataProvider
from app.services.greeting_service import GreetingService
from app.services.portfolio_service import PortfolioService
from app.utils.time import format_display_date, today_utc

logger = logging.getLogger(__name__)
router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["display_date"] = format_display_date


def _parse_date(value: Optional[str], fallback: date) -> tuple[date, Optional[str]]:
    if not value:
        return fallback, None
    try:
        return date.fromisoformat(value), None
    except ValueError:
        return fallback, f"Invalid date: {value}"


def get_greeting_service() -> GreetingService:
    return GreetingService()


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    symbol: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    config_engine: ConfigEngine = Depends(get_config_engine),
    provider: MarketDataProvider = Depends(get_market_provider),
    greeting: GreetingService = Depends(get_greeting_service),
):
    universe = config_engine.stock_universe
    today = today_utc()

    selected = (symbol or universe.default_symbol).upper()
    start, start_error = _parse_date(start_date, universe.default_start_date)
    end, end_error = _parse_date(end_date, today)

    error = start_error or end_error
    if not universe.is_valid_symbol(selected):
        error = f"Unknown symbol: {selected}"
        selected = universe.default_symbol
    elif end > today:
        error = "End date cannot be in the future"
        end = today

    result = await PortfolioService(provider).get_performance(selected, start, end)
    name = await greeting.random_name()

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "name": name,
            "symbols": universe.symbols,
            "selected_symbol": selected,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "max_date": today.isoformat(),
            "profit": result.profit,
            "annualized_return": result.annualized_return,
            "prices_missing": result.prices_missing,
            "error": error or result.error,
        },
    )
