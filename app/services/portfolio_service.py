# app/services/portfolio_service.py

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from app.domain.models import Instrument, Portfolio
from app.infrastructure.market_data.alpaca_client import MarketDataError
from app.infrastructure.market_data.types import MarketDataProvider

logger = logging.getLogger(__name__)

GENERIC_FETCH_ERROR = "Error fetching stock bars"


@dataclass
class PerformanceResult:
    symbol: str
    start_date: date
    end_date: date
    start_price: float = 0.0
    end_price: float = 0.0
    profit: float = 0.0
    annualized_return: float = 0.0
    prices_missing: List[str] = field(default_factory=list)
    error: Optional[str] = None


class PortfolioService:
    def __init__(self, provider: MarketDataProvider):
        self.provider = provider

    async def get_performance(self, symbol: str, start_date: date, end_date: date) -> PerformanceResult:
        symbol = symbol.upper()
        result = PerformanceResult(symbol=symbol, start_date=start_date, end_date=end_date)

        # ------------------------------------------------------------
        # Fetch boundary prices (start and end concurrently)
        # ------------------------------------------------------------
        try:
            start_price, end_price = await self.provider.get_prices(symbol, start_date, end_date)
        except MarketDataError as exc:
            logger.warning("Market data rejected %s: %s", symbol, exc.message)
            if exc.status_code is None:
                result.error = GENERIC_FETCH_ERROR
            else:
                result.error = f"Error fetching data for {symbol}: {exc.message or 'Unknown error'}"
            return result
        except Exception:
            logger.exception("Error fetching stock bars for %s", symbol)
            result.error = GENERIC_FETCH_ERROR
            return result

        # ------------------------------------------------------------
        # Valuation
        # ------------------------------------------------------------
        start_key = start_date.isoformat()
        end_key = end_date.isoformat()
        instrument = Instrument(symbol, {start_key: start_price, end_key: end_price})
        portfolio = Portfolio([instrument])

        result.start_price = instrument.price(start_key)
        result.end_price = instrument.price(end_key)
        result.profit = portfolio.profit(start_key, end_key)
        result.annualized_return = portfolio.annualized_return(start_key, end_key)
        result.prices_missing = [key for key in dict.fromkeys((start_key, end_key)) if not instrument.has_price(key)]

        if result.prices_missing:
            logger.info("⚠️ %s has no price for %s; valued at 0", symbol, ", ".join(result.prices_missing))

        return result
