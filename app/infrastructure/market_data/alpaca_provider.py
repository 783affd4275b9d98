"""
Alpaca Market Data Provider
Resolves a symbol and a calendar date into a daily opening price.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import date
from typing import Dict, Optional, Tuple

from app.infrastructure.market_data.alpaca_client import AlpacaDataClient
from app.utils.time import to_utc_midnight_iso

logger = logging.getLogger(__name__)


class AlpacaProvider:
    name = "alpaca"

    def __init__(
        self,
        client: AlpacaDataClient,
        feed: Optional[str] = None,
        cache_ttl_seconds: int = 60,
    ):
        self.client = client
        self.feed = (feed or "").strip() or None
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: Dict[str, tuple[float, float]] = {}

    def _cache_get(self, key: str) -> Optional[float]:
        cached = self._cache.get(key)
        if not cached:
            return None
        ts, value = cached
        if time.time() - ts > self.cache_ttl_seconds:
            self._cache.pop(key, None)
            return None
        return value

    def _cache_set(self, key: str, value: float) -> None:
        self._cache[key] = (time.time(), value)

    def describe(self) -> Dict:
        return {
            "provider": self.name,
            "base_url": self.client.base_url,
            "feed": self.feed,
            "credentials_configured": self.client.has_credentials,
            "cache_ttl_seconds": self.cache_ttl_seconds,
        }

    # ------------------------------------------------------------------
    # HISTORICAL PRICES
    # ------------------------------------------------------------------

    async def get_price_for_date(self, symbol: str, target_date: date) -> float:
        """
        Opening price of the first daily bar on or after ``target_date``.

        Returns 0.0 when the API has no bar for the range. Request failures
        propagate as MarketDataError.
        """
        symbol = symbol.upper()
        cache_key = f"alpaca_open:{symbol}:{target_date.isoformat()}"
        cached = self._cache_get(cache_key)
        if cached is not None:
            return cached

        payload = await self.client.stock_bars(
            [symbol],
            timeframe="1Day",
            start=to_utc_midnight_iso(target_date),
            limit=1,
            feed=self.feed,
        )

        bars = (payload or {}).get("bars") or {}
        series = bars.get(symbol) or []
        price = 0.0
        if series:
            try:
                price = float(series[0].get("o") or 0.0)
            except (TypeError, ValueError):
                logger.warning("Unparsable bar for %s on %s: %s", symbol, target_date, series[0])
                price = 0.0
        else:
            logger.info("No daily bar for %s on/after %s", symbol, target_date)

        self._cache_set(cache_key, price)
        return price

    async def get_prices(self, symbol: str, start_date: date, end_date: date) -> Tuple[float, float]:
        start_price, end_price = await asyncio.gather(
            self.get_price_for_date(symbol, start_date),
            self.get_price_for_date(symbol, end_date),
        )
        return start_price, end_price
