"""
Market data provider protocol for type hints.
"""

from __future__ import annotations

from typing import Protocol, Dict, Tuple
from datetime import date


class MarketDataProvider(Protocol):
    name: str

    async def get_price_for_date(self, symbol: str, target_date: date) -> float:
        ...

    async def get_prices(self, symbol: str, start_date: date, end_date: date) -> Tuple[float, float]:
        ...

    def describe(self) -> Dict:
        ...
