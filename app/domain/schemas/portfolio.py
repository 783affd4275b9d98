from datetime import date
from pydantic import BaseModel
from typing import List, Optional


class PerformanceResponse(BaseModel):
    symbol: str
    start_date: date
    end_date: date
    start_price: float
    end_price: float
    profit: float
    # None when the growth factor overflows (very short intervals)
    annualized_return: Optional[float]
    annualized_return_pct: Optional[float]
    prices_missing: List[str] = []
    error: Optional[str] = None


class SymbolsResponse(BaseModel):
    symbols: List[str]
    default_symbol: str
    default_start_date: date
    default_end_date: date
