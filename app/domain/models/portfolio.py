"""
DOMAIN MODELS: INSTRUMENT & PORTFOLIO VALUATION

Immutable structures for price lookup and portfolio valuation.
No market data fetching. Every operation is pure and never raises;
degenerate input resolves to 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

from app.utils.time import years_between


@dataclass(frozen=True)
class Instrument:
    """
    A tradable symbol with a sparse date -> price lookup.

    A date missing from ``prices`` is priced at 0. There is no separate
    notion of "unknown"; callers that care use ``has_price``.
    """
    symbol: str
    prices: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "prices", MappingProxyType(dict(self.prices)))

    def price(self, date_key: str) -> float:
        value = float(self.prices.get(date_key) or 0.0)
        if math.isnan(value):
            return 0.0
        return value

    def has_price(self, date_key: str) -> bool:
        return self.price(date_key) != 0.0


@dataclass(frozen=True, init=False)
class Portfolio:
    """
    Ordered collection of instruments.
    """
    instruments: Tuple[Instrument, ...] = ()

    def __init__(self, instruments: Sequence[Instrument] = ()):
        object.__setattr__(self, "instruments", tuple(instruments))

    def profit(self, start_date: str, end_date: str) -> float:
        """Sum of unweighted per-unit price deltas across all instruments."""
        total = 0.0
        for instrument in self.instruments:
            total += instrument.price(end_date) - instrument.price(start_date)
        return total

    def annualized_return(self, start_date: str, end_date: str) -> float:
        """
        Compound annual growth rate of the first instrument.

        Other instruments are ignored. Returns 0 for an empty portfolio,
        a non-positive interval or a non-positive start price.
        """
        if not self.instruments:
            return 0.0

        reference = self.instruments[0]
        years = years_between(start_date, end_date)
        start_price = reference.price(start_date)
        end_price = reference.price(end_date)

        if years > 0 and start_price > 0:
            ratio = end_price / start_price
            if ratio < 0:
                return 0.0
            try:
                return math.pow(ratio, 1.0 / years) - 1.0
            except OverflowError:
                return math.inf
        return 0.0
