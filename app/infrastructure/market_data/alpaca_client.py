"""
Alpaca Market Data API client.
Catalog of the market-data GET operations plus an async request helper.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class MarketDataError(Exception):
    """Market data request failed (HTTP error status or transport failure)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class Operation:
    name: str
    path: str
    summary: str

    @property
    def path_params(self) -> List[str]:
        return [field for _, field, _, _ in string.Formatter().parse(self.path) if field]


_OPERATIONS: tuple[Operation, ...] = (
    # Corporate actions / forex / logos / news
    Operation("corporate_actions", "/v1/corporate-actions", "Corporate actions for the given symbols over a time period"),
    Operation("latest_rates", "/v1beta1/forex/latest/rates", "Latest forex rates for the given currency pairs"),
    Operation("rates", "/v1beta1/forex/rates", "Historical forex rates for the given currency pairs"),
    Operation("logos", "/v1beta1/logos/{symbol}", "Company logo image for a symbol"),
    Operation("news", "/v1beta1/news", "Latest news articles across stocks and crypto"),
    # Options
    Operation("option_bars", "/v1beta1/options/bars", "Historical option bars"),
    Operation("option_meta_conditions", "/v1beta1/options/meta/conditions/{ticktype}", "Option condition code names"),
    Operation("option_meta_exchanges", "/v1beta1/options/meta/exchanges", "Option exchange code names"),
    Operation("option_latest_quotes", "/v1beta1/options/quotes/latest", "Latest option quotes"),
    Operation("option_snapshots", "/v1beta1/options/snapshots", "Latest trade, quote and greeks per option symbol"),
    Operation("option_chain", "/v1beta1/options/snapshots/{underlying_symbol}", "Option chain snapshots for an underlying"),
    Operation("option_trades", "/v1beta1/options/trades", "Historical option trades"),
    Operation("option_latest_trades", "/v1beta1/options/trades/latest", "Latest option trades"),
    # Screener
    Operation("most_actives", "/v1beta1/screener/stocks/most-actives", "Most active stocks by volume or trade count"),
    Operation("movers", "/v1beta1/screener/{market_type}/movers", "Top market gainers and losers"),
    # Crypto
    Operation("crypto_bars", "/v1beta3/crypto/{loc}/bars", "Historical crypto bars"),
    Operation("crypto_latest_bars", "/v1beta3/crypto/{loc}/latest/bars", "Latest crypto minute bars"),
    Operation("crypto_latest_orderbooks", "/v1beta3/crypto/{loc}/latest/orderbooks", "Latest crypto orderbooks"),
    Operation("crypto_latest_quotes", "/v1beta3/crypto/{loc}/latest/quotes", "Latest crypto quotes"),
    Operation("crypto_latest_trades", "/v1beta3/crypto/{loc}/latest/trades", "Latest crypto trades"),
    Operation("crypto_quotes", "/v1beta3/crypto/{loc}/quotes", "Historical crypto quotes"),
    Operation("crypto_snapshots", "/v1beta3/crypto/{loc}/snapshots", "Crypto snapshots"),
    Operation("crypto_trades", "/v1beta3/crypto/{loc}/trades", "Historical crypto trades"),
    # Stocks (multi-symbol)
    Operation("stock_auctions", "/v2/stocks/auctions", "Historical auctions for a list of symbols"),
    Operation("stock_bars", "/v2/stocks/bars", "Historical bars for a list of symbols"),
    Operation("stock_latest_bars", "/v2/stocks/bars/latest", "Latest minute bars for a list of symbols"),
    Operation("stock_meta_conditions", "/v2/stocks/meta/conditions/{ticktype}", "Stock condition code names"),
    Operation("stock_meta_exchanges", "/v2/stocks/meta/exchanges", "Stock exchange code names"),
    Operation("stock_quotes", "/v2/stocks/quotes", "Historical quotes for a list of symbols"),
    Operation("stock_latest_quotes", "/v2/stocks/quotes/latest", "Latest quotes for a list of symbols"),
    Operation("stock_snapshots", "/v2/stocks/snapshots", "Snapshots for a list of symbols"),
    Operation("stock_trades", "/v2/stocks/trades", "Historical trades for a list of symbols"),
    Operation("stock_latest_trades", "/v2/stocks/trades/latest", "Latest trades for a list of symbols"),
    # Stocks (single symbol)
    Operation("stock_auction_single", "/v2/stocks/{symbol}/auctions", "Historical auctions for one symbol"),
    Operation("stock_bar_single", "/v2/stocks/{symbol}/bars", "Historical bars for one symbol"),
    Operation("stock_latest_bar_single", "/v2/stocks/{symbol}/bars/latest", "Latest minute bar for one symbol"),
    Operation("stock_quote_single", "/v2/stocks/{symbol}/quotes", "Historical quotes for one symbol"),
    Operation("stock_latest_quote_single", "/v2/stocks/{symbol}/quotes/latest", "Latest quote for one symbol"),
    Operation("stock_snapshot_single", "/v2/stocks/{symbol}/snapshot", "Snapshot for one symbol"),
    Operation("stock_trade_single", "/v2/stocks/{symbol}/trades", "Historical trades for one symbol"),
    Operation("stock_latest_trade_single", "/v2/stocks/{symbol}/trades/latest", "Latest trade for one symbol"),
)

OPERATIONS: Dict[str, Operation] = {op.name: op for op in _OPERATIONS}


def _format_param(value: Any) -> Any:
    if isinstance(value, (list, tuple, set)):
        return ",".join(str(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class AlpacaDataClient:
    def __init__(
        self,
        base_url: str = "https://data.alpaca.markets",
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = (api_key or "").strip() or None
        self.api_secret = (api_secret or "").strip() or None
        self.timeout = timeout

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["APCA-API-KEY-ID"] = self.api_key
        if self.api_secret:
            headers["APCA-API-SECRET-KEY"] = self.api_secret
        return headers

    @staticmethod
    def list_operations() -> List[Operation]:
        return list(_OPERATIONS)

    def build_url(self, operation: str, params: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
        """
        Resolve an operation into (url, query params).

        Path placeholders are filled from ``params``; what remains becomes
        the query string. None values are dropped.
        """
        op = OPERATIONS.get(operation)
        if op is None:
            raise ValueError(f"Unknown market data operation: {operation}")

        query = {k: _format_param(v) for k, v in params.items() if v is not None}
        path_values = {}
        for name in op.path_params:
            if name not in query:
                raise ValueError(f"Missing path parameter '{name}' for {operation}")
            path_values[name] = quote(str(query.pop(name)), safe="")
        return f"{self.base_url}{op.path.format(**path_values)}", query

    async def request(self, operation: str, **params: Any) -> Any:
        url, query = self.build_url(operation, params)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers=self._headers(), params=query)
        except httpx.HTTPError as exc:
            logger.warning("Market data request %s failed: %s", operation, exc)
            raise MarketDataError(f"Request failed: {exc}") from exc

        if response.status_code != 200:
            message = "Unknown error"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                message = str(body["message"])
            logger.debug("Market data API %s %s: %s", operation, response.status_code, response.text)
            raise MarketDataError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise MarketDataError("Malformed response", status_code=response.status_code) from exc

    # ------------------------------------------------------------------
    # STOCK BARS
    # ------------------------------------------------------------------

    async def stock_bars(
        self,
        symbols: Iterable[str],
        timeframe: str = "1Day",
        start: Optional[str] = None,
        end: Optional[str] = None,
        limit: Optional[int] = None,
        feed: Optional[str] = None,
        page_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.request(
            "stock_bars",
            symbols=list(symbols),
            timeframe=timeframe,
            start=start,
            end=end,
            limit=limit,
            feed=feed,
            page_token=page_token,
        )
