"""
Market data provider factory (config-driven).
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from app.domain.services.config_engine import ConfigEngine
from app.infrastructure.market_data.types import MarketDataProvider
from app.infrastructure.market_data.alpaca_client import AlpacaDataClient
from app.infrastructure.market_data.alpaca_provider import AlpacaProvider
from app.config import settings

logger = logging.getLogger(__name__)

DEFAULT_ALPACA_DATA_URL = "https://data.alpaca.markets"


def _load_app_config(config_engine: Optional[ConfigEngine] = None) -> Dict:
    if config_engine is None:
        config_engine = ConfigEngine()
        config_engine.load_all()
    try:
        return config_engine.get_app_setting("market_data") or {}
    except KeyError:
        return {}


def _build_provider(name: str, app_config: Dict) -> MarketDataProvider:
    name = (name or "").lower()
    if name == "alpaca":
        alpaca_cfg = app_config.get("alpaca") or {}
        api_key = (settings.ALPACA_API_KEY or "").strip()
        api_secret = (settings.ALPACA_API_SECRET or "").strip()
        if not api_key or not api_secret:
            logger.warning("Alpaca API key/secret missing; requests will be rejected")

        cache_ttl = settings.MARKET_DATA_CACHE_TTL
        if cache_ttl is None:
            cache_ttl = int(alpaca_cfg.get("cache_ttl", 60))

        client = AlpacaDataClient(
            base_url=settings.ALPACA_DATA_BASE_URL or alpaca_cfg.get("data_base_url") or DEFAULT_ALPACA_DATA_URL,
            api_key=api_key,
            api_secret=api_secret,
            timeout=settings.MARKET_DATA_TIMEOUT_SECONDS,
        )
        return AlpacaProvider(
            client,
            feed=settings.ALPACA_DATA_FEED or alpaca_cfg.get("feed"),
            cache_ttl_seconds=cache_ttl,
        )

    raise ValueError(f"Unsupported market data provider: {name}")


def get_market_data_provider(config_engine: Optional[ConfigEngine] = None) -> MarketDataProvider:
    app_config = _load_app_config(config_engine)
    provider_name = app_config.get("provider", "alpaca")
    return _build_provider(provider_name, app_config)
