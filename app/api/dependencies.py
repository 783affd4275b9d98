"""
Shared request helpers: config and market data provider from app state.
"""

from fastapi import Request

from app.domain.services.config_engine import ConfigEngine
from app.infrastructure.market_data.provider_factory import get_market_data_provider
from app.infrastructure.market_data.types import MarketDataProvider


def get_config_engine(request: Request) -> ConfigEngine:
    config_engine = getattr(request.app.state, "config_engine", None)
    if config_engine is None:
        config_engine = ConfigEngine()
        config_engine.load_all()
        request.app.state.config_engine = config_engine
    return config_engine


def get_market_provider(request: Request) -> MarketDataProvider:
    provider = getattr(request.app.state, "market_data_provider", None)
    if provider is None:
        provider = get_market_data_provider(get_config_engine(request))
        request.app.state.market_data_provider = provider
    return provider
