"""
CONFIG ENGINE
Load, validate, and expose application configuration

RESPONSIBILITIES:
- Load YAML configuration (config/app.yml)
- Validate the stock universe
- Expose read-only typed objects

RULES:
✅ Fail fast on missing or invalid config
✅ Deterministic output
"""

import yaml
from datetime import date
from pathlib import Path
from typing import Any, Dict, List
from dataclasses import dataclass


DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"


@dataclass(frozen=True)
class StockUniverse:
    """Selectable stock symbols"""
    symbols: List[str]
    default_symbol: str
    default_start_date: date

    def is_valid_symbol(self, symbol: str) -> bool:
        """Check if symbol is valid"""
        return (symbol or "").upper() in self.symbols


class ConfigEngine:
    """
    Configuration Engine
    Single source of truth for application configuration
    """

    def __init__(self, config_dir: Path = DEFAULT_CONFIG_DIR):
        self.config_dir = config_dir
        self._app_config: Dict = None
        self._stock_universe: StockUniverse = None

    def load_all(self) -> None:
        """Load all configuration files"""
        self._load_app_config()
        self._load_stock_universe()

    def _load_app_config(self) -> None:
        """Load application config from app.yml"""
        app_file = self.config_dir / "app.yml"
        if not app_file.exists():
            raise FileNotFoundError(f"App config not found: {app_file}")

        with open(app_file, 'r') as f:
            self._app_config = yaml.safe_load(f) or {}

    def _load_stock_universe(self) -> None:
        portfolio_cfg = self._app_config.get("portfolio") or {}
        symbols = [str(s).upper() for s in portfolio_cfg.get("symbols") or []]
        if not symbols:
            raise ValueError("portfolio.symbols must list at least one symbol")
        if len(symbols) != len(set(symbols)):
            raise ValueError("Duplicate stock symbols found in configuration")

        default_symbol = str(portfolio_cfg.get("default_symbol") or symbols[0]).upper()
        if default_symbol not in symbols:
            raise ValueError(f"Default symbol not in universe: {default_symbol}")

        raw_start = portfolio_cfg.get("default_start_date", "2020-01-01")
        # PyYAML already parses unquoted ISO dates
        default_start = raw_start if isinstance(raw_start, date) else date.fromisoformat(str(raw_start))

        self._stock_universe = StockUniverse(
            symbols=symbols,
            default_symbol=default_symbol,
            default_start_date=default_start,
        )

    @property
    def stock_universe(self) -> StockUniverse:
        """Get stock universe"""
        if self._stock_universe is None:
            raise RuntimeError("Config not loaded. Call load_all() first")
        return self._stock_universe

    def get_app_setting(self, *keys) -> Any:
        """Get app setting by nested keys"""
        if self._app_config is None:
            raise RuntimeError("Config not loaded. Call load_all() first")

        value = self._app_config
        for key in keys:
            value = value[key]
        return value
