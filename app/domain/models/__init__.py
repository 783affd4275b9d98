"""
Domain Models Package
Export all domain entities
"""

from .portfolio import Instrument, Portfolio

__all__ = [
    "Instrument",
    "Portfolio",
]
