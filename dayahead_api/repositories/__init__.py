"""
Repository package for data access layer.
"""

from .base_repository import BaseRepository
from .upstream_price_repository import UpstreamPriceRepository, FingerprintAdapter

__all__ = [
    "BaseRepository",
    "UpstreamPriceRepository",
    "FingerprintAdapter"
]
