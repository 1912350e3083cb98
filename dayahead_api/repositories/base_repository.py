"""
Base repository interface for data access.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseRepository(ABC):
    """Abstract base repository interface."""

    @abstractmethod
    def find_prices(self, region_code: str, start_date: Optional[str] = None,
                    end_date: Optional[str] = None) -> dict:
        """Find the raw price payload of a region for a date range."""
        pass
