"""
Utilities package for the day-ahead price API.
"""

from .query_cache import QueryCache, CacheEntry, PENDING, SUCCESS, ERROR

__all__ = ['QueryCache', 'CacheEntry', 'PENDING', 'SUCCESS', 'ERROR']
