"""
Response models for API endpoints.
"""

from pydantic import BaseModel
from typing import List

from .price_models import RegionPrice


class APIInfo(BaseModel):
    """Model for API information."""
    message: str
    version: str
    endpoints: dict


class HealthResponse(BaseModel):
    """Model for health check response."""
    status: str
    service: str


class ErrorResponse(BaseModel):
    """Error envelope shared by every endpoint."""
    message: str


class CacheEvictionResponse(BaseModel):
    """Model for cache eviction response."""
    evicted: int
    remaining: int


class RegionPricesResponse(BaseModel):
    """Model for the region list response."""
    regions: List[RegionPrice]
    count: int
