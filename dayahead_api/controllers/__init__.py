"""
Controllers package for API endpoint handlers.
Imports all controllers for easy access.
"""

from fastapi import APIRouter

# Base controller
from .base_controller import BaseController

# Individual controllers
from .info_controller import InfoController
from .proxy_controller import ProxyController
from .region_controller import RegionController


class PriceApiController:
    """
    Aggregate controller that combines all price API controllers
    under a single router.
    """

    def __init__(self):
        """Initialize aggregate controller with all sub-controllers."""
        self.router = APIRouter()

        self.info_controller = InfoController()
        self.proxy_controller = ProxyController()
        self.region_controller = RegionController()

        self._setup_aggregate_routes()

    def _setup_aggregate_routes(self):
        """Setup aggregate routes by including all controller routers."""
        self.router.include_router(self.info_controller.router)
        self.router.include_router(self.proxy_controller.router)
        self.router.include_router(self.region_controller.router)


__all__ = [
    # Base controller
    "BaseController",

    # Individual controllers
    "InfoController",
    "ProxyController",
    "RegionController",

    # Aggregate controller
    "PriceApiController"
]
