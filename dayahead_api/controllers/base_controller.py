"""
Base controller interface for API endpoints.

This module provides the abstract base class for all API controllers of the
day-ahead price API. It enforces consistent patterns and provides common
functionality across all endpoint handlers.

Architecture:
    All controllers inherit from BaseController and must implement
    _setup_routes() to register their endpoints on self.router.

Usage:
    ```python
    class MyController(BaseController):
        def _setup_routes(self):
            @self.router.get("/my-endpoint")
            async def my_endpoint():
                return {"message": "Hello World"}
    ```
"""

import logging
from abc import ABC, abstractmethod
from fastapi import APIRouter
from typing import Optional

from ..exceptions import PriceApiError


class BaseController(ABC):
    """
    Abstract base controller for consistent API endpoint patterns.

    Attributes:
        router (APIRouter): FastAPI router instance for endpoint registration

    Methods:
        _setup_routes(): Abstract method for route definition (must implement)
        handle_exception(): Standardized exception handling with context
    """

    def __init__(self):
        """
        Initialize controller with FastAPI router.

        Creates a new APIRouter instance and calls _setup_routes() to register
        all endpoint handlers defined by the concrete controller implementation.
        """
        self.router = APIRouter()
        self.logger = logging.getLogger(self.__class__.__module__)
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self):
        """Setup routes for this controller."""
        pass

    def handle_exception(self, e: Exception, context: Optional[str] = None) -> None:
        """
        Handle exceptions consistently across all controllers.

        API errors pass through unchanged; anything else becomes a 500
        PriceApiError carrying the context.

        Raises:
            PriceApiError: Always
        """
        if isinstance(e, PriceApiError):
            raise e
        error_message = f"{context}: {str(e)}" if context else str(e)
        self.logger.exception(error_message)
        raise PriceApiError(error_message) from e
