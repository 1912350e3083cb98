"""
Base service interface for business logic.
"""

import logging
from abc import ABC, abstractmethod

from ..exceptions import PriceApiError


class BaseService(ABC):
    """Abstract base service interface."""

    def __init__(self, repository=None):
        """Initialize service with repository dependency."""
        self.repository = repository
        self.logger = logging.getLogger(self.__class__.__module__)

    @abstractmethod
    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters."""
        pass

    def handle_exception(self, e: Exception, context: str = None) -> None:
        """Handle exceptions consistently across services."""
        if isinstance(e, PriceApiError):
            raise e
        error_message = f"{context}: {str(e)}" if context else str(e)
        self.logger.exception(error_message)
        raise PriceApiError(error_message) from e
