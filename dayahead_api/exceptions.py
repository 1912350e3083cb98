"""
Exceptions raised by the price API.

Every error carries the HTTP status it maps to; ``main.create_app`` renders
them as ``{"message": ...}``.
"""


class PriceApiError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UpstreamFetchError(PriceApiError):
    """The upstream price source failed or answered with a non-2xx status."""

    status_code = 500
    default_message = "Failed to fetch region data"


class InvalidParameterError(PriceApiError):
    """A query parameter has an unsupported value."""

    status_code = 400
    default_message = "Invalid parameter"


class InvalidDateRangeError(InvalidParameterError):
    """A requested date or date range was rejected by the validator."""

    status_code = 400
    default_message = "Invalid date range"


class RegionNotFoundError(PriceApiError):
    """The region code is not in the registry."""

    status_code = 404
    default_message = "Region not found"
