"""
This module creates and configures the main FastAPI application for the
Day-Ahead Electricity Price API. It is the same-origin backend of the price
dashboard: a relay to the upstream price API plus chart-ready views derived
from the hourly price series.

Features:
    - Same-origin proxy to the upstream price source
    - Latest price per bidding zone for the region list
    - Hourly averages and daily min/max/average for a date range
    - In-memory query cache with TTL and manual eviction
    - Uniform {"message": ...} error envelope
    - Swagger documentation at /docs

API Categories:
    - System Information: health, API metadata, cache management
    - Proxy: raw relay of upstream price queries
    - Regions: region registry, list view and detail views
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .controllers import PriceApiController
from .config import app_config
from .exceptions import PriceApiError


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from the application settings."""
    logging.basicConfig(
        level=app_config.log_level,
        format=app_config.logging.format
    )


async def price_api_error_handler(request: Request, exc: PriceApiError) -> JSONResponse:
    """Render API errors with the shared {"message": ...} envelope."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance ready for deployment.

    Routes:
        - /docs: Interactive Swagger UI documentation
        - /redoc: Alternative ReDoc documentation
        - /api/*: Proxy and region price endpoints
    """
    configure_logging()

    app = FastAPI(
        title=app_config.api.title,
        description=app_config.api.description,
        version=app_config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "System Information",
                "description": "API health, version info and cache management"
            },
            {
                "name": "Proxy",
                "description": "Unmodified relay of upstream price queries"
            },
            {
                "name": "Regions",
                "description": "Region registry, latest prices and chart-ready price views"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.api.allow_origins,
        allow_credentials=app_config.api.allow_credentials,
        allow_methods=app_config.api.allow_methods,
        allow_headers=app_config.api.allow_headers,
    )

    app.add_exception_handler(PriceApiError, price_api_error_handler)

    app.include_router(
        PriceApiController().router,
        prefix="/api",
    )

    logger.info("Upstream price source: %s", app_config.upstream.price_url)
    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=app_config.api.host,
        port=app_config.api.port,
        reload=app_config.api.reload
    )
