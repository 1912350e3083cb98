"""
Controller for the same-origin price proxy.

Endpoints:
    - GET /proxy-price: Relay a query to the upstream price API
"""

import asyncio
from fastapi import Query, Depends
from fastapi.responses import JSONResponse
from typing import Optional

from .base_controller import BaseController
from ..dependencies import get_upstream_repository
from ..exceptions import UpstreamFetchError
from ..models import ErrorResponse
from ..repositories import UpstreamPriceRepository


class ProxyController(BaseController):
    """Controller relaying price queries to the upstream API."""

    def _setup_routes(self):
        """Setup routes for the proxy."""

        @self.router.get(
            "/proxy-price",
            tags=["Proxy"],
            summary="Relay a day-ahead price query to the upstream API",
            description="""
            Forward `bzn`, `start` and `end` verbatim to the upstream price API and
            return its JSON body unmodified.

            **Response body (upstream):**
            - `unix_seconds`: hourly timestamps
            - `price`: one price per hour
            - `unit`, `license_info`, `deprecated`

            No date validation, caching or retry happens here. On any upstream
            failure the endpoint answers `500 {"message": "Failed to fetch region data"}`.
            """,
            responses={500: {"model": ErrorResponse}},
        )
        async def proxy_price(
            bzn: str = Query(..., description="Bidding zone code, e.g. DE-LU"),
            start: Optional[str] = Query(None, description="Start date in YYYY-MM-DD format"),
            end: Optional[str] = Query(None, description="End date in YYYY-MM-DD format"),
            repository: UpstreamPriceRepository = Depends(get_upstream_repository)
        ):
            """Relay the query and return the upstream body as-is."""
            try:
                loop = asyncio.get_running_loop()
                payload = await loop.run_in_executor(
                    None, repository.find_prices, bzn, start, end)
                return JSONResponse(content=payload, status_code=200)
            except UpstreamFetchError:
                raise
            except Exception as e:
                # the relay only ever answers with the fixed upstream error envelope
                self.logger.exception("Error relaying price query for %s", bzn)
                raise UpstreamFetchError() from e
