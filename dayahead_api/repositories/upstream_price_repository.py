"""
Repository for the upstream day-ahead price source.

This module talks to the public price API (energy-charts by default) and
returns its JSON body untouched. It is the only place in the service that
performs network I/O.

Transport trust:
    Verification follows ``UpstreamConfig``. When ``verify_tls`` is off and
    ``tls_override_until`` has not passed, the override applies:

    - with ``tls_pinned_fingerprint`` the connection only succeeds if the
      server certificate matches the SHA-256 fingerprint;
    - without a fingerprint, certificate validation is disabled.

    An expired override is ignored and the default trust store is used again.
"""

import logging
from datetime import date
from typing import Callable, Optional

import requests
from requests.adapters import HTTPAdapter

from .base_repository import BaseRepository
from ..config import app_config, UpstreamConfig
from ..exceptions import UpstreamFetchError


logger = logging.getLogger(__name__)


class FingerprintAdapter(HTTPAdapter):
    """Transport adapter accepting only a certificate with a known fingerprint."""

    def __init__(self, fingerprint: str, **kwargs):
        self.fingerprint = fingerprint.replace(":", "").lower()
        super().__init__(**kwargs)

    def init_poolmanager(self, *args, **kwargs):
        kwargs["assert_fingerprint"] = self.fingerprint
        return super().init_poolmanager(*args, **kwargs)


class UpstreamPriceRepository(BaseRepository):
    """Repository relaying price queries to the upstream API."""

    def __init__(self, config: UpstreamConfig = None, session: requests.Session = None,
                 today: Callable[[], date] = date.today):
        self.config = config or app_config.upstream
        self._today = today
        self.session = session or self._build_session()

    def _build_session(self) -> requests.Session:
        """Create the HTTP session with the configured transport trust."""
        session = requests.Session()
        session.headers.update({
            'Accept': 'application/json',
            'User-Agent': f'dayahead-api/{app_config.api.version}',
        })

        if self.config.verify_tls:
            return session

        if not self.config.trust_override_active(self._today()):
            logger.warning(
                "TLS trust override expired on %s, using default certificate verification",
                self.config.tls_override_until)
            return session

        session.verify = False
        if self.config.tls_pinned_fingerprint:
            session.mount("https://", FingerprintAdapter(self.config.tls_pinned_fingerprint))
            logger.warning(
                "TLS trust override active until %s: certificate pinned to fingerprint %s",
                self.config.tls_override_until, self.config.tls_pinned_fingerprint)
        else:
            logger.warning(
                "TLS trust override active until %s: certificate validation DISABLED for %s",
                self.config.tls_override_until, self.config.base_url)
        return session

    def find_prices(self, region_code: str, start_date: Optional[str] = None,
                    end_date: Optional[str] = None) -> dict:
        """
        Fetch the raw price payload for a bidding zone.

        Parameters are forwarded verbatim; absent ones are left out of the
        query string so the upstream applies its own defaults.

        Args:
            region_code: Bidding zone code, passed as ``bzn``
            start_date: Range start (YYYY-MM-DD), optional
            end_date: Range end (YYYY-MM-DD), optional

        Returns:
            dict: Upstream JSON body

        Raises:
            UpstreamFetchError: On network errors, non-2xx answers or a body
                that is not JSON
        """
        params = {"bzn": region_code, "start": start_date, "end": end_date}
        params = {key: value for key, value in params.items() if value is not None}

        try:
            logger.debug("Fetching %s with %s", self.config.price_url, params)
            response = self.session.get(
                self.config.price_url,
                params=params,
                timeout=self.config.timeout_seconds
            )
            response.raise_for_status()
            return response.json()

        except requests.RequestException as e:
            logger.error("Error fetching data from upstream price API for %s: %s", region_code, e)
            raise UpstreamFetchError() from e
        except ValueError as e:
            logger.error("Upstream price API returned invalid JSON for %s: %s", region_code, e)
            raise UpstreamFetchError() from e

    def close(self):
        self.session.close()
