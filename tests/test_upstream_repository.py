"""
Tests for the upstream price repository and its transport trust settings.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from dayahead_api.config import UpstreamConfig
from dayahead_api.exceptions import UpstreamFetchError
from dayahead_api.repositories import UpstreamPriceRepository, FingerprintAdapter

from .conftest import make_payload

TODAY = date(2024, 3, 10)
FINGERPRINT = "AB:CD:" + "00:" * 29 + "EF"


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.get.return_value.json.return_value = make_payload([50.0] * 24)
    return session


@pytest.fixture
def repository(session):
    return UpstreamPriceRepository(config=UpstreamConfig(), session=session)


class TestFindPrices:

    def test_forwards_parameters_verbatim(self, repository, session):
        repository.find_prices("DE-LU", "2024-03-01", "2024-03-02")

        session.get.assert_called_once_with(
            "https://api.energy-charts.info/price",
            params={"bzn": "DE-LU", "start": "2024-03-01", "end": "2024-03-02"},
            timeout=30.0
        )

    def test_omits_absent_dates(self, repository, session):
        repository.find_prices("IT-North")
        assert session.get.call_args.kwargs["params"] == {"bzn": "IT-North"}

    def test_returns_body_unmodified(self, repository, session):
        body = {"price": [1, None], "unit": "EUR / MWh", "extra": {"kept": True}}
        session.get.return_value.json.return_value = body
        assert repository.find_prices("FR") is body

    def test_http_error_becomes_upstream_error(self, repository, session):
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("502 Bad Gateway")
        with pytest.raises(UpstreamFetchError) as exc_info:
            repository.find_prices("FR")
        assert exc_info.value.message == "Failed to fetch region data"
        assert exc_info.value.status_code == 500

    def test_network_error_becomes_upstream_error(self, repository, session):
        session.get.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(UpstreamFetchError):
            repository.find_prices("FR")

    def test_invalid_json_becomes_upstream_error(self, repository, session):
        session.get.return_value.json.side_effect = ValueError("No JSON object could be decoded")
        with pytest.raises(UpstreamFetchError):
            repository.find_prices("FR")

    def test_uses_configured_endpoint(self, session):
        config = UpstreamConfig(base_url="http://localhost:9000/", price_path="/v2/price", timeout_seconds=5)
        UpstreamPriceRepository(config=config, session=session).find_prices("NL")
        assert session.get.call_args.args[0] == "http://localhost:9000/v2/price"
        assert session.get.call_args.kwargs["timeout"] == 5


class TestTransportTrust:

    def build(self, **config):
        return UpstreamPriceRepository(config=UpstreamConfig(**config), today=lambda: TODAY)

    def test_verifies_by_default(self):
        repository = self.build()
        assert repository.session.verify is True
        assert not isinstance(repository.session.get_adapter("https://api.energy-charts.info"), FingerprintAdapter)

    def test_override_disables_verification_until_expiry(self):
        repository = self.build(verify_tls=False, tls_override_until=date(2024, 6, 30))
        assert repository.session.verify is False

    def test_override_pins_fingerprint(self):
        repository = self.build(
            verify_tls=False,
            tls_override_until=date(2024, 6, 30),
            tls_pinned_fingerprint=FINGERPRINT
        )
        adapter = repository.session.get_adapter("https://api.energy-charts.info")
        assert isinstance(adapter, FingerprintAdapter)
        assert adapter.poolmanager.connection_pool_kw["assert_fingerprint"] == FINGERPRINT.replace(":", "").lower()

    def test_expired_override_restores_verification(self):
        repository = self.build(verify_tls=False, tls_override_until=date(2024, 3, 9))
        assert repository.session.verify is True

    def test_override_without_expiry_is_ignored(self):
        repository = self.build(verify_tls=False)
        assert repository.session.verify is True

    def test_trust_override_active(self):
        config = UpstreamConfig(verify_tls=False, tls_override_until=date(2024, 3, 10))
        assert config.trust_override_active(date(2024, 3, 10))
        assert not config.trust_override_active(date(2024, 3, 11))
        assert not UpstreamConfig(tls_override_until=date(2030, 1, 1)).trust_override_active(TODAY)
