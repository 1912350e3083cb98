"""
Application configuration settings.
Spring Boot-like configuration management.

Defaults live on the pydantic models below. Any field can be overridden from
the environment (or a ``.env`` file next to the package) using the
``DAYAHEAD_<SECTION>_<FIELD>`` naming, e.g. ``DAYAHEAD_UPSTREAM_TIMEOUT_SECONDS``.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional, get_args

import pytz
from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

ENV_PREFIX = "DAYAHEAD"


class APIConfig(BaseModel):
    """API configuration settings."""

    title: str = "Day-Ahead Electricity Price API"
    description: str = "Same-origin proxy and chart-ready views for day-ahead electricity prices per bidding zone"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    allow_origins: list = ["*"]
    allow_credentials: bool = True
    allow_methods: list = ["*"]
    allow_headers: list = ["*"]


class UpstreamConfig(BaseModel):
    """Upstream price source settings."""

    base_url: str = "https://api.energy-charts.info"
    price_path: str = "/price"
    timeout_seconds: float = 30.0

    # Transport trust. A trust override is only honoured until
    # tls_override_until; with a fingerprint it pins the certificate,
    # without one it disables verification entirely.
    verify_tls: bool = True
    tls_override_until: Optional[date] = None
    tls_pinned_fingerprint: Optional[str] = None

    @property
    def price_url(self) -> str:
        return self.base_url.rstrip("/") + self.price_path

    def trust_override_active(self, today: date) -> bool:
        """Whether the certificate trust override applies on ``today``."""
        if self.verify_tls:
            return False
        return self.tls_override_until is not None and today <= self.tls_override_until


class CacheConfig(BaseModel):
    """Query cache settings."""

    enabled: bool = True
    ttl_seconds: int = 300


class DashboardConfig(BaseModel):
    """Settings for the region list and detail views."""

    list_retries: int = 2
    # exponential backoff before each list retry: delay * 2 ** (retry - 1), capped
    retry_delay_seconds: float = 1.0
    retry_max_delay_seconds: float = 30.0
    fallback_hour: int = 12
    default_range_days: int = 10
    hours_per_day: int = 24
    timezone: str = "Europe/Berlin"


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _env_overrides(section: str, model: type) -> dict:
    """Collect DAYAHEAD_<SECTION>_<FIELD> values present in the environment."""
    overrides = {}
    for field_name, field_info in model.model_fields.items():
        key = f"{ENV_PREFIX}_{section}_{field_name}".upper()
        value = os.getenv(key)
        if value is None:
            continue
        if value.strip().lower() in ("", "none", "null"):
            # an empty value only clears optional fields, others keep their default
            if type(None) in get_args(field_info.annotation):
                overrides[field_name] = None
        elif value.strip().startswith("["):
            overrides[field_name] = [v.strip() for v in value.strip("[] ").split(",") if v.strip()]
        else:
            overrides[field_name] = value
    return overrides


class ApplicationConfig:
    """Main application configuration."""

    def __init__(self):
        self.api = APIConfig(**_env_overrides("api", APIConfig))
        self.upstream = UpstreamConfig(**_env_overrides("upstream", UpstreamConfig))
        self.cache = CacheConfig(**_env_overrides("cache", CacheConfig))
        self.dashboard = DashboardConfig(**_env_overrides("dashboard", DashboardConfig))
        self.logging = LoggingConfig(**_env_overrides("logging", LoggingConfig))

    @property
    def market_timezone(self):
        """Timezone used for "today" and the current hour of day."""
        return pytz.timezone(self.dashboard.timezone)

    @property
    def log_level(self) -> int:
        return getattr(logging, self.logging.level.upper(), logging.INFO)


# Global configuration instance
app_config = ApplicationConfig()
