"""WooCommerce site and credential configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, require_env_vars, require_int_env_var
from .errors import MissingConfigurationError
from .http import RateLimit, TransportConfig

WPCOM_API_BASE_URL = "https://public-api.wordpress.com/"
WOOCOMMERCE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class SiteCredentials:
    """REST API keys for talking to a site's ``wp-json`` endpoint directly."""

    site_url: str
    consumer_key: str
    consumer_secret: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class DotcomCredentials:
    """WordPress.com bearer token for requests tunnelled through Jetpack."""

    auth_token: str = field(repr=False)
    base_url: str = WPCOM_API_BASE_URL


type Credentials = SiteCredentials | DotcomCredentials


@dataclass(frozen=True, slots=True)
class WooCommerceConfig:
    site_id: int
    credentials: Credentials
    transport: TransportConfig


def _default_transport_config() -> TransportConfig:
    return TransportConfig(
        name="woocommerce",
        timeout_seconds=WOOCOMMERCE_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=8, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


def get_woocommerce_config(*, transport: TransportConfig | None = None) -> WooCommerceConfig:
    site_id = require_int_env_var("WOOSYNC_SITE_ID")
    credentials: Credentials
    token = optional_env_var("WOOSYNC_WPCOM_TOKEN")
    if token is not None:
        credentials = DotcomCredentials(auth_token=token)
    elif optional_env_var("WOOSYNC_SITE_URL") is not None:
        values = require_env_vars(
            ("WOOSYNC_SITE_URL", "WOOSYNC_CONSUMER_KEY", "WOOSYNC_CONSUMER_SECRET")
        )
        credentials = SiteCredentials(
            site_url=values["WOOSYNC_SITE_URL"].rstrip("/"),
            consumer_key=values["WOOSYNC_CONSUMER_KEY"],
            consumer_secret=values["WOOSYNC_CONSUMER_SECRET"],
        )
    else:
        raise MissingConfigurationError(
            "Missing configuration for: WOOSYNC_WPCOM_TOKEN or WOOSYNC_SITE_URL"
        )
    return WooCommerceConfig(
        site_id=site_id,
        credentials=credentials,
        transport=transport or _default_transport_config(),
    )
