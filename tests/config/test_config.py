from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from woosync.config import (
    ConfigurationError,
    DotcomCredentials,
    MissingConfigurationError,
    SiteCredentials,
    configure_logging,
    get_database_config,
    get_storage_config,
    get_woocommerce_config,
    require_env_var,
    require_env_vars,
)

WOO_VARS = (
    "WOOSYNC_SITE_ID",
    "WOOSYNC_WPCOM_TOKEN",
    "WOOSYNC_SITE_URL",
    "WOOSYNC_CONSUMER_KEY",
    "WOOSYNC_CONSUMER_SECRET",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (*WOO_VARS, "WOOSYNC_DATA_DIR", "DATABASE_URI"):
        monkeypatch.delenv(name, raising=False)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_woocommerce_config_prefers_wpcom_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WOOSYNC_SITE_ID", "1234")
    monkeypatch.setenv("WOOSYNC_WPCOM_TOKEN", "secret-token")
    monkeypatch.setenv("WOOSYNC_SITE_URL", "https://shop.example.com")

    config = get_woocommerce_config()

    assert config.site_id == 1234
    assert isinstance(config.credentials, DotcomCredentials)
    assert config.credentials.auth_token == "secret-token"
    assert config.transport.ratelimit is not None


def test_woocommerce_config_with_site_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WOOSYNC_SITE_ID", "7")
    monkeypatch.setenv("WOOSYNC_SITE_URL", "https://shop.example.com/")
    monkeypatch.setenv("WOOSYNC_CONSUMER_KEY", "ck_123")
    monkeypatch.setenv("WOOSYNC_CONSUMER_SECRET", "cs_456")

    config = get_woocommerce_config()

    assert config.credentials == SiteCredentials(
        site_url="https://shop.example.com", consumer_key="ck_123", consumer_secret="cs_456"
    )
    assert "cs_456" not in repr(config.credentials)


def test_woocommerce_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WOOSYNC_SITE_ID", "7")

    with pytest.raises(MissingConfigurationError):
        get_woocommerce_config()


def test_woocommerce_config_requires_consumer_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WOOSYNC_SITE_ID", "7")
    monkeypatch.setenv("WOOSYNC_SITE_URL", "https://shop.example.com")
    monkeypatch.setenv("WOOSYNC_CONSUMER_KEY", "ck_123")

    with pytest.raises(MissingConfigurationError) as exc:
        get_woocommerce_config()

    assert "WOOSYNC_CONSUMER_SECRET" in str(exc.value)


def test_woocommerce_config_rejects_non_numeric_site(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WOOSYNC_SITE_ID", "shop")
    monkeypatch.setenv("WOOSYNC_WPCOM_TOKEN", "token")

    with pytest.raises(ConfigurationError):
        get_woocommerce_config()


def test_storage_config_uses_env_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WOOSYNC_DATA_DIR", str(tmp_path / "data"))

    config = get_storage_config()

    assert config.settings_dir() == (tmp_path / "data" / "settings").resolve()
    assert config.settings_dir().is_dir()
    assert config.database_uri().endswith("woosync.db")


def test_database_config_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"


def test_database_config_defaults_to_storage_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("WOOSYNC_DATA_DIR", str(tmp_path))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'woosync.db'}"
    assert os.path.isdir(tmp_path)


@pytest.mark.parametrize(
    ("level", "expected"), [(logging.INFO, logging.WARNING), (logging.DEBUG, logging.NOTSET)]
)
def test_configure_logging_quiets_http_loggers_unless_debugging(level: int, expected: int) -> None:
    try:
        configure_logging(level=level)

        assert logging.getLogger("httpx").level == expected
        assert logging.getLogger("httpcore").level == expected
    finally:
        for name in ("httpx", "httpcore"):
            logging.getLogger(name).setLevel(logging.NOTSET)
