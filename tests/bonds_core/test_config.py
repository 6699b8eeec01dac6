import dataclasses
import logging

import pytest

from unittest.mock import patch

from bonds_core.common.errors import ConfigurationError
from bonds_core.config import Settings, configure_logging, load_settings


ENV_KEYS = (
    "BONDS_LOG_LEVEL",
    "BONDS_API_HOST",
    "BONDS_API_PORT",
    "BONDS_API_DEBUG",
    "BONDS_DEFAULT_RESERVE_DECIMALS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    assert load_settings(dotenv=False) == Settings()


def test_overrides(monkeypatch):
    monkeypatch.setenv("BONDS_LOG_LEVEL", "debug")
    monkeypatch.setenv("BONDS_API_HOST", "0.0.0.0")
    monkeypatch.setenv("BONDS_API_PORT", "8080")
    monkeypatch.setenv("BONDS_API_DEBUG", "true")
    monkeypatch.setenv("BONDS_DEFAULT_RESERVE_DECIMALS", "18")

    settings = load_settings(dotenv=False)
    assert settings == Settings(
        log_level="DEBUG",
        api_host="0.0.0.0",
        api_port=8080,
        api_debug=True,
        default_reserve_decimals=18,
    )


@pytest.mark.parametrize(
    "key, value",
    [
        ("BONDS_LOG_LEVEL", "chatty"),
        ("BONDS_API_HOST", ""),
        ("BONDS_API_PORT", "http"),
        ("BONDS_API_PORT", "0"),
        ("BONDS_API_PORT", "70000"),
        ("BONDS_API_DEBUG", "maybe"),
        ("BONDS_DEFAULT_RESERVE_DECIMALS", "-1"),
        ("BONDS_DEFAULT_RESERVE_DECIMALS", "19"),
    ]
)
def test_invalid_values(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigurationError):
        load_settings(dotenv=False)


def test_settings_are_frozen():
    settings = Settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.api_port = 1


def test_configure_logging():
    with patch("bonds_core.config.logging.basicConfig") as basic_config:
        configure_logging(Settings(log_level="WARNING"))
    assert basic_config.call_args.kwargs["level"] == logging.WARNING
