"""
Settings for the bonds pricing engine and its HTTP surface.

Values come from environment variables, optionally loaded from a .env file, with defaults
defined here:

    BONDS_LOG_LEVEL                 root log level (DEBUG, INFO, WARNING, ERROR)
    BONDS_API_HOST                  host the HTTP API binds to
    BONDS_API_PORT                  port the HTTP API binds to
    BONDS_API_DEBUG                 "true" to run flask in debug mode
    BONDS_DEFAULT_RESERVE_DECIMALS  decimal places assumed for reserve tokens when a request omits them

Arithmetic precision and rounding are fixed and not configurable.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from bonds_core.common.errors import ConfigurationError


logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_env_str(key: str, default: str, required: bool = False) -> str:
    """Get environment variable as string with validation."""
    value = os.getenv(key, default)
    if required and not value:
        raise ConfigurationError(f"Required environment variable {key} is not set")
    return value


def _get_env_int(key: str, default: int, min_val: Optional[int] = None, max_val: Optional[int] = None) -> int:
    """Get environment variable as integer with validation."""
    try:
        value = int(os.getenv(key, str(default)))
    except ValueError:
        raise ConfigurationError(f"Environment variable {key} must be a valid integer") from None
    if min_val is not None and value < min_val:
        raise ConfigurationError(f"Environment variable {key} must be >= {min_val}")
    if max_val is not None and value > max_val:
        raise ConfigurationError(f"Environment variable {key} must be <= {max_val}")
    return value


def _get_env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    if value.strip().lower() in ("1", "true", "yes"):
        return True
    if value.strip().lower() in ("0", "false", "no"):
        return False
    raise ConfigurationError(f"Environment variable {key} must be a boolean")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 5000
    api_debug: bool = False
    default_reserve_decimals: int = 6


def load_settings(dotenv: bool = True) -> Settings:
    """Reads Settings from the environment, loading .env first unless 'dotenv' is False."""
    if dotenv:
        load_dotenv()

    log_level = _get_env_str("BONDS_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"BONDS_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

    return Settings(
        log_level=log_level,
        api_host=_get_env_str("BONDS_API_HOST", "127.0.0.1", required=True),
        api_port=_get_env_int("BONDS_API_PORT", 5000, min_val=1, max_val=65535),
        api_debug=_get_env_bool("BONDS_API_DEBUG", False),
        default_reserve_decimals=_get_env_int("BONDS_DEFAULT_RESERVE_DECIMALS", 6, min_val=0, max_val=18),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", settings.log_level)
