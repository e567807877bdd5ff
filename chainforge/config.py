"""
Console configuration
Built once at startup from the environment (.env supported) and passed around
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

LOCAL_HOSTNAMES = ("localhost", "127.0.0.1")
DEFAULT_LOCAL_API_URL = "http://localhost:4000"

SYMBOL_POLICIES = ("optional", "required")
MODULE_SCOPES = ("standard", "uniform")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def resolve_api_base_url(override: Optional[str], hostname: str,
                         local_default: str = DEFAULT_LOCAL_API_URL) -> str:
    """Explicit override, else the local backend when running locally, else unset"""
    if override and override.strip():
        return override.strip().rstrip("/")
    if (hostname or "").strip().lower() in LOCAL_HOSTNAMES:
        return local_default.rstrip("/")
    return ""


def _env_bool(value: Optional[str], default: bool, name: str) -> bool:
    if value is None or not value.strip():
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _env_int(value: Optional[str], default: int, name: str, minimum: int = 1) -> int:
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if parsed < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {parsed}")
    return parsed


def _env_choice(value: Optional[str], default: str, name: str, choices) -> str:
    if value is None or not value.strip():
        return default
    lowered = value.strip().lower()
    if lowered not in choices:
        raise ConfigurationError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return lowered


@dataclass(frozen=True)
class ConsoleConfig:
    """Runtime configuration for the operator console"""
    api_base_url: str = ""
    request_timeout: int = 120
    ledger_limit: int = 50
    erc1155_symbol: str = "optional"
    module_scope: str = "standard"
    privacy_mode: bool = True
    telegram_token: Optional[str] = None
    log_level: str = "INFO"

    @property
    def has_backend(self) -> bool:
        return bool(self.api_base_url)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConsoleConfig":
        """Load configuration from environment variables"""
        if environ is None:
            load_dotenv()
            environ = os.environ

        api_base_url = resolve_api_base_url(
            environ.get("CHAINFORGE_API_URL"),
            environ.get("CHAINFORGE_PUBLIC_HOST", "localhost"),
            environ.get("CHAINFORGE_LOCAL_API_URL", DEFAULT_LOCAL_API_URL),
        )

        return cls(
            api_base_url=api_base_url,
            request_timeout=_env_int(environ.get("CHAINFORGE_TIMEOUT"), 120, "CHAINFORGE_TIMEOUT"),
            ledger_limit=_env_int(environ.get("CHAINFORGE_LEDGER_LIMIT"), 50, "CHAINFORGE_LEDGER_LIMIT"),
            erc1155_symbol=_env_choice(environ.get("CHAINFORGE_ERC1155_SYMBOL"), "optional",
                                       "CHAINFORGE_ERC1155_SYMBOL", SYMBOL_POLICIES),
            module_scope=_env_choice(environ.get("CHAINFORGE_MODULE_SCOPE"), "standard",
                                     "CHAINFORGE_MODULE_SCOPE", MODULE_SCOPES),
            privacy_mode=_env_bool(environ.get("CHAINFORGE_PRIVACY_MODE"), True, "CHAINFORGE_PRIVACY_MODE"),
            telegram_token=environ.get("TELEGRAM_OPERATOR_BOT") or None,
            log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        )


def setup_logging(level: str = "INFO"):
    """Configure root logging for console entry points"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, level.upper(), logging.INFO)
    )
    # Reduce noise from httpx (Telegram API requests)
    logging.getLogger("httpx").setLevel(logging.WARNING)
