"""
Environment configuration and API base URL resolution
"""

import pytest

from chainforge.config import DEFAULT_LOCAL_API_URL, ConsoleConfig, resolve_api_base_url
from chainforge.errors import ConfigurationError


def test_override_wins():
    assert resolve_api_base_url("https://api.example.com/", "localhost") == "https://api.example.com"


def test_local_host_uses_local_backend():
    assert resolve_api_base_url(None, "localhost") == DEFAULT_LOCAL_API_URL
    assert resolve_api_base_url("  ", "127.0.0.1") == DEFAULT_LOCAL_API_URL


def test_public_host_without_override_is_unset():
    assert resolve_api_base_url(None, "console.example.com") == ""


def test_defaults_from_empty_environment():
    config = ConsoleConfig.from_env({})
    assert config.api_base_url == DEFAULT_LOCAL_API_URL
    assert config.has_backend
    assert config.ledger_limit == 50
    assert config.erc1155_symbol == "optional"
    assert config.module_scope == "standard"
    assert config.privacy_mode is True
    assert config.telegram_token is None


def test_environment_values():
    config = ConsoleConfig.from_env({
        "CHAINFORGE_PUBLIC_HOST": "console.example.com",
        "CHAINFORGE_TIMEOUT": "30",
        "CHAINFORGE_ERC1155_SYMBOL": "Required",
        "CHAINFORGE_PRIVACY_MODE": "off",
        "LOG_LEVEL": "debug",
    })
    assert config.api_base_url == ""
    assert not config.has_backend
    assert config.request_timeout == 30
    assert config.erc1155_symbol == "required"
    assert config.privacy_mode is False
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("key,value", [
    ("CHAINFORGE_MODULE_SCOPE", "everything"),
    ("CHAINFORGE_LEDGER_LIMIT", "0"),
    ("CHAINFORGE_TIMEOUT", "soon"),
    ("CHAINFORGE_PRIVACY_MODE", "maybe"),
])
def test_invalid_values_are_rejected(key, value):
    with pytest.raises(ConfigurationError):
        ConsoleConfig.from_env({key: value})
