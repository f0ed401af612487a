"""
Tests for configuration module.
"""
import os
import pytest
from dataclasses import FrozenInstanceError
from unittest.mock import patch

from bitstamp_client.config import (
    AppConfig,
    BitstampConfig,
    Credentials,
    get_config,
)


class TestCredentials:
    """Tests for Credentials."""

    def test_complete(self):
        """Test that all three parts make complete credentials."""
        creds = Credentials(api_key="k", api_secret="s", client_id="c")

        assert creds.is_complete
        assert creds.missing == []

    def test_missing_parts(self):
        """Test reporting of missing parts."""
        creds = Credentials(api_key="k")

        assert not creds.is_complete
        assert creds.missing == ["api_secret", "client_id"]

    def test_secret_not_in_repr(self):
        """Test secret is hidden from repr."""
        creds = Credentials(api_key="k", api_secret="top-secret", client_id="c")

        assert "top-secret" not in repr(creds)


class TestBitstampConfig:
    """Tests for BitstampConfig."""

    @patch.dict(os.environ, {}, clear=True)
    def test_default_values(self):
        """Test default configuration values."""
        config = BitstampConfig()

        assert config.host == "https://www.bitstamp.net"
        assert config.request_timeout == 5.0
        assert config.api_key == ""
        assert not config.credentials.is_complete
        assert config.user_agent.startswith("Bitstamp Python API Client")

    @patch.dict(os.environ, {
        "BITSTAMP_HOST": "https://sandbox.example.com",
        "BITSTAMP_REQUEST_TIMEOUT": "2.5",
        "BITSTAMP_API_KEY": "env-key",
        "BITSTAMP_API_SECRET": "env-secret",
        "BITSTAMP_CLIENT_ID": "42",
    })
    def test_env_override(self):
        """Test environment variable override."""
        config = BitstampConfig()

        assert config.host == "https://sandbox.example.com"
        assert config.request_timeout == 2.5
        assert config.credentials == Credentials("env-key", "env-secret", "42")

    def test_api_url(self):
        """Test endpoint URL building."""
        config = BitstampConfig(host="https://www.bitstamp.net/")

        assert config.api_url("ticker") == "https://www.bitstamp.net/api/ticker/"
        assert config.api_url("order_status") == "https://www.bitstamp.net/api/order_status/"

    def test_immutable(self, test_bitstamp_config):
        """Test configuration cannot be modified."""
        with pytest.raises(FrozenInstanceError):
            test_bitstamp_config.api_key = "other"

    def test_secret_not_in_repr(self, test_bitstamp_config):
        """Test secret is hidden from repr."""
        assert "test-secret" not in repr(test_bitstamp_config)


class TestAppConfig:
    """Tests for AppConfig."""

    def test_nested_configs(self):
        """Test nested configuration objects."""
        config = AppConfig()

        assert isinstance(config.bitstamp, BitstampConfig)

    @patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"})
    def test_log_level_from_env(self):
        """Test log level is read from environment."""
        assert AppConfig().log_level == "DEBUG"

    def test_get_config_singleton(self):
        """Test singleton pattern."""
        config1 = get_config()
        config2 = get_config()

        assert config1 is config2
