"""Tests for RBACConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from contextrbac import RBAC, LogLevel, RBACConfig, load_config_from_env


class TestRBACConfig:
    """Tests for RBACConfig model."""

    def test_create_default_config(self) -> None:
        """Test creating an RBACConfig with defaults."""
        config = RBACConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.log_decisions is False
        assert config.service_name is None

    def test_create_custom_config(self) -> None:
        """Test creating an RBACConfig with custom values."""
        config = RBACConfig(
            log_level=LogLevel.DEBUG,
            log_json=True,
            log_decisions=True,
            service_name="blog-api",
        )
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True
        assert config.log_decisions is True
        assert config.service_name == "blog-api"

    def test_log_level_from_string(self) -> None:
        """Test creating config with log level as string."""
        config = RBACConfig(log_level="debug")
        assert config.log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        """Test creating config with invalid log level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            RBACConfig(log_level="LOUD")

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(ValidationError):
            RBACConfig(roles={})  # type: ignore[call-arg]

    def test_rbac_uses_default_config(self) -> None:
        """RBAC without a config gets the defaults."""
        rbac = RBAC({})
        assert rbac.config.log_decisions is False


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_load_defaults(self) -> None:
        """Test loading config with no environment variables."""
        config = load_config_from_env()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.log_decisions is False
        assert config.service_name is None

    @patch.dict(
        os.environ,
        {
            "RBAC_LOG_LEVEL": "WARNING",
            "RBAC_LOG_JSON": "true",
            "RBAC_LOG_DECISIONS": "1",
            "RBAC_SERVICE_NAME": "blog-api",
        },
        clear=True,
    )
    def test_load_from_env(self) -> None:
        """Test loading config from environment variables."""
        config = load_config_from_env()
        assert config.log_level == LogLevel.WARNING
        assert config.log_json is True
        assert config.log_decisions is True
        assert config.service_name == "blog-api"

    def test_log_decisions_variants(self) -> None:
        """Test RBAC_LOG_DECISIONS accepts various true values."""
        for value in ("true", "1", "yes", "on", "TRUE"):
            with patch.dict(os.environ, {"RBAC_LOG_DECISIONS": value}, clear=True):
                config = load_config_from_env()
                assert config.log_decisions is True

    @patch.dict(os.environ, {"RBAC_LOG_DECISIONS": "false"}, clear=True)
    def test_log_decisions_false(self) -> None:
        """Test RBAC_LOG_DECISIONS false values."""
        config = load_config_from_env()
        assert config.log_decisions is False

    @patch.dict(os.environ, {"RBAC_LOG_LEVEL": "nonsense"}, clear=True)
    def test_invalid_level_from_env(self) -> None:
        """Invalid level in the environment is rejected."""
        with pytest.raises(ValueError):
            load_config_from_env()
