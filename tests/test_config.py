"""Tests for garden.config: AppConfig and environment profiles."""

import dataclasses

import pytest

from garden.config import (
    PROFILES,
    AppConfig,
    detect_environment,
    get_profile,
    is_static_deployment,
)
from garden.errors import ConfigurationError


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 9090
        assert config.debug is False
        assert config.cors_allow_origins == ("*",)
        assert config.log_level == "info"

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 1  # type: ignore[misc]

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_invalid_port(self, port: int) -> None:
        with pytest.raises(ConfigurationError):
            AppConfig(port=port)


class TestEnvironments:
    @pytest.mark.parametrize(
        ("hostname", "expected"),
        [
            ("localhost", "development"),
            ("127.0.0.1", "development"),
            ("garden.netlify.app", "netlify"),
            ("app.netlify.com", "netlify"),
            ("blog.example.com", "production"),
            ("", "production"),
        ],
    )
    def test_detect_environment(self, hostname: str, expected: str) -> None:
        assert detect_environment(hostname) == expected

    def test_profiles(self) -> None:
        assert get_profile("localhost").api_base_url == "http://127.0.0.1:9090/api"
        assert get_profile("localhost").debug is True
        assert get_profile("x.netlify.app").demo_mode is True
        assert PROFILES["production"].app_name == "Digital Garden Blog"

    @pytest.mark.parametrize(
        ("hostname", "expected"),
        [
            ("localhost", False),
            ("localhost:8080", False),
            ("127.0.0.1", False),
            ("", False),
            ("garden.netlify.app", True),
            ("blog.example.com", True),
        ],
    )
    def test_is_static_deployment(self, hostname: str, expected: bool) -> None:
        assert is_static_deployment(hostname) is expected
