"""Tests for waypoint.config — ResolverConfig frozen dataclass."""

import pytest

from waypoint.config import ResolverConfig
from waypoint.errors import ConfigurationError


class TestResolverConfig:
    def test_defaults(self) -> None:
        cfg = ResolverConfig()

        assert cfg.first_id == 1
        assert cfg.listener_errors == "log"

    def test_override(self) -> None:
        cfg = ResolverConfig(first_id=100, listener_errors="raise")

        assert cfg.first_id == 100
        assert cfg.listener_errors == "raise"

    def test_frozen(self) -> None:
        cfg = ResolverConfig()

        with pytest.raises(AttributeError):
            cfg.first_id = 5  # type: ignore[misc]

    def test_rejects_negative_first_id(self) -> None:
        with pytest.raises(ConfigurationError, match="first_id"):
            ResolverConfig(first_id=-1)

    def test_rejects_unknown_listener_errors(self) -> None:
        with pytest.raises(ConfigurationError, match="listener_errors"):
            ResolverConfig(listener_errors="ignore")  # type: ignore[arg-type]

    def test_rejects_bool_first_id(self) -> None:
        with pytest.raises(ConfigurationError, match="first_id"):
            ResolverConfig(first_id=True)
