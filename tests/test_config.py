"""Tests for LensConfig."""

from __future__ import annotations

import pytest

from htmlens.config import DEFAULT_TIMEOUT, ENV_TIMEOUT, ENV_USER_AGENT, LensConfig


class TestLensConfig:
    def test_defaults(self):
        config = LensConfig()
        assert config.timeout == DEFAULT_TIMEOUT
        assert "htmlens/" in config.user_agent
        assert config.deterministic_ids
        assert not config.include_diagram

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_TIMEOUT, "7.5")
        monkeypatch.setenv(ENV_USER_AGENT, "custom-agent")
        config = LensConfig.from_env()
        assert config.timeout == 7.5
        assert config.user_agent == "custom-agent"

    def test_invalid_timeout_ignored(self, monkeypatch):
        monkeypatch.setenv(ENV_TIMEOUT, "soon")
        monkeypatch.delenv(ENV_USER_AGENT, raising=False)
        assert LensConfig.from_env().timeout == DEFAULT_TIMEOUT

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv(ENV_TIMEOUT, "7.5")
        config = LensConfig.from_env(timeout=2.0, include_diagram=True)
        assert config.timeout == 2.0
        assert config.include_diagram

    def test_unknown_override(self):
        with pytest.raises(TypeError):
            LensConfig.from_env(colour=True)
