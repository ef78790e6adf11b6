"""Tests for runtime config: env-driven settings."""

from __future__ import annotations

import pytest

from makewrap.config import WrapConfig


class TestWrapConfig:
    def test_defaults(self):
        config = WrapConfig()
        assert config.make_program == "make"
        assert config.merge_stderr is True
        assert config.echo_command is True
        assert config.show_summary is False
        assert config.log_level == "WARNING"

    def test_explicit_values(self):
        config = WrapConfig(make_program="gmake", echo_command=False)
        assert config.make_program == "gmake"
        assert config.echo_command is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MAKEWRAP_MAKE_PROGRAM", "gmake")
        monkeypatch.setenv("MAKEWRAP_SHOW_SUMMARY", "true")
        monkeypatch.setenv("MAKEWRAP_LOG_LEVEL", "DEBUG")
        config = WrapConfig()
        assert config.make_program == "gmake"
        assert config.show_summary is True
        assert config.log_level == "DEBUG"

    def test_unprefixed_env_ignored(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MAKE_PROGRAM", "bmake")
        assert WrapConfig().make_program == "make"
