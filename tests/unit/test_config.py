"""Tests for configuration loading (``core/config.py``)."""

from __future__ import annotations

import pytest

from aggregate_root.core.config import (
    Configuration,
    ObservabilityConfig,
    Settings,
    load_settings,
)
from aggregate_root.core.errors import ConfigError
from aggregate_root.infrastructure.event_store import InMemoryEventStore


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.handler_prefix == "apply_"
        assert settings.observability.log_level == "INFO"
        assert settings.observability.log_format == "console"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("AGGREGATE_ROOT_HANDLER_PREFIX", "when_")
        monkeypatch.setenv("AGGREGATE_ROOT_OBSERVABILITY__LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.handler_prefix == "when_"
        assert settings.observability.log_level == "DEBUG"

    def test_sub_config(self):
        cfg = ObservabilityConfig(log_format="json")
        assert cfg.log_format == "json"


class TestLoadSettings:
    def test_no_file(self):
        assert load_settings().handler_prefix == "apply_"

    def test_missing_file_ignored(self, tmp_path):
        settings = load_settings(tmp_path / "absent.toml")
        assert settings.handler_prefix == "apply_"

    def test_toml_file(self, tmp_path):
        path = tmp_path / "aggregate_root.toml"
        path.write_text(
            'handler_prefix = "on_"\n'
            "\n"
            "[observability]\n"
            'log_format = "json"\n'
        )
        settings = load_settings(path)
        assert settings.handler_prefix == "on_"
        assert settings.observability.log_format == "json"

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "aggregate_root.toml"
        path.write_text('handler_prefix = "on_"\n')
        settings = load_settings(path, overrides={"handler_prefix": "handle_"})
        assert settings.handler_prefix == "handle_"

    def test_invalid_toml_raises(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("handler_prefix = \n")
        with pytest.raises(ConfigError):
            load_settings(path)


class TestConfiguration:
    def test_configure_and_reset(self):
        cfg = Configuration()
        store = InMemoryEventStore()
        assert cfg.default_event_store is None
        cfg.configure(default_event_store=store)
        assert cfg.default_event_store is store
        cfg.reset()
        assert cfg.default_event_store is None
