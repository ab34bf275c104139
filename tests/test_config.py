"""Tests for runtime configuration."""

import logging
from pathlib import Path

import pytest

from syncgate.config import SyncGateConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SYNCGATE_DEFINITIONS_PATH", raising=False)
    monkeypatch.delenv("SYNCGATE_LOG_LEVEL", raising=False)


class TestFromEnv:
    def test_defaults(self):
        config = SyncGateConfig.from_env()
        assert config.definitions_path == Path("definitions")
        assert config.log_level == "WARNING"

    def test_base_path(self, tmp_path):
        config = SyncGateConfig.from_env(base_path=tmp_path)
        assert config.definitions_path == tmp_path / "definitions"

    def test_env_overrides_base_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SYNCGATE_DEFINITIONS_PATH", "/srv/defs")
        monkeypatch.setenv("SYNCGATE_LOG_LEVEL", "debug")
        config = SyncGateConfig.from_env(base_path=tmp_path)
        assert config.definitions_path == Path("/srv/defs")
        assert config.log_level == "DEBUG"


class TestConfigureLogging:
    def test_sets_package_level(self):
        SyncGateConfig(definitions_path=Path("."), log_level="INFO").configure_logging()
        assert logging.getLogger("syncgate").level == logging.INFO

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level: LOUD"):
            SyncGateConfig(definitions_path=Path("."), log_level="LOUD").configure_logging()
