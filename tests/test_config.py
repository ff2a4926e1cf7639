"""Tests for CollectorConfig validation and environment wiring."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from batch_collector import config_from_env, create_collector
from batch_collector.core.collector import BatchCollector
from batch_collector.core.models import DEFAULT_STORAGE_KEY, CollectorConfig, StorageType


class TestCollectorConfig:
    def test_defaults(self):
        config = CollectorConfig(delay_ms=5000)

        assert config.reset_timer_on_push is True
        assert config.storage_type is StorageType.MEMORY
        assert config.storage_key == DEFAULT_STORAGE_KEY == "batch-collector-pending"
        assert config.auto_clear is True
        assert not config.persistent

    @pytest.mark.parametrize("delay", [0, -1])
    def test_delay_must_be_positive(self, delay):
        with pytest.raises(ValidationError):
            CollectorConfig(delay_ms=delay)

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("local", StorageType.LOCAL),
            ("localStorage", StorageType.LOCAL),
            ("sessionStorage", StorageType.SESSION),
            ("SESSION", StorageType.SESSION),
            (StorageType.MEMORY, StorageType.MEMORY),
        ],
    )
    def test_storage_type_names(self, raw, expected):
        assert CollectorConfig(delay_ms=1, storage_type=raw).storage_type is expected

    def test_unknown_storage_type(self):
        with pytest.raises(ValidationError):
            CollectorConfig(delay_ms=1, storage_type="redis")

    def test_blank_storage_key(self):
        with pytest.raises(ValidationError):
            CollectorConfig(delay_ms=1, storage_key="   ")

    def test_frozen(self):
        config = CollectorConfig(delay_ms=1)
        with pytest.raises(ValidationError):
            config.delay_ms = 2


class TestConfigFromEnv:
    def test_environment_defaults(self):
        config = config_from_env()

        assert config.delay_ms == 5000
        assert config.storage_type is StorageType.MEMORY

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BATCH_COLLECTOR_DELAY_MS", "250")
        monkeypatch.setenv("BATCH_COLLECTOR_RESET_TIMER", "0")
        monkeypatch.setenv("BATCH_COLLECTOR_STORAGE", "local")
        monkeypatch.setenv("BATCH_COLLECTOR_STORAGE_KEY", "env-key")
        monkeypatch.setenv("BATCH_COLLECTOR_STORAGE_DIR", str(tmp_path))
        monkeypatch.setenv("BATCH_COLLECTOR_AUTO_CLEAR", "false")

        config = config_from_env()

        assert config.delay_ms == 250
        assert config.reset_timer_on_push is False
        assert config.storage_type is StorageType.LOCAL
        assert config.storage_key == "env-key"
        assert config.storage_dir == str(tmp_path)
        assert config.auto_clear is False

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("BATCH_COLLECTOR_DELAY_MS", "250")

        config = config_from_env(delay_ms=10, storage_key=None)

        assert config.delay_ms == 10
        assert config.storage_key == DEFAULT_STORAGE_KEY

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("BATCH_COLLECTOR_DELAY_MS", "soon")
        with pytest.raises(ValidationError):
            config_from_env()

    def test_create_collector(self, scheduler, store, received):
        collector = create_collector(delay_ms=50, storage_type="session", scheduler=scheduler, store=store)
        assert isinstance(collector, BatchCollector)

        collector.subscribe("flush", received.append)
        collector.push(1)
        assert store.get(DEFAULT_STORAGE_KEY) == "[1]"

        scheduler.advance(50)
        assert received == [[1]]
