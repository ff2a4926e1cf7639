"""Shared fixtures for batch_collector tests."""

from __future__ import annotations

import os

import pytest

from batch_collector.core.collector import BatchCollector
from batch_collector.core.models import CollectorConfig
from batch_collector.scheduling.virtual import VirtualScheduler
from batch_collector.storage.backends import SESSION_STORE
from batch_collector.storage.in_memory import InMemoryStore


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("BATCH_COLLECTOR_"):
            monkeypatch.delenv(name)
    yield
    for key in SESSION_STORE.keys():
        SESSION_STORE.delete(key)


@pytest.fixture
def scheduler():
    return VirtualScheduler()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def make_collector(scheduler, store):
    """Build collectors sharing the virtual clock and the in-memory store."""

    def _make(**options) -> BatchCollector:
        options.setdefault("delay_ms", 100)
        return BatchCollector(CollectorConfig(**options), scheduler=scheduler, store=store)

    return _make


@pytest.fixture
def received():
    return []
