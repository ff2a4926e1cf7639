"""Tests for the scheduler implementations."""

from __future__ import annotations

import asyncio

import pytest

from batch_collector.core.collector import BatchCollector
from batch_collector.core.models import BATCH_FLUSH_EVENT, CollectorConfig
from batch_collector.scheduling.asyncio_scheduler import AsyncioScheduler
from batch_collector.scheduling.virtual import VirtualScheduler


class TestVirtualScheduler:
    def test_fires_in_due_order(self):
        scheduler = VirtualScheduler()
        calls: list = []
        scheduler.schedule_after(30, lambda: calls.append(("c", scheduler.now_ms)))
        scheduler.schedule_after(10, lambda: calls.append(("a", scheduler.now_ms)))
        scheduler.schedule_after(10, lambda: calls.append(("b", scheduler.now_ms)))

        assert scheduler.advance(30) == 3
        assert calls == [("a", 10), ("b", 10), ("c", 30)]
        assert scheduler.now_ms == 30

    def test_cancelled_timer_never_fires(self):
        scheduler = VirtualScheduler()
        calls: list = []
        handle = scheduler.schedule_after(5, lambda: calls.append("x"))
        scheduler.cancel(handle)

        assert scheduler.pending == 0
        assert scheduler.advance(100) == 0
        assert calls == []

    def test_zero_delay_is_not_synchronous(self):
        scheduler = VirtualScheduler()
        calls: list = []
        scheduler.schedule_after(0, lambda: calls.append("x"))

        assert calls == []
        scheduler.run_pending()
        assert calls == ["x"]

    def test_timers_scheduled_inside_window_fire(self):
        scheduler = VirtualScheduler()
        calls: list = []

        def _first():
            calls.append(scheduler.now_ms)
            scheduler.schedule_after(20, lambda: calls.append(scheduler.now_ms))

        scheduler.schedule_after(10, _first)
        scheduler.advance(30)

        assert calls == [10, 30]

    def test_clock_does_not_go_backwards(self):
        with pytest.raises(ValueError):
            VirtualScheduler().advance(-1)


class TestAsyncioScheduler:
    async def test_callback_runs_after_delay(self):
        scheduler = AsyncioScheduler()
        fired = asyncio.Event()
        scheduler.schedule_after(10, fired.set)

        assert not fired.is_set()
        await asyncio.wait_for(fired.wait(), timeout=1.0)

    async def test_cancel(self):
        scheduler = AsyncioScheduler()
        calls: list = []
        handle = scheduler.schedule_after(10, lambda: calls.append("x"))
        scheduler.cancel(handle)

        await asyncio.sleep(0.05)
        assert calls == []

    async def test_collector_on_event_loop(self, received):
        collector = BatchCollector(CollectorConfig(delay_ms=20), scheduler=AsyncioScheduler())
        collector.subscribe(BATCH_FLUSH_EVENT, received.append)

        collector.push("a")
        await asyncio.sleep(0.005)
        collector.push("b")
        assert received == []

        await asyncio.sleep(0.1)
        assert received == [["a", "b"]]

    async def test_explicit_loop(self):
        loop = asyncio.get_running_loop()
        fired = asyncio.Event()
        AsyncioScheduler(loop).schedule_after(0, fired.set)

        await asyncio.wait_for(fired.wait(), timeout=1.0)
