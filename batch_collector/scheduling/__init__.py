from batch_collector.scheduling.interface import Scheduler, TimerHandle
from batch_collector.scheduling.asyncio_scheduler import AsyncioScheduler
from batch_collector.scheduling.virtual import VirtualScheduler, VirtualTimerHandle

__all__ = [
    "AsyncioScheduler",
    "Scheduler",
    "TimerHandle",
    "VirtualScheduler",
    "VirtualTimerHandle",
]
