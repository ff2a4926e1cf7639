from batch_collector.events.registry import FlushListener, ListenerRegistry

__all__ = ["FlushListener", "ListenerRegistry"]
