"""Render job dispatch."""

from .dispatcher import InProcessDispatcher, TaskDispatcher
from .redis_queue import RedisDispatcher
from .task_types import DeliveryStatus, RenderJob, TaskResult

__all__ = [
    "DeliveryStatus",
    "InProcessDispatcher",
    "RedisDispatcher",
    "RenderJob",
    "TaskDispatcher",
    "TaskResult",
]
