"""Reliable render queue on Redis lists.

A consumer atomically moves a message from the queue into a processing list
and removes it only after the handler returns, so a crashed consumer leaves
the message behind for ``requeue_unacked`` to redeliver.
"""

import json
import time
from typing import Optional

import redis
from redis.exceptions import RedisError

from ..exceptions import QueueError, is_retryable
from ..utils.logging import get_logger, job_context
from .dispatcher import TaskDispatcher
from .task_types import DeliveryStatus, JobHandler, RenderJob, TaskResult

logger = get_logger(__name__)


class RedisDispatcher(TaskDispatcher):
    """Task dispatcher and consumer backed by two Redis lists."""

    def __init__(
        self,
        client: redis.Redis,
        queue_name: str = "render-jobs",
        max_attempts: int = 5,
    ) -> None:
        """Initialize the queue.

        Args:
            client: Redis client created with ``decode_responses=True``
            queue_name: List holding pending jobs
            max_attempts: Deliveries per job before giving up
        """
        self.client = client
        self.queue_name = queue_name
        self.processing_name = f"{queue_name}:processing"
        self.max_attempts = max_attempts

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisDispatcher":
        """Create a dispatcher connected to ``url``."""
        return cls(redis.Redis.from_url(url, decode_responses=True), **kwargs)

    def _push(self, job: RenderJob, attempt: int) -> None:
        message = json.dumps({**job.to_payload(), "attempt": attempt})
        try:
            self.client.lpush(self.queue_name, message)
        except RedisError as e:
            raise QueueError("adding task in queue failed", original_error=e) from e

    def enqueue(self, job: RenderJob) -> None:
        self._push(job, attempt=1)
        logger.debug("job_enqueued", meme_id=job.meme_id, queue=self.queue_name)

    def _ack(self, message: str) -> None:
        self.client.lrem(self.processing_name, 1, message)

    def consume_one(self, handler: JobHandler, timeout: float = 1.0) -> Optional[TaskResult]:
        """
        Deliver at most one job to ``handler``.

        Args:
            handler: Worker entry point
            timeout: Seconds to block waiting for a job

        Returns:
            The delivery outcome, or None if the queue stayed empty

        Raises:
            QueueError: If Redis is unreachable
        """
        try:
            message = self.client.blmove(
                self.queue_name, self.processing_name, timeout, "RIGHT", "LEFT"
            )
        except RedisError as e:
            raise QueueError("reading task queue failed", original_error=e) from e
        if message is None:
            return None

        try:
            payload = json.loads(message)
            job = RenderJob.from_payload(payload)
            attempt = int(payload.get("attempt", 1))
        except (ValueError, TypeError) as e:
            logger.error("job_malformed", message=message, error=str(e))
            self._ack(message)
            return None

        try:
            with job_context(job.meme_id, dispatcher="redis", attempt=str(attempt)):
                handler(job)
        except Exception as e:
            if is_retryable(e) and attempt < self.max_attempts:
                self._push(job, attempt + 1)
                status = DeliveryStatus.RETRYING
            elif is_retryable(e):
                status = DeliveryStatus.EXHAUSTED
            else:
                status = DeliveryStatus.DROPPED
            self._ack(message)
            logger.error(
                "job_failed",
                meme_id=job.meme_id,
                attempt=attempt,
                status=status.value,
                error=str(e),
            )
            return TaskResult(job=job, status=status, attempts=attempt, error=str(e))

        self._ack(message)
        return TaskResult(job=job, status=DeliveryStatus.COMPLETED, attempts=attempt)

    def requeue_unacked(self) -> int:
        """Move jobs abandoned by crashed consumers back onto the queue."""
        moved = 0
        while self.client.lmove(self.processing_name, self.queue_name, "RIGHT", "RIGHT"):
            moved += 1
        if moved:
            logger.warning("jobs_requeued", count=moved, queue=self.queue_name)
        return moved

    def run_forever(self, handler: JobHandler, idle_sleep: float = 0.0) -> None:
        """Consume jobs until interrupted."""
        self.requeue_unacked()
        logger.info("worker_started", queue=self.queue_name)
        while True:
            if self.consume_one(handler) is None and idle_sleep:
                time.sleep(idle_sleep)
