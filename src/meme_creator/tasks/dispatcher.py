"""Task dispatchers delivering render jobs at-least-once."""

import threading
from collections import deque
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Deque, Optional, Set

from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from ..exceptions import QueueError, is_retryable
from ..utils.logging import get_logger, job_context
from .task_types import DeliveryStatus, JobHandler, RenderJob, TaskResult

logger = get_logger(__name__)


class TaskDispatcher(ABC):
    """Accepts render jobs for asynchronous execution."""

    @abstractmethod
    def enqueue(self, job: RenderJob) -> None:
        """Queue ``job`` for delivery to the worker.

        Raises:
            QueueError: If the job could not be queued
        """


class InProcessDispatcher(TaskDispatcher):
    """Runs jobs on a thread pool inside the current process.

    A job whose handler raises a retryable error is delivered again with
    exponential backoff until ``max_attempts`` is reached. Terminal errors drop
    the job immediately. The latest ``max_results`` outcomes are kept in
    ``results`` in completion order.
    """

    def __init__(
        self,
        handler: JobHandler,
        max_workers: int = 2,
        max_attempts: int = 5,
        backoff: float = 1.0,
        max_backoff: float = 60.0,
        max_results: int = 1000,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            handler: Worker entry point called with each job
            max_workers: Maximum number of concurrent deliveries
            max_attempts: Deliveries per job before giving up
            backoff: Base delay in seconds between deliveries
            max_backoff: Upper bound for the delay in seconds
            max_results: Number of recent outcomes kept in ``results``
        """
        self.handler = handler
        self.max_attempts = max_attempts
        self.backoff = backoff
        self.max_backoff = max_backoff
        self.results: Deque[TaskResult] = deque(maxlen=max_results)

        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="render")
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()
        self._shutdown = False

    def enqueue(self, job: RenderJob) -> None:
        with self._lock:
            if self._shutdown:
                raise QueueError("dispatcher is shut down", details={"meme_id": job.meme_id})
            try:
                future = self._executor.submit(self._deliver, job)
            except RuntimeError as e:
                raise QueueError("submitting job failed", original_error=e) from e
            self._pending.add(future)
        future.add_done_callback(self._forget)
        logger.debug("job_enqueued", meme_id=job.meme_id)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff, max=self.max_backoff),
            retry=retry_if_exception(is_retryable),
            reraise=True,
        )

    def _deliver(self, job: RenderJob) -> TaskResult:
        attempts = 0
        try:
            for attempt in self._retrying():
                with attempt, job_context(job.meme_id, dispatcher="inprocess"):
                    attempts += 1
                    self.handler(job)
        except Exception as e:
            status = DeliveryStatus.EXHAUSTED if is_retryable(e) else DeliveryStatus.DROPPED
            logger.error(
                "job_failed",
                meme_id=job.meme_id,
                attempts=attempts,
                status=status.value,
                error=str(e),
            )
            result = TaskResult(job=job, status=status, attempts=attempts, error=str(e))
        else:
            result = TaskResult(job=job, status=DeliveryStatus.COMPLETED, attempts=attempts)

        with self._lock:
            self.results.append(result)
        return result

    def drain(self, timeout: Optional[float] = None) -> None:
        """Block until every job queued so far has finished."""
        with self._lock:
            pending = set(self._pending)
        wait(pending, timeout=timeout)

    def shutdown(self, wait_for_jobs: bool = True) -> None:
        """Stop accepting jobs and release the worker threads."""
        with self._lock:
            self._shutdown = True
        self._executor.shutdown(wait=wait_for_jobs)
