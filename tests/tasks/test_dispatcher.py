"""Tests for the in-process task dispatcher."""

from typing import Generator

import pytest

from meme_creator.exceptions import DecodeError, QueueError, RecordNotFoundError, StoreError
from meme_creator.tasks import DeliveryStatus, InProcessDispatcher, RenderJob

from tests.utils.mocks import FlakyHandler


@pytest.fixture
def make_dispatcher() -> Generator:
    """Factory for dispatchers that retry without sleeping."""
    created = []

    def factory(handler, max_attempts: int = 3) -> InProcessDispatcher:
        dispatcher = InProcessDispatcher(handler, max_workers=2, max_attempts=max_attempts, backoff=0)
        created.append(dispatcher)
        return dispatcher

    yield factory
    for dispatcher in created:
        dispatcher.shutdown()


def run(dispatcher: InProcessDispatcher, *jobs: RenderJob) -> None:
    for job in jobs:
        dispatcher.enqueue(job)
    dispatcher.drain(timeout=10)


def test_successful_job_is_delivered_once(make_dispatcher) -> None:
    handler = FlakyHandler()
    dispatcher = make_dispatcher(handler)

    run(dispatcher, RenderJob(meme_id="m1"))

    assert handler.calls == {"m1": 1}
    result, = dispatcher.results
    assert result.status == DeliveryStatus.COMPLETED
    assert result.attempts == 1


def test_transient_failure_is_retried(make_dispatcher) -> None:
    handler = FlakyHandler(StoreError("db down"), StoreError("db down"))
    dispatcher = make_dispatcher(handler)

    run(dispatcher, RenderJob(meme_id="m1"))

    assert handler.calls == {"m1": 3}
    result, = dispatcher.results
    assert result.is_success
    assert result.attempts == 3


@pytest.mark.parametrize(
    "error", [RecordNotFoundError("Meme", "m1"), DecodeError("bad template")]
)
def test_terminal_failure_is_dropped(make_dispatcher, error) -> None:
    handler = FlakyHandler(error)
    dispatcher = make_dispatcher(handler)

    run(dispatcher, RenderJob(meme_id="m1"))

    assert handler.calls == {"m1": 1}
    result, = dispatcher.results
    assert result.status == DeliveryStatus.DROPPED
    assert result.error == str(error)


def test_retries_stop_after_max_attempts(make_dispatcher) -> None:
    handler = FlakyHandler(*[StoreError("db down")] * 5)
    dispatcher = make_dispatcher(handler, max_attempts=2)

    run(dispatcher, RenderJob(meme_id="m1"))

    assert handler.calls == {"m1": 2}
    result, = dispatcher.results
    assert result.status == DeliveryStatus.EXHAUSTED


def test_unknown_errors_are_retried(make_dispatcher) -> None:
    handler = FlakyHandler(RuntimeError("boom"))
    dispatcher = make_dispatcher(handler)

    run(dispatcher, RenderJob(meme_id="m1"))

    assert handler.calls == {"m1": 2}
    assert dispatcher.results[0].is_success


def test_jobs_are_independent(make_dispatcher) -> None:
    handler = FlakyHandler()
    dispatcher = make_dispatcher(handler)

    run(dispatcher, *[RenderJob(meme_id=f"m{i}") for i in range(5)])

    assert handler.calls == {f"m{i}": 1 for i in range(5)}
    assert all(r.is_success for r in dispatcher.results)


def test_enqueue_after_shutdown_fails(make_dispatcher) -> None:
    dispatcher = make_dispatcher(FlakyHandler())
    dispatcher.shutdown()

    with pytest.raises(QueueError):
        dispatcher.enqueue(RenderJob(meme_id="m1"))


def test_result_history_is_bounded() -> None:
    dispatcher = InProcessDispatcher(FlakyHandler(), max_workers=1, backoff=0, max_results=3)
    try:
        run(dispatcher, *[RenderJob(meme_id=f"m{i}") for i in range(10)])
    finally:
        dispatcher.shutdown()

    assert len(dispatcher.results) == 3
    assert {r.job.meme_id for r in dispatcher.results} == {"m7", "m8", "m9"}
