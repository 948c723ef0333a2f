"""Retry policy tests — pure decisions plus the tenacity wiring."""
from unittest.mock import AsyncMock

import pytest
from tenacity import RetryError

from foodlens.errors import (
    RemoteServiceError,
    ResponseValidationError,
    ServiceTimeoutError,
    TransientServiceError,
)
from foodlens.retry import RetryDecision, RetryPolicy, retrying


# ── pure policy ───────────────────────────────────────────────────────────────


def test_transient_error_retried_with_linear_backoff():
    policy = RetryPolicy()

    assert policy.decide(1, TransientServiceError("busy")) == RetryDecision(True, 2.0)
    assert policy.decide(2, TransientServiceError("busy")) == RetryDecision(True, 4.0)


def test_transient_error_not_retried_at_bound():
    assert RetryPolicy().decide(3, TransientServiceError("busy")) == RetryDecision(False)


def test_timeout_counts_as_transient():
    assert RetryPolicy().decide(1, ServiceTimeoutError("slow")).should_retry


@pytest.mark.parametrize(
    "error",
    [
        RemoteServiceError("denied", "auth", 401),
        RemoteServiceError("quota", "quota", 429),
        ResponseValidationError("bad json"),
        RuntimeError("boom"),
    ],
)
def test_other_errors_never_retried(error):
    assert RetryPolicy().decide(1, error) == RetryDecision(False)


def test_delays_schedule():
    assert RetryPolicy().delays() == [2.0, 4.0]
    assert RetryPolicy(max_attempts=4, backoff_step=1.5).delays() == [1.5, 3.0, 4.5]
    assert RetryPolicy(max_attempts=1).delays() == []


# ── tenacity wiring ───────────────────────────────────────────────────────────


async def _run(policy, sleep, call):
    async for attempt in retrying(policy, sleep):
        with attempt:
            return await call()


async def test_retrying_exhausts_bound_then_raises_retry_error():
    sleep = AsyncMock()
    call = AsyncMock(side_effect=TransientServiceError("busy"))

    with pytest.raises(RetryError) as info:
        await _run(RetryPolicy(), sleep, call)

    assert call.await_count == 3
    assert [c.args[0] for c in sleep.await_args_list] == [2.0, 4.0]
    assert isinstance(info.value.last_attempt.exception(), TransientServiceError)


async def test_retrying_returns_first_success():
    sleep = AsyncMock()
    call = AsyncMock(side_effect=[TransientServiceError("busy"), "ok"])

    assert await _run(RetryPolicy(), sleep, call) == "ok"
    assert call.await_count == 2
    sleep.assert_awaited_once_with(2.0)


async def test_retrying_reraises_permanent_error_immediately():
    sleep = AsyncMock()
    call = AsyncMock(side_effect=RemoteServiceError("denied", "auth", 401))

    with pytest.raises(RemoteServiceError):
        await _run(RetryPolicy(), sleep, call)

    assert call.await_count == 1
    sleep.assert_not_awaited()


async def test_retrying_logs_each_retry(caplog):
    call = AsyncMock(side_effect=[TransientServiceError("busy"), "ok"])

    with caplog.at_level("WARNING", logger="foodlens.retry"):
        await _run(RetryPolicy(), AsyncMock(), call)

    assert any("attempt 1/3" in r.getMessage() for r in caplog.records)
