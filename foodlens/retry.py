"""Bounded retry policy for transient model overload.

The policy itself is a pure function of (attempt, error); `retrying()` wires
it into tenacity so the analysis client never hand-rolls its loop.
"""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception

from foodlens.constants import BACKOFF_STEP_SECONDS, MAX_ATTEMPTS, MSG_OVERLOADED_RETRY
from foodlens.errors import TransientServiceError

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryDecision:
    should_retry: bool
    delay: float = 0.0


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = MAX_ATTEMPTS
    backoff_step: float = BACKOFF_STEP_SECONDS

    def decide(self, attempt: int, error: BaseException) -> RetryDecision:
        """attempt is 1-based: the number of calls made so far, including the failed one."""
        match error:
            case TransientServiceError() if attempt < self.max_attempts:
                return RetryDecision(should_retry=True, delay=self.backoff_step * attempt)
            case _:
                return RetryDecision(should_retry=False)

    def delays(self) -> list[float]:
        """Every delay slept if all attempts hit overload."""
        return [self.backoff_step * n for n in range(1, self.max_attempts)]


def _exception(state: RetryCallState) -> BaseException | None:
    return state.outcome.exception() if state.outcome else None


def retrying(policy: RetryPolicy, sleep: Sleep) -> AsyncRetrying:
    """tenacity controller whose retry, stop and wait all consult `policy`.

    Exhaustion surfaces as tenacity.RetryError; non-transient errors are
    re-raised unchanged after the first attempt.
    """

    def _decision(state: RetryCallState) -> RetryDecision:
        error = _exception(state)
        match error:
            case None:
                return RetryDecision(should_retry=False)
            case _:
                return policy.decide(state.attempt_number, error)

    def _stop(state: RetryCallState) -> bool:
        return not _decision(state).should_retry

    def _wait(state: RetryCallState) -> float:
        return _decision(state).delay

    def _before_sleep(state: RetryCallState) -> None:
        logger.warning(
            MSG_OVERLOADED_RETRY,
            state.attempt_number,
            policy.max_attempts,
            _decision(state).delay,
        )

    return AsyncRetrying(
        sleep=sleep,
        retry=retry_if_exception(lambda exc: isinstance(exc, TransientServiceError)),
        stop=_stop,
        wait=_wait,
        before_sleep=_before_sleep,
    )
