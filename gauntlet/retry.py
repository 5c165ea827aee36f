"""Bounded retry policy applied at the score-feed and registry boundaries."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from .schemas import RetrySettings

R = TypeVar('R')
logger = logging.getLogger('gauntlet.retry')


def linear_backoff(step: float) -> Callable[[int], float]:
    """Delay of step * attempt seconds after the given (1-based) failed attempt."""
    return lambda attempt: step * attempt


@dataclass
class RetryPolicy:
    """
    Fixed attempt count with a configurable backoff between attempts.

    Only exceptions listed in ``retry_on`` are retried; anything else
    propagates immediately. After the last attempt the final exception is
    re-raised unchanged.
    """
    max_attempts: int = 3
    backoff: Callable[[int], float] = field(default_factory=lambda: linear_backoff(0.5))
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    sleep: Callable[[float], None] = time.sleep

    @classmethod
    def from_settings(cls, settings: RetrySettings, **kwargs) -> 'RetryPolicy':
        return cls(
            max_attempts=settings.max_attempts,
            backoff=linear_backoff(settings.backoff_seconds),
            **kwargs,
        )

    def call(self, fn: Callable[[], R], description: str = 'call') -> R:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return fn()
            except self.retry_on as e:
                if attempt >= self.max_attempts:
                    logger.error(f'{description} failed after {attempt} attempts: {e}')
                    raise
                delay = self.backoff(attempt)
                logger.warning(f'Retry {attempt} for {description} after {delay:.2f}s: {e}')
                self.sleep(delay)
        raise RuntimeError('unreachable')  # pragma: no cover
