r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from fluenthttp.backoff.base import BaseBackoffStrategy
from fluenthttp.core.config import DEFAULT_BASE_DELAY, DEFAULT_MAX_DELAY

_MAX_EXPONENT = 1023


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy capped at a maximum delay.

    Calculates delay as: min(base_delay * (2 ** attempt), max_delay).

    With the defaults the delays are 1s, 2s, 4s, 8s and then 10s for
    every later attempt.

    Args:
        base_delay: The delay in seconds of the first retry.
        max_delay: Upper bound in seconds of any delay. ``None``
            disables the cap.

    Example:
        ```pycon
        >>> from fluenthttp.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff()
        >>> backoff.calculate(0)
        1.0
        >>> backoff.calculate(3)
        8.0
        >>> backoff.calculate(10)  # Would be 1024.0, but capped
        10.0

        ```
    """

    def __init__(
        self,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float | None = DEFAULT_MAX_DELAY,
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_delay={self.base_delay}, max_delay={self.max_delay})"

    def calculate(self, attempt: int) -> float:
        # 2.0**1024 overflows a float.
        delay = self.base_delay * 2.0 ** min(attempt, _MAX_EXPONENT)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
