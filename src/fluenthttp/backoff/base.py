r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long the execution path waits
    before re-running a request whose response asked for a retry.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry attempt.

        Args:
            attempt: The zero-based index of the attempt that requested
                the retry. attempt=0 is the initial request, attempt=1
                is the first retry, etc.

        Returns:
            The delay in seconds before the next attempt.
        """
