r"""Parameter validation utilities for client configuration.

This module provides validation functions for the values accepted by
the client and request builders, ensuring they meet the required
constraints before being used in the execution path.
"""

from __future__ import annotations

__all__ = ["validate_base_url", "validate_max_retries", "validate_timeout"]

from fluenthttp.exceptions import ConfigurationError


def validate_base_url(base_url: str | None) -> None:
    """Validate the base URL of a client.

    Args:
        base_url: The base URL every endpoint is joined to.
            Must be a non-empty string.

    Raises:
        ConfigurationError: If the base URL is missing or empty.

    Example:
        ```pycon
        >>> from fluenthttp.core.validation import validate_base_url
        >>> validate_base_url("https://api.example.com")
        >>> validate_base_url("")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        fluenthttp.exceptions.ConfigurationError: Base URL is required

        ```
    """
    if not base_url:
        msg = "Base URL is required"
        raise ConfigurationError(msg)


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for a call to complete.
            Must be > 0.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from fluenthttp.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(30)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_max_retries(max_retries: int) -> None:
    """Validate the maximum number of retries.

    Args:
        max_retries: Maximum number of retry attempts. Must be >= 0.
            A value of 0 means no retries (only the initial attempt).

    Raises:
        ValueError: If max_retries is negative.
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
