r"""Exception hierarchy for fluenthttp.

Every error raised by the library derives from ``FluentHttpError``.
Errors tied to a specific request (network failures, HTTP error statuses,
undecodable bodies) derive from ``RequestError`` and carry the HTTP method
and URL of the failing call.
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "FluentHttpError",
    "HttpError",
    "HttpRequestError",
    "NetworkError",
    "RequestError",
    "RequestTimeoutError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class FluentHttpError(Exception):
    r"""Base class for all fluenthttp errors."""


class ConfigurationError(FluentHttpError, ValueError):
    r"""Raised when a client is built from an invalid configuration.

    Example:
        ```pycon
        >>> from fluenthttp import create_api_client
        >>> create_api_client().build()
        Traceback (most recent call last):
        ...
        fluenthttp.exceptions.ConfigurationError: Base URL is required

        ```
    """


class RequestError(FluentHttpError):
    r"""Base class for errors raised while executing a request.

    Args:
        method: The HTTP method of the failing request.
        url: The URL of the failing request.
        message: Human readable description of the failure.
        cause: Optional underlying exception.

    Example:
        ```pycon
        >>> from fluenthttp.exceptions import RequestError
        >>> error = RequestError(
        ...     method="GET", url="https://api.example.com/users", message="boom"
        ... )
        >>> error.method, error.url
        ('GET', 'https://api.example.com/users')

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.cause = cause


class NetworkError(RequestError):
    r"""Raised when the transport fails to produce a response.

    Covers DNS failures, refused connections, and transport timeouts.
    Network errors are never retried.
    """


class RequestTimeoutError(NetworkError):
    r"""Raised when a call does not complete within its configured
    timeout."""


class HttpRequestError(RequestError):
    r"""Raised when a response is received with a failing status code.

    Args:
        method: The HTTP method of the failing request.
        url: The URL of the failing request.
        message: Human readable description of the failure.
        status_code: The HTTP status code of the final response.
        response: The final ``httpx.Response``, if available.
        cause: Optional underlying exception.

    Example:
        ```pycon
        >>> from fluenthttp.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET",
        ...     url="https://api.example.com/users/5",
        ...     message="HTTP error! Status: 404",
        ...     status_code=404,
        ... )
        >>> error.status_code
        404

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(method=method, url=url, message=message, cause=cause)
        self.status_code = status_code
        self.response = response


HttpError = HttpRequestError


class DecodeError(RequestError):
    r"""Raised when a successful response body cannot be decoded as
    JSON."""

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        response: httpx.Response | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(method=method, url=url, message=message, cause=cause)
        self.response = response
