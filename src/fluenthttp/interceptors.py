r"""Request and response interceptors.

A request interceptor transforms the options of an outgoing request
given its URL. A response interceptor inspects or transforms an incoming
response and may ask for the whole call to be retried by returning an
``InterceptedResponse`` with ``retry_requested=True``.

Interceptors run in a fixed order: client-level interceptors first, in
registration order, then call-level interceptors, in registration order.

Example:
    ```pycon
    >>> from fluenthttp import create_api_client
    >>> from fluenthttp.interceptors import HeaderInterceptor, StatusRetryInterceptor
    >>> client = (
    ...     create_api_client()
    ...     .set_base_url("https://api.example.com")
    ...     .add_request_interceptor(HeaderInterceptor("Authorization", "Bearer token"))
    ...     .add_response_interceptor(StatusRetryInterceptor())
    ...     .build()
    ... )

    ```
"""

from __future__ import annotations

__all__ = [
    "HeaderInterceptor",
    "InterceptedResponse",
    "PredicateRetryInterceptor",
    "RequestInterceptor",
    "ResponseInterceptor",
    "StatusRetryInterceptor",
]

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fluenthttp.core.config import RETRY_STATUS_CODES

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from fluenthttp.core.options import RequestOptions

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterceptedResponse:
    """Result of a response interceptor.

    Attributes:
        response: The response passed on to the next interceptor.
        retry_requested: Whether this interceptor asks for the call to
            be retried.
    """

    response: httpx.Response
    retry_requested: bool = False

    @classmethod
    def proceed(cls, response: httpx.Response) -> InterceptedResponse:
        """Pass the response on without asking for a retry."""
        return cls(response=response)

    @classmethod
    def retry(cls, response: httpx.Response) -> InterceptedResponse:
        """Pass the response on and ask for the call to be retried."""
        return cls(response=response, retry_requested=True)


class RequestInterceptor(ABC):
    """Transforms the options of an outgoing request."""

    @abstractmethod
    def intercept(self, options: RequestOptions, url: str) -> RequestOptions:
        """Transform the request options.

        Args:
            options: The options produced by the previous interceptor.
            url: The full request URL.

        Returns:
            The options passed to the next interceptor, or sent if this
            is the last one.
        """


class ResponseInterceptor(ABC):
    """Inspects or transforms an incoming response."""

    @abstractmethod
    async def intercept(self, response: httpx.Response) -> InterceptedResponse:
        """Inspect or transform the response.

        Args:
            response: The response produced by the previous interceptor.

        Returns:
            The response passed to the next interceptor, and whether a
            retry is requested.
        """


class HeaderInterceptor(RequestInterceptor):
    """Set a header on every outgoing request.

    Args:
        name: The header name.
        value: The header value. Overrides any existing value.

    Example:
        ```pycon
        >>> from fluenthttp.core.options import RequestOptions
        >>> from fluenthttp.interceptors import HeaderInterceptor
        >>> interceptor = HeaderInterceptor("X-Trace", "abc")
        >>> options = interceptor.intercept(RequestOptions(method="GET"), "https://x.io/a")
        >>> dict(options.headers)
        {'X-Trace': 'abc'}

        ```
    """

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    def intercept(self, options: RequestOptions, url: str) -> RequestOptions:  # noqa: ARG002
        return options.with_header(self.name, self.value)


class StatusRetryInterceptor(ResponseInterceptor):
    """Request a retry when the response status code is in a forcelist.

    Args:
        status_forcelist: Tuple of HTTP status codes that should trigger
            a retry.
    """

    def __init__(self, status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES) -> None:
        self.status_forcelist = status_forcelist

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status_forcelist={self.status_forcelist})"

    async def intercept(self, response: httpx.Response) -> InterceptedResponse:
        if response.status_code in self.status_forcelist:
            logger.debug(f"Status {response.status_code} is retryable, requesting a retry")
            return InterceptedResponse.retry(response)
        return InterceptedResponse.proceed(response)


class PredicateRetryInterceptor(ResponseInterceptor):
    """Request a retry when a predicate on the response returns
    ``True``.

    Args:
        predicate: Function called with the response. Should return
            ``True`` to request a retry.

    Example:
        ```pycon
        >>> from fluenthttp.interceptors import PredicateRetryInterceptor
        >>> interceptor = PredicateRetryInterceptor(
        ...     lambda response: response.headers.get("X-Retry") == "1"
        ... )

        ```
    """

    def __init__(self, predicate: Callable[[httpx.Response], bool]) -> None:
        self.predicate = predicate

    async def intercept(self, response: httpx.Response) -> InterceptedResponse:
        if self.predicate(response):
            return InterceptedResponse.retry(response)
        return InterceptedResponse.proceed(response)
