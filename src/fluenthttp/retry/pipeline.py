r"""Interceptor pipeline applied on every attempt of a request."""

from __future__ import annotations

__all__ = ["apply_request_interceptors", "apply_response_interceptors"]

from typing import TYPE_CHECKING

from fluenthttp.core.options import RequestOptions
from fluenthttp.interceptors import InterceptedResponse

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

    from fluenthttp.interceptors import RequestInterceptor, ResponseInterceptor


def apply_request_interceptors(
    options: RequestOptions,
    url: str,
    interceptors: Iterable[RequestInterceptor],
) -> RequestOptions:
    """Apply request interceptors in order.

    Each interceptor receives the options returned by the previous one.

    Args:
        options: The initial request options.
        url: The full request URL.
        interceptors: The request interceptors, in execution order.

    Returns:
        The options returned by the last interceptor.

    Raises:
        TypeError: If an interceptor does not return ``RequestOptions``.
    """
    for interceptor in interceptors:
        options = interceptor.intercept(options, url)
        if not isinstance(options, RequestOptions):
            msg = (
                f"{type(interceptor).__name__}.intercept must return RequestOptions, "
                f"got {type(options).__name__}"
            )
            raise TypeError(msg)
    return options


async def apply_response_interceptors(
    response: httpx.Response,
    interceptors: Iterable[ResponseInterceptor],
) -> InterceptedResponse:
    """Apply response interceptors in order.

    Each interceptor receives the response returned by the previous one.
    Retry signals are OR-combined: the result requests a retry if any
    interceptor did.

    Args:
        response: The response returned by the network call.
        interceptors: The response interceptors, in execution order.

    Returns:
        The last response and the combined retry signal.

    Raises:
        TypeError: If an interceptor does not return
            ``InterceptedResponse``.
    """
    retry_requested = False
    for interceptor in interceptors:
        result = await interceptor.intercept(response)
        if not isinstance(result, InterceptedResponse):
            msg = (
                f"{type(interceptor).__name__}.intercept must return InterceptedResponse, "
                f"got {type(result).__name__}"
            )
            raise TypeError(msg)
        response = result.response
        retry_requested = retry_requested or result.retry_requested
    return InterceptedResponse(response=response, retry_requested=retry_requested)
