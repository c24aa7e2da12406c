r"""Asynchronous request executor with interceptor-driven retries.

This module provides the AsyncRequestExecutor class that runs one
logical call: request interceptors, network call, response
interceptors, and the retry/backoff loop.
"""

from __future__ import annotations

__all__ = ["AsyncRequestExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from fluenthttp.backoff import ExponentialBackoff
from fluenthttp.core.config import DEFAULT_MAX_RETRIES
from fluenthttp.core.validation import validate_max_retries
from fluenthttp.exceptions import HttpRequestError, NetworkError, RequestTimeoutError
from fluenthttp.retry.pipeline import apply_request_interceptors, apply_response_interceptors

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from fluenthttp.backoff import BaseBackoffStrategy
    from fluenthttp.core.options import RequestOptions
    from fluenthttp.interceptors import RequestInterceptor, ResponseInterceptor

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRequestExecutor:
    """Executes a request with interceptors and automatic retry logic.

    Retries are driven only by response interceptors: a retry happens
    when at least one response interceptor returned an
    ``InterceptedResponse`` with ``retry_requested=True`` and fewer than
    ``max_retries`` retries have been made. Transport failures are never
    retried.

    Each attempt moves through the states attempt -> backoff -> attempt
    until it either succeeds or fails:

    - retry requested and retries left: sleep, then attempt again
    - otherwise, failing status (not 2xx): raise ``HttpRequestError``
    - otherwise: return the response

    Args:
        max_retries: Maximum number of retry attempts. Must be >= 0.
        backoff_strategy: Strategy computing the delay before each retry.
            Defaults to ``ExponentialBackoff()``.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from fluenthttp.core.options import RequestOptions
        >>> from fluenthttp.retry import AsyncRequestExecutor
        >>> async def main():
        ...     async with httpx.AsyncClient() as client:
        ...
        ...         async def send(url, options):
        ...             return await client.request(options.method, url)
        ...
        ...         executor = AsyncRequestExecutor(max_retries=2)
        ...         return await executor.execute(
        ...             "https://api.example.com/data", RequestOptions(method="GET"), send
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_strategy: BaseBackoffStrategy | None = None,
    ) -> None:
        validate_max_retries(max_retries)
        self.max_retries = max_retries
        self.backoff_strategy: BaseBackoffStrategy = (
            backoff_strategy if backoff_strategy is not None else ExponentialBackoff()
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(max_retries={self.max_retries}, "
            f"backoff_strategy={self.backoff_strategy})"
        )

    async def execute(
        self,
        url: str,
        options: RequestOptions,
        send: Callable[[str, RequestOptions], Awaitable[httpx.Response]],
        request_interceptors: Sequence[RequestInterceptor] = (),
        response_interceptors: Sequence[ResponseInterceptor] = (),
    ) -> httpx.Response:
        """Execute the request, retrying when an interceptor asks for it.

        The request and response interceptors are re-applied in full on
        every attempt, starting from the same initial ``options``.

        Args:
            url: The full request URL.
            options: The initial request options.
            send: Async function performing the network call.
            request_interceptors: Request interceptors, in execution order.
            response_interceptors: Response interceptors, in execution order.

        Returns:
            The final response, after all response interceptors.

        Raises:
            HttpRequestError: If the final response has a failing status.
            NetworkError: If the network call fails.
            RequestTimeoutError: If the transport times out.
        """
        attempt = 0
        while True:
            attempt_options = apply_request_interceptors(options, url, request_interceptors)
            logger.debug(
                f"{attempt_options.method} request to {url} "
                f"(attempt {attempt + 1}/{self.max_retries + 1})"
            )
            response = await self._send(url, attempt_options, send)
            result = await apply_response_interceptors(response, response_interceptors)
            response = result.response

            if result.retry_requested and attempt < self.max_retries:
                sleep_time = self.backoff_strategy.calculate(attempt)
                logger.debug(
                    f"{attempt_options.method} to {url}: retry requested with status "
                    f"{response.status_code}, waiting {sleep_time:.2f}s"
                )
                await asyncio.sleep(sleep_time)
                attempt += 1
                continue

            if not response.is_success:
                logger.debug(
                    f"{attempt_options.method} request to {url} failed with status "
                    f"{response.status_code} after {attempt + 1} attempts"
                )
                raise HttpRequestError(
                    method=attempt_options.method,
                    url=url,
                    message=f"HTTP error! Status: {response.status_code}",
                    status_code=response.status_code,
                    response=response,
                )
            return response

    async def _send(
        self,
        url: str,
        options: RequestOptions,
        send: Callable[[str, RequestOptions], Awaitable[httpx.Response]],
    ) -> httpx.Response:
        try:
            return await send(url, options)
        except httpx.TimeoutException as exc:
            logger.debug(f"{options.method} request to {url} timed out: {exc}")
            raise RequestTimeoutError(
                method=options.method,
                url=url,
                message=f"{options.method} request to {url} timed out",
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            error_type = type(exc).__name__
            logger.debug(f"{options.method} request to {url} encountered {error_type}: {exc}")
            raise NetworkError(
                method=options.method,
                url=url,
                message=f"{options.method} request to {url} failed: {exc}",
                cause=exc,
            ) from exc
