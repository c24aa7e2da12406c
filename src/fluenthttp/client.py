r"""Asynchronous API client bound to a base URL.

This module provides the ApiClient class. A client holds an immutable
``ClientConfig`` (base URL, default headers, client-level interceptors,
retry settings) and hands out one ``RequestBuilder`` per call. Every
builder dispatches through ``ApiClient.execute_request``, the shared
execution path.
"""

from __future__ import annotations

__all__ = ["ApiClient"]

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from fluenthttp.core.options import RequestOptions
from fluenthttp.core.url import build_url
from fluenthttp.exceptions import DecodeError, RequestTimeoutError
from fluenthttp.request_builder import RequestBuilder
from fluenthttp.retry import AsyncRequestExecutor

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import TracebackType
    from typing import Self

    from fluenthttp.core.config import ClientConfig
    from fluenthttp.interceptors import RequestInterceptor, ResponseInterceptor

logger: logging.Logger = logging.getLogger(__name__)


class ApiClient:
    r"""Asynchronous client for a JSON HTTP API.

    The network primitive is ``httpx.AsyncClient.request``. If an
    ``httpx.AsyncClient`` is supplied, it is used for every call and its
    lifecycle stays with the caller. Otherwise the client can be entered
    as an async context manager to share one ``httpx.AsyncClient`` for the
    duration of the block; outside such a block each call opens and
    closes its own.

    Args:
        config: The immutable client configuration.
        http_client: Optional ``httpx.AsyncClient`` used for all calls.

    Example:
        ```pycon
        >>> import asyncio
        >>> from fluenthttp import create_api_client
        >>> client = create_api_client().set_base_url("https://api.example.com").build()
        >>> async def main():  # doctest: +SKIP
        ...     async with client:
        ...         user = await client.get("users", 5).execute()
        ...         order = await client.post("orders", {"item": "x"}).execute()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, config: ClientConfig, http_client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._http_client = http_client
        self._owned_client: httpx.AsyncClient | None = None
        self._executor = AsyncRequestExecutor(
            max_retries=config.max_retries,
            backoff_strategy=config.backoff_strategy,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self._config.base_url!r})"

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def default_headers(self) -> Mapping[str, str]:
        return self._config.default_headers

    async def __aenter__(self) -> Self:
        """Enter the async context manager.

        Creates the shared ``httpx.AsyncClient`` unless one was supplied
        at construction.

        Returns:
            The ApiClient instance for making requests.
        """
        if self._http_client is None and self._owned_client is None:
            self._owned_client = httpx.AsyncClient(timeout=self._config.timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the shared
        ``httpx.AsyncClient`` created on entry.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._owned_client is not None:
            await self._owned_client.aclose()
            self._owned_client = None

    def get(
        self,
        path: str = "",
        id: str | int = "",  # noqa: A002
        params: Mapping[str, Any] | None = None,
    ) -> RequestBuilder[Any]:
        r"""Create a GET request for ``{path}/{id}``.

        Args:
            path: The resource path.
            id: The resource identifier.
            params: Optional query parameters.

        Returns:
            A new request builder.
        """
        return RequestBuilder(self, f"{path}/{id}", RequestOptions(method="GET"), params)

    def post(self, endpoint: str = "", body: Any = None) -> RequestBuilder[Any]:
        r"""Create a POST request with a JSON body.

        Args:
            endpoint: The endpoint to post to.
            body: The JSON-serializable request body. ``None`` sends no
                body.

        Returns:
            A new request builder.
        """
        return RequestBuilder(
            self, endpoint, RequestOptions(method="POST", body=_serialize_body(body))
        )

    def put(self, path: str = "", id: str | int = "", body: Any = None) -> RequestBuilder[Any]:  # noqa: A002
        r"""Create a PUT request for ``{path}/{id}`` with a JSON body.

        Args:
            path: The resource path.
            id: The resource identifier.
            body: The JSON-serializable request body. ``None`` sends no
                body.

        Returns:
            A new request builder.
        """
        return RequestBuilder(
            self, f"{path}/{id}", RequestOptions(method="PUT", body=_serialize_body(body))
        )

    def delete(self, path: str = "", id: str | int = "") -> RequestBuilder[Any]:  # noqa: A002
        r"""Create a DELETE request for ``{path}/{id}``.

        Args:
            path: The resource path.
            id: The resource identifier.

        Returns:
            A new request builder.
        """
        return RequestBuilder(self, f"{path}/{id}", RequestOptions(method="DELETE"))

    async def execute_request(
        self,
        endpoint: str,
        options: RequestOptions,
        params: Mapping[str, Any] | None = None,
        request_interceptors: Sequence[RequestInterceptor] = (),
        response_interceptors: Sequence[ResponseInterceptor] = (),
    ) -> Any:
        r"""Run a request through the shared execution path.

        The URL is assembled once. The client default headers are merged
        under the per-call headers, then the retry loop runs the
        client-level interceptors followed by the call-level ones. If
        ``options.timeout`` is set, the whole call races a timer and the
        loser is cancelled.

        Args:
            endpoint: The endpoint joined to the base URL.
            options: The per-call request options.
            params: Optional query parameters.
            request_interceptors: Call-level request interceptors.
            response_interceptors: Call-level response interceptors.

        Returns:
            The response body decoded as JSON, or ``None`` for a
            ``204 No Content`` response or a ``HEAD`` request.

        Raises:
            HttpRequestError: If the final response has a failing status.
            NetworkError: If the network call fails.
            RequestTimeoutError: If the call does not complete in time.
            DecodeError: If the response body is empty or not valid JSON.
        """
        url = build_url(self._config.base_url, endpoint, params)
        options = options.replace(headers={**self._config.default_headers, **options.headers})
        call = self._execute(
            url,
            options,
            (*self._config.request_interceptors, *request_interceptors),
            (*self._config.response_interceptors, *response_interceptors),
        )
        if options.timeout is None:
            return await call

        try:
            return await asyncio.wait_for(call, timeout=options.timeout)
        except asyncio.TimeoutError as exc:
            logger.debug(f"{options.method} request to {url} timed out after {options.timeout}s")
            raise RequestTimeoutError(
                method=options.method,
                url=url,
                message=f"{options.method} request to {url} timed out after {options.timeout}s",
                cause=exc,
            ) from exc

    async def _execute(
        self,
        url: str,
        options: RequestOptions,
        request_interceptors: Sequence[RequestInterceptor],
        response_interceptors: Sequence[ResponseInterceptor],
    ) -> Any:
        response = await self._executor.execute(
            url,
            options,
            self._send,
            request_interceptors=request_interceptors,
            response_interceptors=response_interceptors,
        )
        return _decode_response(response, method=options.method, url=url)

    async def _send(self, url: str, options: RequestOptions) -> httpx.Response:
        client = self._http_client if self._http_client is not None else self._owned_client
        if client is not None:
            return await _request(client, url, options)
        async with httpx.AsyncClient(timeout=self._config.timeout) as client:
            return await _request(client, url, options)


async def _request(client: httpx.AsyncClient, url: str, options: RequestOptions) -> httpx.Response:
    return await client.request(
        options.method, url, headers=dict(options.headers), content=options.body
    )


def _serialize_body(body: Any) -> str | None:
    if body is None:
        return None
    return json.dumps(body)


def _decode_response(response: httpx.Response, method: str, url: str) -> Any:
    if response.status_code == httpx.codes.NO_CONTENT or method == "HEAD":
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(
            method=method,
            url=url,
            message=f"{method} request to {url} returned a body that is not valid JSON: {exc}",
            response=response,
            cause=exc,
        ) from exc
