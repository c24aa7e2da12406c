r"""Per-call request builder."""

from __future__ import annotations

__all__ = ["RequestBuilder"]

from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from fluenthttp.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Self

    from fluenthttp.client import ApiClient
    from fluenthttp.core.options import RequestOptions
    from fluenthttp.interceptors import RequestInterceptor, ResponseInterceptor

T = TypeVar("T")


class RequestBuilder(Generic[T]):
    r"""Accumulate the configuration of one call and execute it.

    A request builder is single-use and owned by the caller that created
    it: every setter mutates the builder in place and returns the same
    instance for chaining. Do not share a builder between concurrent
    calls, and do not call ``execute`` more than once.

    Builders are normally created with ``ApiClient.get``,
    ``ApiClient.post``, ``ApiClient.put`` or ``ApiClient.delete``.

    Args:
        client: The client that executes the request.
        endpoint: The endpoint joined to the client base URL.
        options: The initial request options.
        params: Optional query parameters.

    Example:
        ```pycon
        >>> import asyncio
        >>> from fluenthttp import create_api_client
        >>> client = create_api_client().set_base_url("https://api.example.com").build()
        >>> builder = client.get("users", 5).set_header("Accept", "application/json")
        >>> builder = builder.set_timeout(5.0)
        >>> asyncio.run(builder.execute())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        client: ApiClient,
        endpoint: str,
        options: RequestOptions,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        self._client = client
        self._endpoint = endpoint
        self._options = options
        self._params = params
        self._request_interceptors: list[RequestInterceptor] = []
        self._response_interceptors: list[ResponseInterceptor] = []

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(method={self._options.method!r}, "
            f"endpoint={self._endpoint!r})"
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def options(self) -> RequestOptions:
        return self._options

    @property
    def params(self) -> Mapping[str, Any] | None:
        return self._params

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> Self:
        """Append a call-level request interceptor.

        Call-level interceptors run after the client-level ones.
        """
        self._request_interceptors.append(interceptor)
        return self

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> Self:
        """Append a call-level response interceptor.

        Call-level interceptors run after the client-level ones.
        """
        self._response_interceptors.append(interceptor)
        return self

    def set_header(self, name: str, value: str) -> Self:
        """Set a header for this call.

        Overrides a client default header with the same name.
        """
        self._options = self._options.with_header(name, value)
        return self

    def set_timeout(self, timeout: float) -> Self:
        """Set the timeout of this call.

        The timeout covers the whole call, including retries and backoff
        delays, and starts when ``execute`` is awaited. If it elapses
        first, the call is cancelled and ``RequestTimeoutError`` is
        raised.

        Args:
            timeout: Maximum seconds the call may take. Must be > 0.

        Raises:
            ValueError: If timeout is <= 0.
        """
        validate_timeout(timeout)
        self._options = self._options.replace(timeout=timeout)
        return self

    async def execute(self) -> T:
        """Execute the request.

        Returns:
            The response body decoded as JSON.

        Raises:
            HttpRequestError: If the final response has a failing status.
            NetworkError: If the network call fails or times out.
            DecodeError: If the response body is not valid JSON.
        """
        result = await self._client.execute_request(
            self._endpoint,
            self._options,
            self._params,
            self._request_interceptors,
            self._response_interceptors,
        )
        return cast("T", result)
