r"""Fluent builder for ApiClient instances."""

from __future__ import annotations

__all__ = ["ApiClientBuilder", "create_api_client"]

import logging
from typing import TYPE_CHECKING

from fluenthttp.client import ApiClient
from fluenthttp.core.config import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, ClientConfig
from fluenthttp.core.validation import validate_base_url, validate_max_retries, validate_timeout

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Self

    import httpx

    from fluenthttp.backoff import BaseBackoffStrategy
    from fluenthttp.interceptors import RequestInterceptor, ResponseInterceptor

logger: logging.Logger = logging.getLogger(__name__)


class ApiClientBuilder:
    r"""Accumulate the base configuration of a client and build it.

    Setters mutate the builder in place and return it for chaining.
    ``build`` snapshots the accumulated state, so later changes to the
    builder never affect clients it already built.

    Example:
        ```pycon
        >>> from fluenthttp import create_api_client
        >>> client = (
        ...     create_api_client()
        ...     .set_base_url("https://api.example.com")
        ...     .add_default_header("Accept", "application/json")
        ...     .add_default_headers({"X-Client": "docs", "Accept": "text/plain"})
        ...     .build()
        ... )
        >>> dict(client.default_headers)
        {'Accept': 'text/plain', 'X-Client': 'docs'}

        ```
    """

    def __init__(self) -> None:
        self._base_url: str = ""
        self._default_headers: dict[str, str] = {}
        self._request_interceptors: list[RequestInterceptor] = []
        self._response_interceptors: list[ResponseInterceptor] = []
        self._max_retries: int = DEFAULT_MAX_RETRIES
        self._backoff_strategy: BaseBackoffStrategy | None = None
        self._timeout: float = DEFAULT_TIMEOUT
        self._http_client: httpx.AsyncClient | None = None

    def set_base_url(self, base_url: str) -> Self:
        """Set the base URL every endpoint is joined to."""
        self._base_url = base_url
        return self

    def add_default_header(self, name: str, value: str) -> Self:
        """Add one default header. Replaces a previous value for the same
        name."""
        self._default_headers[name] = value
        return self

    def add_default_headers(self, headers: Mapping[str, str]) -> Self:
        """Merge default headers into the accumulated ones.

        Later values win on key collision; other headers are kept.
        """
        self._default_headers.update(headers)
        return self

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> Self:
        """Append a client-level request interceptor."""
        self._request_interceptors.append(interceptor)
        return self

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> Self:
        """Append a client-level response interceptor."""
        self._response_interceptors.append(interceptor)
        return self

    def set_max_retries(self, max_retries: int) -> Self:
        """Set the maximum number of interceptor-requested retries.

        Raises:
            ValueError: If max_retries is negative.
        """
        validate_max_retries(max_retries)
        self._max_retries = max_retries
        return self

    def set_backoff_strategy(self, backoff_strategy: BaseBackoffStrategy) -> Self:
        """Set the strategy computing the delay before each retry."""
        self._backoff_strategy = backoff_strategy
        return self

    def set_timeout(self, timeout: float) -> Self:
        """Set the timeout of the transport the client creates itself.

        Raises:
            ValueError: If timeout is <= 0.
        """
        validate_timeout(timeout)
        self._timeout = timeout
        return self

    def set_http_client(self, http_client: httpx.AsyncClient) -> Self:
        """Use the given ``httpx.AsyncClient`` for every call.

        The caller keeps ownership of the client and must close it.
        """
        self._http_client = http_client
        return self

    def build(self) -> ApiClient:
        """Build an immutable client from the accumulated configuration.

        Returns:
            The new client.

        Raises:
            ConfigurationError: If the base URL was never set or is empty.
        """
        validate_base_url(self._base_url)
        config = ClientConfig(
            base_url=self._base_url,
            default_headers=self._default_headers,
            request_interceptors=tuple(self._request_interceptors),
            response_interceptors=tuple(self._response_interceptors),
            max_retries=self._max_retries,
            backoff_strategy=self._backoff_strategy,
            timeout=self._timeout,
        )
        logger.debug(f"Built client for {config.base_url}")
        return ApiClient(config, http_client=self._http_client)


def create_api_client() -> ApiClientBuilder:
    r"""Return a fresh client builder.

    Example:
        ```pycon
        >>> from fluenthttp import create_api_client
        >>> client = create_api_client().set_base_url("https://api.example.com").build()
        >>> client.base_url
        'https://api.example.com'

        ```
    """
    return ApiClientBuilder()
