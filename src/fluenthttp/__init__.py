r"""fluenthttp - Fluent asynchronous HTTP client with interceptors and
retries.

This package wraps ``httpx.AsyncClient`` behind two fluent builders: an
``ApiClientBuilder`` that configures the base client (base URL, default
headers, client-level interceptors, retry settings) and a
``RequestBuilder`` per call (method, body, query parameters, headers,
timeout, call-level interceptors). Every call goes through one execution
path that assembles the URL, applies the request interceptors, performs
the network call, applies the response interceptors, retries with
exponential backoff when an interceptor asks for it, and decodes the
JSON body.

Example:
    ```pycon
    >>> import asyncio
    >>> from fluenthttp import create_api_client
    >>> from fluenthttp.interceptors import StatusRetryInterceptor
    >>> client = (
    ...     create_api_client()
    ...     .set_base_url("https://api.example.com")
    ...     .add_default_header("Accept", "application/json")
    ...     .add_response_interceptor(StatusRetryInterceptor())
    ...     .build()
    ... )
    >>> async def main():  # doctest: +SKIP
    ...     async with client:
    ...         user = await client.get("users", 5).set_timeout(5.0).execute()
    ...         order = await client.post("orders", {"item": "x"}).execute()
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiClient",
    "ApiClientBuilder",
    "ConfigurationError",
    "DecodeError",
    "FluentHttpError",
    "HttpError",
    "HttpRequestError",
    "InterceptedResponse",
    "NetworkError",
    "RequestBuilder",
    "RequestInterceptor",
    "RequestOptions",
    "RequestTimeoutError",
    "ResponseInterceptor",
    "__version__",
    "create_api_client",
]

from importlib.metadata import PackageNotFoundError, version

from fluenthttp.builder import ApiClientBuilder, create_api_client
from fluenthttp.client import ApiClient
from fluenthttp.core.options import RequestOptions
from fluenthttp.exceptions import (
    ConfigurationError,
    DecodeError,
    FluentHttpError,
    HttpError,
    HttpRequestError,
    NetworkError,
    RequestTimeoutError,
)
from fluenthttp.interceptors import InterceptedResponse, RequestInterceptor, ResponseInterceptor
from fluenthttp.request_builder import RequestBuilder

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
