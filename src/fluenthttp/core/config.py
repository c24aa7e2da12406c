r"""Configuration dataclass and defaults for ApiClient.

This module provides configuration constants and the immutable
configuration object a built ``ApiClient`` reads from.
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "RETRY_STATUS_CODES",
]

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from fluenthttp.core.validation import validate_base_url, validate_max_retries, validate_timeout

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fluenthttp.backoff import BaseBackoffStrategy
    from fluenthttp.interceptors import RequestInterceptor, ResponseInterceptor


# Default timeout in seconds of the transport created by the client
# Per-call timeouts are configured on the request builder
DEFAULT_TIMEOUT = 10.0

# Default maximum number of retry attempts
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Default exponential backoff parameters
# Wait time = min(DEFAULT_BASE_DELAY * (2 ** attempt), DEFAULT_MAX_DELAY)
# 1st retry waits 1s, 2nd waits 2s, 3rd waits 4s, never more than 10s
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 10.0

# HTTP status codes that StatusRetryInterceptor flags for retry by default
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


def _empty_headers() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration of an ``ApiClient``.

    Instances are normally produced by ``ApiClientBuilder.build``. The
    configuration is never mutated after construction, so one client can
    safely serve many in-flight requests.

    Args:
        base_url: The base URL every endpoint is joined to. Must be
            non-empty.
        default_headers: Headers sent with every request. Per-call
            headers override them on key collision.
        request_interceptors: Client-level request interceptors, in
            registration order.
        response_interceptors: Client-level response interceptors, in
            registration order.
        max_retries: Maximum number of retries triggered by response
            interceptors. Must be >= 0.
        backoff_strategy: Optional backoff strategy. If ``None``, an
            ``ExponentialBackoff`` with the default parameters is used.
        timeout: Timeout in seconds of the transport the client creates
            when no ``httpx.AsyncClient`` is supplied. Must be > 0.

    Raises:
        ConfigurationError: If the base URL is missing or empty.
        ValueError: If ``max_retries`` or ``timeout`` is invalid.

    Example:
        ```pycon
        >>> from fluenthttp.core.config import ClientConfig
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config.max_retries
        3
        >>> config.default_headers
        mappingproxy({})

        ```
    """

    base_url: str
    default_headers: Mapping[str, str] = field(default_factory=_empty_headers)
    request_interceptors: tuple[RequestInterceptor, ...] = ()
    response_interceptors: tuple[ResponseInterceptor, ...] = ()
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_strategy: BaseBackoffStrategy | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        validate_base_url(self.base_url)
        validate_max_retries(self.max_retries)
        validate_timeout(self.timeout)

        # Stored values are immutable copies of the inputs.
        object.__setattr__(self, "default_headers", MappingProxyType(dict(self.default_headers)))
        object.__setattr__(self, "request_interceptors", tuple(self.request_interceptors))
        object.__setattr__(self, "response_interceptors", tuple(self.response_interceptors))
