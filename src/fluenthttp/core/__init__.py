r"""Core building blocks shared by the client and request builders.

This package contains the configuration object and its defaults,
parameter validation, the immutable request options, query string
encoding, and URL assembly.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "RETRY_STATUS_CODES",
    "ClientConfig",
    "RequestOptions",
    "build_query_string",
    "build_url",
    "join_url",
    "validate_base_url",
    "validate_max_retries",
    "validate_timeout",
]

from fluenthttp.core.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    RETRY_STATUS_CODES,
    ClientConfig,
)
from fluenthttp.core.options import RequestOptions
from fluenthttp.core.query import build_query_string
from fluenthttp.core.url import build_url, join_url
from fluenthttp.core.validation import validate_base_url, validate_max_retries, validate_timeout
