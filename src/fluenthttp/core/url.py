r"""URL assembly from a base URL, an endpoint and query parameters."""

from __future__ import annotations

__all__ = ["build_url", "join_url"]

from typing import TYPE_CHECKING, Any

from fluenthttp.core.query import build_query_string

if TYPE_CHECKING:
    from collections.abc import Mapping


def join_url(base_url: str, endpoint: str) -> str:
    """Join a base URL and an endpoint with exactly one ``/`` between
    them.

    Args:
        base_url: The base URL, with or without a trailing slash.
        endpoint: The endpoint, with or without a leading slash.

    Returns:
        The joined URL.

    Example:
        ```pycon
        >>> from fluenthttp.core.url import join_url
        >>> join_url("https://api.example.com", "users/5")
        'https://api.example.com/users/5'
        >>> join_url("https://api.example.com/", "/users/5")
        'https://api.example.com/users/5'
        >>> join_url("https://api.example.com/", "users/5")
        'https://api.example.com/users/5'

        ```
    """
    base_has_slash = base_url.endswith("/")
    endpoint_has_slash = endpoint.startswith("/")
    if not base_has_slash and not endpoint_has_slash:
        return f"{base_url}/{endpoint}"
    if base_has_slash and endpoint_has_slash:
        return f"{base_url}{endpoint[1:]}"
    return f"{base_url}{endpoint}"


def build_url(base_url: str, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """Build the full request URL.

    Args:
        base_url: The base URL of the client.
        endpoint: The endpoint of the request.
        params: Optional query parameters appended to the URL.

    Returns:
        The joined URL followed by the encoded query string, if any.

    Example:
        ```pycon
        >>> from fluenthttp.core.url import build_url
        >>> build_url("https://api.example.com", "users/", {"page": 1, "q": None})
        'https://api.example.com/users/?page=1'

        ```
    """
    return join_url(base_url, endpoint) + build_query_string(params)
