r"""Immutable options of an outgoing request."""

from __future__ import annotations

__all__ = ["RequestOptions"]

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


def _empty_headers() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class RequestOptions:
    """Options sent with a request.

    Instances are immutable: every ``with_*`` method returns a new
    ``RequestOptions``. Request interceptors receive an instance and
    return the instance the next interceptor sees.

    Args:
        method: The HTTP method (e.g. ``"GET"``, ``"POST"``).
        headers: The request headers.
        body: Optional pre-serialized request body.
        timeout: Optional call timeout in seconds.

    Example:
        ```pycon
        >>> from fluenthttp.core.options import RequestOptions
        >>> options = RequestOptions(method="GET")
        >>> new = options.with_header("Accept", "application/json")
        >>> dict(new.headers)
        {'Accept': 'application/json'}
        >>> dict(options.headers)  # Original unchanged
        {}

        ```
    """

    method: str
    headers: Mapping[str, str] = field(default_factory=_empty_headers)
    body: str | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        # Stored headers are a read-only copy of the input.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def with_header(self, name: str, value: str) -> RequestOptions:
        """Return new options with one header set.

        Args:
            name: The header name.
            value: The header value. Replaces any existing value.

        Returns:
            The updated options.
        """
        return self.with_headers({name: value})

    def with_headers(self, headers: Mapping[str, str]) -> RequestOptions:
        """Return new options with the given headers merged in.

        Args:
            headers: Headers to add. On key collision the new value wins.

        Returns:
            The updated options.
        """
        return replace(self, headers={**self.headers, **headers})

    def replace(self, **changes: Any) -> RequestOptions:
        """Return new options with the given fields replaced."""
        return replace(self, **changes)
