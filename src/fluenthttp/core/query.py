r"""Query string encoding."""

from __future__ import annotations

__all__ = ["build_query_string"]

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

if TYPE_CHECKING:
    from collections.abc import Mapping


def build_query_string(params: Mapping[str, Any] | None = None) -> str:
    """Encode a mapping of query parameters as a URL query string.

    Entries whose value is ``None`` are skipped. Every other value is
    converted with ``str()`` before being URL-encoded. Entries keep the
    insertion order of the mapping.

    Args:
        params: Optional mapping of query parameter names to values.

    Returns:
        An empty string if there is nothing to encode, otherwise a string
        starting with ``?`` followed by ``key=value`` pairs joined by ``&``.

    Example:
        ```pycon
        >>> from fluenthttp.core.query import build_query_string
        >>> build_query_string({"page": 2, "q": "hello world"})
        '?page=2&q=hello+world'
        >>> build_query_string({"skip": None})
        ''
        >>> build_query_string(None)
        ''

        ```
    """
    if not params:
        return ""
    pairs = [(key, str(value)) for key, value in params.items() if value is not None]
    if not pairs:
        return ""
    return f"?{urlencode(pairs)}"
