r"""Backoff strategies for retry delays."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ExponentialBackoff"]

from fluenthttp.backoff.base import BaseBackoffStrategy
from fluenthttp.backoff.exponential import ExponentialBackoff
