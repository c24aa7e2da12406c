r"""Request execution with interceptors and retries.

Public API:
    - AsyncRequestExecutor: Runs the interceptor pipeline and retry loop
    - apply_request_interceptors: Folds request interceptors over options
    - apply_response_interceptors: Folds response interceptors over a response
"""

from __future__ import annotations

__all__ = [
    "AsyncRequestExecutor",
    "apply_request_interceptors",
    "apply_response_interceptors",
]

from fluenthttp.retry.executor_async import AsyncRequestExecutor
from fluenthttp.retry.pipeline import apply_request_interceptors, apply_response_interceptors
