r"""Unit tests for AsyncRequestExecutor."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, call

import httpx
import pytest

from fluenthttp.backoff import BaseBackoffStrategy, ExponentialBackoff
from fluenthttp.core import RequestOptions
from fluenthttp.exceptions import HttpRequestError, NetworkError, RequestTimeoutError
from fluenthttp.interceptors import (
    InterceptedResponse,
    RequestInterceptor,
    ResponseInterceptor,
    StatusRetryInterceptor,
)
from fluenthttp.retry import AsyncRequestExecutor

if TYPE_CHECKING:
    from unittest.mock import Mock

TEST_URL = "https://api.example.com/data"


class CountingRequestInterceptor(RequestInterceptor):
    def __init__(self) -> None:
        self.calls = 0

    def intercept(self, options: RequestOptions, url: str) -> RequestOptions:  # noqa: ARG002
        self.calls += 1
        return options.with_header("X-Attempt", str(self.calls))


class AlwaysRetryInterceptor(ResponseInterceptor):
    async def intercept(self, response: httpx.Response) -> InterceptedResponse:
        return InterceptedResponse.retry(response)


class ConstantBackoff(BaseBackoffStrategy):
    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return 0.25


##########################################
#     Tests for AsyncRequestExecutor     #
##########################################


def test_async_request_executor_defaults() -> None:
    executor = AsyncRequestExecutor()
    assert executor.max_retries == 3
    assert isinstance(executor.backoff_strategy, ExponentialBackoff)


def test_async_request_executor_rejects_negative_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0, got -1"):
        AsyncRequestExecutor(max_retries=-1)


def test_async_request_executor_repr() -> None:
    assert repr(AsyncRequestExecutor(max_retries=2)).startswith(
        "AsyncRequestExecutor(max_retries=2, backoff_strategy=ExponentialBackoff("
    )


@pytest.mark.asyncio
async def test_async_request_executor_success(mock_asleep: Mock) -> None:
    response = httpx.Response(200, json={"ok": True})
    send = AsyncMock(return_value=response)
    options = RequestOptions(method="GET")

    result = await AsyncRequestExecutor().execute(TEST_URL, options, send)

    assert result is response
    send.assert_awaited_once_with(TEST_URL, options)
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_request_executor_failing_status_without_retry(mock_asleep: Mock) -> None:
    send = AsyncMock(return_value=httpx.Response(404))

    with pytest.raises(HttpRequestError, match=r"HTTP error! Status: 404") as exc_info:
        await AsyncRequestExecutor().execute(TEST_URL, RequestOptions(method="GET"), send)

    assert exc_info.value.status_code == 404
    assert exc_info.value.method == "GET"
    assert exc_info.value.url == TEST_URL
    send.assert_awaited_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_request_executor_retries_then_succeeds(mock_asleep: Mock) -> None:
    """Test three retry-eligible responses followed by a success."""
    responses = [httpx.Response(503), httpx.Response(503), httpx.Response(503), httpx.Response(200)]
    send = AsyncMock(side_effect=responses)

    result = await AsyncRequestExecutor(max_retries=3).execute(
        TEST_URL,
        RequestOptions(method="GET"),
        send,
        response_interceptors=[StatusRetryInterceptor()],
    )

    assert result is responses[-1]
    assert send.await_count == 4
    assert mock_asleep.call_args_list == [call(1.0), call(2.0), call(4.0)]


@pytest.mark.asyncio
async def test_async_request_executor_exhausts_retries(mock_asleep: Mock) -> None:
    """Test four retry-eligible responses with max_retries=3."""
    send = AsyncMock(return_value=httpx.Response(503))

    with pytest.raises(HttpRequestError) as exc_info:
        await AsyncRequestExecutor(max_retries=3).execute(
            TEST_URL,
            RequestOptions(method="GET"),
            send,
            response_interceptors=[StatusRetryInterceptor()],
        )

    assert exc_info.value.status_code == 503
    assert send.await_count == 4
    assert mock_asleep.call_args_list == [call(1.0), call(2.0), call(4.0)]


@pytest.mark.asyncio
async def test_async_request_executor_zero_max_retries(mock_asleep: Mock) -> None:
    send = AsyncMock(return_value=httpx.Response(503))

    with pytest.raises(HttpRequestError):
        await AsyncRequestExecutor(max_retries=0).execute(
            TEST_URL,
            RequestOptions(method="GET"),
            send,
            response_interceptors=[StatusRetryInterceptor()],
        )

    send.assert_awaited_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_request_executor_retry_exhausted_with_success_status(
    mock_asleep: Mock,
) -> None:
    """Test that a successful response is returned once retries are
    exhausted even if a retry is still requested."""
    response = httpx.Response(200, json={})
    send = AsyncMock(return_value=response)

    result = await AsyncRequestExecutor(max_retries=2).execute(
        TEST_URL,
        RequestOptions(method="GET"),
        send,
        response_interceptors=[AlwaysRetryInterceptor()],
    )

    assert result is response
    assert send.await_count == 3
    assert mock_asleep.await_count == 2


@pytest.mark.asyncio
async def test_async_request_executor_reapplies_interceptors(mock_asleep: Mock) -> None:
    """Test that request interceptors re-run from the initial options on
    every attempt."""
    interceptor = CountingRequestInterceptor()
    send = AsyncMock(side_effect=[httpx.Response(500), httpx.Response(200)])
    options = RequestOptions(method="POST", body="{}")

    await AsyncRequestExecutor().execute(
        TEST_URL,
        options,
        send,
        request_interceptors=[interceptor],
        response_interceptors=[StatusRetryInterceptor()],
    )

    assert interceptor.calls == 2
    sent = [c.args[1] for c in send.await_args_list]
    assert [o.headers["X-Attempt"] for o in sent] == ["1", "2"]
    assert all(o.body == "{}" for o in sent)
    assert dict(options.headers) == {}
    mock_asleep.assert_awaited_once_with(1.0)


@pytest.mark.asyncio
async def test_async_request_executor_custom_backoff(mock_asleep: Mock) -> None:
    send = AsyncMock(side_effect=[httpx.Response(429), httpx.Response(429), httpx.Response(200)])

    await AsyncRequestExecutor(backoff_strategy=ConstantBackoff()).execute(
        TEST_URL,
        RequestOptions(method="GET"),
        send,
        response_interceptors=[StatusRetryInterceptor()],
    )

    assert mock_asleep.call_args_list == [call(0.25), call(0.25)]


@pytest.mark.asyncio
async def test_async_request_executor_does_not_retry_network_error(mock_asleep: Mock) -> None:
    exc = httpx.ConnectError("Connection refused")
    send = AsyncMock(side_effect=exc)

    with pytest.raises(NetworkError, match=r"GET request to .* failed") as exc_info:
        await AsyncRequestExecutor().execute(
            TEST_URL,
            RequestOptions(method="GET"),
            send,
            response_interceptors=[AlwaysRetryInterceptor()],
        )

    assert exc_info.value.__cause__ is exc
    assert exc_info.value.cause is exc
    assert not isinstance(exc_info.value, RequestTimeoutError)
    send.assert_awaited_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_request_executor_transport_timeout(mock_asleep: Mock) -> None:
    exc = httpx.ReadTimeout("Read timed out")
    send = AsyncMock(side_effect=exc)

    with pytest.raises(RequestTimeoutError, match=r"timed out") as exc_info:
        await AsyncRequestExecutor().execute(TEST_URL, RequestOptions(method="GET"), send)

    assert exc_info.value.__cause__ is exc
    send.assert_awaited_once()
    mock_asleep.assert_not_called()
