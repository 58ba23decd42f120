"""Tests for the HTTP executor."""

import httpx
import pytest

from apistudio.models.requests import HttpMethod
from apistudio.models.responses import MaterializedRequest
from apistudio.repositories.http import (
    HttpExecutor,
    RequestExecutionError,
    collect_headers,
    parse_body,
)


def _executor(handler) -> HttpExecutor:
    """Build an executor whose client is served by a mock transport."""
    return HttpExecutor(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.anyio
class TestHttpExecutor:
    """Tests for HttpExecutor.execute."""

    async def test_json_response(self) -> None:
        """Test a JSON body is parsed and the request is sent as materialized."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                201,
                headers={"Content-Type": "application/json"},
                content=b'{"id": 7}',
            )

        materialized = MaterializedRequest(
            method=HttpMethod.POST,
            url="http://api.test/users?notify=true",
            headers={"Content-Type": "application/json", "Authorization": "Bearer t"},
            body='{"name": "jane"}',
        )
        async with _executor(handler) as executor:
            response = await executor.execute(materialized)

        assert response.status == 201
        assert response.status_text == "Created"
        assert response.data == {"id": 7}
        assert response.time >= 0
        assert response.size == 9

        sent = seen[0]
        assert sent.method == "POST"
        assert str(sent.url) == "http://api.test/users?notify=true"
        assert sent.headers["Authorization"] == "Bearer t"
        assert sent.content == b'{"name": "jane"}'

    async def test_text_response(self) -> None:
        """Test non-JSON bodies are kept as raw text with their byte size."""
        text = "héllo, not json"

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text=text)

        async with _executor(handler) as executor:
            response = await executor.execute(
                MaterializedRequest(method=HttpMethod.GET, url="http://api.test/")
            )

        assert response.data == text
        assert response.size == len(text.encode("utf-8"))
        assert response.size > len(text)

    async def test_empty_body(self) -> None:
        """Test an empty body is an empty string, not an error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        async with _executor(handler) as executor:
            response = await executor.execute(
                MaterializedRequest(method=HttpMethod.DELETE, url="http://api.test/users/1")
            )

        assert response.status == 204
        assert response.data == ""
        assert response.size == 0

    async def test_headers_keep_case(self) -> None:
        """Test response header names are reported as received."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers={"X-Request-Id": "abc"}, text="ok")

        async with _executor(handler) as executor:
            response = await executor.execute(
                MaterializedRequest(method=HttpMethod.GET, url="http://api.test/")
            )

        assert response.headers["X-Request-Id"] == "abc"

    async def test_transport_error(self) -> None:
        """Test connection failures surface as one error, no response."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with _executor(handler) as executor:
            with pytest.raises(RequestExecutionError) as exc_info:
                await executor.execute(
                    MaterializedRequest(method=HttpMethod.GET, url="http://api.test/")
                )

        message = str(exc_info.value)
        assert "http://api.test/" in message
        assert "ConnectError" in message
        assert "Connection refused" in message
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    async def test_timeout_error(self) -> None:
        """Test timeouts are reported like any other transport failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _executor(handler) as executor:
            with pytest.raises(RequestExecutionError):
                await executor.execute(
                    MaterializedRequest(method=HttpMethod.GET, url="http://api.test/")
                )


class TestHelpers:
    """Tests for response normalization helpers."""

    def test_collect_headers_joins_repeats(self) -> None:
        """Test repeated headers are joined with a comma."""
        headers = httpx.Headers([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"), ("ETag", "x")])
        assert collect_headers(headers) == {"Set-Cookie": "a=1, b=2", "ETag": "x"}

    def test_parse_body_json(self) -> None:
        """Test valid JSON is parsed."""
        assert parse_body('[1, {"a": null}]') == [1, {"a": None}]

    def test_parse_body_text(self) -> None:
        """Test invalid JSON stays text."""
        assert parse_body("<html></html>") == "<html></html>"
