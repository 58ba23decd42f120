"""HTTP execution over httpx."""

import json
import time
from typing import Any

import httpx

from apistudio.models.output import debug_log
from apistudio.models.responses import ApiResponse, MaterializedRequest


class RequestExecutionError(Exception):
    """Raised when a request could not be completed.

    Carries a single human-readable message; there is no partial response.
    """

    def __init__(self, url: str, original_error: Exception | None = None):
        self.url = url
        self.original_error = original_error
        detail = str(original_error) if original_error else ""
        reason = type(original_error).__name__ if original_error else "Request failed"
        message = f"Request to {url} failed: {reason}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class HttpExecutor:
    """Sends materialized requests and normalizes their responses."""

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        debug: bool = False,
    ):
        self.debug = debug
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HttpExecutor":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def execute(self, materialized: MaterializedRequest) -> ApiResponse:
        """Send a materialized request.

        Args:
            materialized: The resolved request to send

        Returns:
            The normalized response

        Raises:
            RequestExecutionError: On URL, transport or protocol failure
        """
        debug_log(f"http: {materialized.method} {materialized.url}", self.debug)
        start = time.perf_counter()
        try:
            response = await self._client.request(
                materialized.method.value,
                materialized.url,
                headers=materialized.headers,
                content=materialized.body.encode("utf-8") if materialized.body is not None else None,
            )
            text = response.text
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            debug_log(f"http: {type(e).__name__}: {e}", self.debug)
            raise RequestExecutionError(materialized.url, e) from e
        elapsed_ms = (time.perf_counter() - start) * 1000

        size = len(text.encode("utf-8"))
        debug_log(
            f"http: {response.status_code} in {elapsed_ms:.0f}ms, {size} bytes",
            self.debug,
        )
        return ApiResponse(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=collect_headers(response.headers),
            data=parse_body(text),
            time=elapsed_ms,
            size=size,
        )


def collect_headers(headers: httpx.Headers) -> dict[str, str]:
    """Flatten response headers, keeping the received case.

    Repeated headers are joined with ", ".
    """
    result: dict[str, str] = {}
    for raw_key, raw_value in headers.raw:
        key = raw_key.decode(headers.encoding)
        value = raw_value.decode(headers.encoding)
        if key in result:
            result[key] = f"{result[key]}, {value}"
        else:
            result[key] = value
    return result


def parse_body(text: str) -> Any:
    """Parse a body as JSON, falling back to the raw text."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text
