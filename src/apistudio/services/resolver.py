"""Shared request resolution.

Both the materializer (what gets sent) and the code emitters (what the
snippet shows) resolve requests through this module, so the two can never
disagree about interpolation, auth headers, bodies or query strings.
"""

import base64
import re
from collections.abc import Sequence
from typing import Literal
from urllib.parse import parse_qsl, urlencode

import httpx
from pydantic import BaseModel

from apistudio.models.environments import EnvironmentVariable
from apistudio.models.requests import (
    ApiKeyAuth,
    ApiRequest,
    Auth,
    BasicAuth,
    BearerAuth,
    Body,
    HttpMethod,
    RawBody,
    UrlEncodedBody,
)
from apistudio.services.interpolation import interpolate

SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
DEFAULT_SCHEME = "https://"
BODYLESS_METHODS = frozenset({HttpMethod.GET, HttpMethod.HEAD})
JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

BodyFormat = Literal["json", "text", "xml", "html", "urlencoded"]


class InvalidUrlError(ValueError):
    """Raised when a request URL cannot be turned into a valid HTTP URL."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL '{url}': {reason}")


class ResolvedRequest(BaseModel):
    """Intermediate resolution shared by execution and code generation."""

    method: HttpMethod
    base_url: str  # interpolated template, scheme defaulted, params not yet added
    query: list[tuple[str, str]] = []
    url: str
    headers: dict[str, str] = {}
    basic_auth: tuple[str, str] | None = None  # only set when not encoded into headers
    body: str | None = None
    body_format: BodyFormat | None = None


def resolve(
    request: ApiRequest,
    variables: Sequence[EnvironmentVariable],
    *,
    strict: bool = True,
    encode_basic: bool = True,
) -> ResolvedRequest:
    """Resolve a request against environment variables.

    Args:
        request: The declarative request
        variables: Variables of the active environment (may be empty)
        strict: Validate the URL and raise InvalidUrlError when it is malformed
        encode_basic: Put Basic credentials into an Authorization header; when
            False they are returned literally in ``basic_auth``

    Returns:
        The resolved request
    """
    base_url = resolve_base_url(request.url, variables)
    if strict:
        validate_url(base_url)

    query = resolve_query(request, variables)
    headers = resolve_headers(request, variables)
    basic_auth = apply_auth(headers, request.auth, variables, encode_basic=encode_basic)
    body, body_format = resolve_body(request.method, request.body, variables, headers)

    return ResolvedRequest(
        method=request.method,
        base_url=base_url,
        query=query,
        url=append_query(base_url, query),
        headers=headers,
        basic_auth=basic_auth,
        body=body,
        body_format=body_format,
    )


def resolve_base_url(template: str, variables: Sequence[EnvironmentVariable]) -> str:
    """Interpolate a URL template and default its scheme to https."""
    url = interpolate(template, variables).strip()
    if not SCHEME_PATTERN.match(url):
        url = DEFAULT_SCHEME + url
    return url


def validate_url(url: str) -> None:
    """Check that a URL parses as an absolute http(s) URL.

    Raises:
        InvalidUrlError: If the URL is malformed
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidUrlError(url, str(e)) from e

    if parsed.scheme not in ("http", "https"):
        raise InvalidUrlError(url, f"unsupported scheme '{parsed.scheme}'")
    if not parsed.host:
        raise InvalidUrlError(url, "missing host")


def resolve_query(
    request: ApiRequest, variables: Sequence[EnvironmentVariable]
) -> list[tuple[str, str]]:
    """Enabled query params as (key, interpolated value), in list order."""
    return [
        (param.key, interpolate(param.value, variables))
        for param in request.params
        if param.is_effective
    ]


def append_query(url: str, pairs: Sequence[tuple[str, str]]) -> str:
    """Append form-encoded pairs to a URL, keeping any existing query and fragment."""
    if not pairs:
        return url

    base, sep, fragment = url.partition("#")
    if "?" not in base:
        base += "?"
    elif not base.endswith(("?", "&")):
        base += "&"

    result = base + urlencode(list(pairs))
    if sep:
        result += f"#{fragment}"
    return result


def resolve_headers(
    request: ApiRequest, variables: Sequence[EnvironmentVariable]
) -> dict[str, str]:
    """Enabled headers with interpolated values; later keys overwrite earlier ones."""
    headers: dict[str, str] = {}
    for header in request.headers:
        if header.is_effective:
            headers[header.key] = interpolate(header.value, variables)
    return headers


def apply_auth(
    headers: dict[str, str],
    auth: Auth,
    variables: Sequence[EnvironmentVariable],
    encode_basic: bool = True,
) -> tuple[str, str] | None:
    """Add auth-derived headers in place, overriding explicit ones.

    Explicit headers are overridden regardless of the case of their name.
    Basic credentials are taken literally, without interpolation.

    Returns:
        The literal (username, password) pair when Basic auth applies and
        ``encode_basic`` is False, otherwise None
    """
    match auth:
        case BearerAuth(token=token) if token:
            replace_header(headers, "Authorization", f"Bearer {interpolate(token, variables)}")
        case BasicAuth(username=username, password=password) if username and password:
            if not encode_basic:
                # Rendered by the caller; no explicit Authorization may remain
                remove_header(headers, "Authorization")
                return (username, password)
            replace_header(headers, "Authorization", f"Basic {basic_credentials(username, password)}")
        case ApiKeyAuth(key=key, value=value) if key and value:
            replace_header(headers, key, interpolate(value, variables))
        case _:
            pass
    return None


def basic_credentials(username: str, password: str) -> str:
    """Base64 of ``username:password``."""
    return base64.b64encode(f"{username}:{password}".encode()).decode("ascii")


def resolve_body(
    method: HttpMethod,
    body: Body,
    variables: Sequence[EnvironmentVariable],
    headers: dict[str, str],
) -> tuple[str | None, BodyFormat | None]:
    """Derive the payload and set Content-Type in place.

    GET and HEAD never carry a body. Only raw and urlencoded bodies produce a
    payload.

    Returns:
        (payload, format) or (None, None)
    """
    if method in BODYLESS_METHODS:
        return None, None

    match body:
        case RawBody(content=content, raw_type=raw_type) if content:
            if raw_type == "json" and find_header(headers, "Content-Type") is None:
                headers["Content-Type"] = JSON_CONTENT_TYPE
            return interpolate(content, variables), raw_type
        case UrlEncodedBody(content=content) if content:
            pairs = parse_qsl(interpolate(content, variables).removeprefix("?"), keep_blank_values=True)
            replace_header(headers, "Content-Type", FORM_CONTENT_TYPE)
            return urlencode(pairs), "urlencoded"
        case _:
            return None, None


def find_header(headers: dict[str, str], name: str) -> str | None:
    """Return the stored key matching ``name`` case-insensitively, if any."""
    wanted = name.lower()
    for key in headers:
        if key.lower() == wanted:
            return key
    return None


def remove_header(headers: dict[str, str], name: str) -> None:
    """Drop every key matching ``name`` case-insensitively."""
    wanted = name.lower()
    for key in [key for key in headers if key.lower() == wanted]:
        del headers[key]


def replace_header(headers: dict[str, str], name: str, value: str) -> None:
    """Set ``name`` after removing any differently-cased duplicate."""
    remove_header(headers, name)
    headers[name] = value
