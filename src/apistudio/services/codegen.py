"""Code snippet generation for saved requests."""

import json
import pprint
import shlex
from collections.abc import Callable, Sequence
from enum import StrEnum

from apistudio.models.environments import EnvironmentVariable
from apistudio.models.requests import ApiRequest, HttpMethod
from apistudio.services.resolver import ResolvedRequest, find_header, resolve


class CodeTarget(StrEnum):
    """Supported snippet targets."""

    CURL = "curl"
    FETCH = "fetch"
    PYTHON = "python"
    AXIOS = "axios"


Emitter = Callable[[ApiRequest, Sequence[EnvironmentVariable]], str]

RAW_CONTENT_TYPES = {"text": "text/plain", "xml": "application/xml", "html": "text/html"}


def _resolve(request: ApiRequest, variables: Sequence[EnvironmentVariable]) -> ResolvedRequest:
    # Snippets are best effort: no URL validation, Basic credentials stay readable
    return resolve(request, variables, strict=False, encode_basic=False)


def _explicit_headers(resolved: ResolvedRequest) -> dict[str, str]:
    """Headers plus the Content-Type of a text, xml or html raw body.

    curl, fetch and axios pick their own Content-Type for string payloads
    when none is given.
    """
    headers = dict(resolved.headers)
    content_type = RAW_CONTENT_TYPES.get(resolved.body_format or "")
    if content_type is not None and find_header(headers, "Content-Type") is None:
        headers["Content-Type"] = content_type
    return headers


def _is_json_body(resolved: ResolvedRequest) -> bool:
    """Whether the body is a JSON raw body that actually parses."""
    if resolved.body_format != "json" or resolved.body is None:
        return False
    try:
        json.loads(resolved.body)
    except json.JSONDecodeError:
        return False
    return True


def _dq(value: str) -> str:
    """Double-quoted string literal, valid in both Python and JavaScript."""
    return json.dumps(value, ensure_ascii=False)


def _sq(value: str) -> str:
    """Single-quoted JavaScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def _indent_tail(text: str, prefix: str) -> str:
    """Indent every line but the first."""
    lines = text.strip().splitlines()
    return "\n".join([lines[0], *(prefix + line for line in lines[1:])])


def emit_curl(request: ApiRequest, variables: Sequence[EnvironmentVariable] = ()) -> str:
    """Render a request as a curl command."""
    resolved = _resolve(request, variables)

    if resolved.method == HttpMethod.HEAD:
        parts = ["curl -I"]
    else:
        parts = [f"curl -X {resolved.method}"]

    for key, value in _explicit_headers(resolved).items():
        parts.append(f"-H {shlex.quote(f'{key}: {value}')}")

    if resolved.basic_auth is not None:
        username, password = resolved.basic_auth
        parts.append(f"-u {shlex.quote(f'{username}:{password}')}")

    if resolved.body is not None:
        parts.append(f"--data-raw {shlex.quote(resolved.body)}")

    parts.append(shlex.quote(resolved.url))
    return " \\\n  ".join(parts)


def emit_fetch(request: ApiRequest, variables: Sequence[EnvironmentVariable] = ()) -> str:
    """Render a request as a browser fetch() call."""
    resolved = _resolve(request, variables)

    headers = [
        f"    {_dq(key)}: {_dq(value)}" for key, value in _explicit_headers(resolved).items()
    ]
    if resolved.basic_auth is not None:
        credentials = ":".join(resolved.basic_auth)
        headers.append(f'    "Authorization": "Basic " + btoa({_dq(credentials)})')

    code = f"const response = await fetch({_dq(resolved.url)}, {{\n"
    code += f"  method: {_dq(resolved.method)}"
    if headers:
        code += ",\n  headers: {\n" + ",\n".join(headers) + "\n  }"

    if resolved.body is not None:
        if _is_json_body(resolved):
            body = f"JSON.stringify({_indent_tail(resolved.body, '  ')})"
        else:
            body = _dq(resolved.body)
        code += f",\n  body: {body}"

    code += "\n});\n\nconst data = await response.json();"
    return code


def emit_python(request: ApiRequest, variables: Sequence[EnvironmentVariable] = ()) -> str:
    """Render a request as a Python ``requests`` script."""
    resolved = _resolve(request, variables)
    code = "import requests\n\n"
    code += f"url = {_dq(resolved.base_url)}\n\n"
    arguments = ["url"]

    if resolved.query:
        keys = [key for key, _ in resolved.query]
        if len(set(keys)) == len(keys):
            entries = [f"    {_dq(key)}: {_dq(value)}" for key, value in resolved.query]
            code += "params = {\n" + ",\n".join(entries) + "\n}\n\n"
        else:
            entries = [f"    ({_dq(key)}, {_dq(value)})" for key, value in resolved.query]
            code += "params = [\n" + ",\n".join(entries) + "\n]\n\n"
        arguments.append("params=params")

    if resolved.headers:
        entries = [f"    {_dq(key)}: {_dq(value)}" for key, value in resolved.headers.items()]
        code += "headers = {\n" + ",\n".join(entries) + "\n}\n\n"
        arguments.append("headers=headers")

    if resolved.body is not None:
        if _is_json_body(resolved):
            parsed = json.loads(resolved.body)
            code += f"data = {pprint.pformat(parsed, sort_dicts=False)}\n\n"
            arguments.append("json=data")
        else:
            code += f"data = {_dq(resolved.body)}\n\n"
            arguments.append("data=data")

    if resolved.basic_auth is not None:
        username, password = resolved.basic_auth
        arguments.append(f"auth=({_dq(username)}, {_dq(password)})")

    code += f"response = requests.{resolved.method.lower()}({', '.join(arguments)})\n\n"
    code += "print(response.json())"
    return code


def emit_axios(request: ApiRequest, variables: Sequence[EnvironmentVariable] = ()) -> str:
    """Render a request as a Node.js axios call."""
    resolved = _resolve(request, variables)

    fields = [
        f"  method: {_sq(resolved.method.lower())}",
        f"  url: {_sq(resolved.url)}",
    ]

    headers = _explicit_headers(resolved)
    if headers:
        entries = [f"    {_sq(key)}: {_sq(value)}" for key, value in headers.items()]
        fields.append("  headers: {\n" + ",\n".join(entries) + "\n  }")

    if resolved.basic_auth is not None:
        username, password = resolved.basic_auth
        fields.append(
            "  auth: {\n"
            f"    username: {_sq(username)},\n"
            f"    password: {_sq(password)}\n"
            "  }"
        )

    if resolved.body is not None:
        if _is_json_body(resolved):
            fields.append(f"  data: {_indent_tail(resolved.body, '  ')}")
        else:
            fields.append(f"  data: {_sq(resolved.body)}")

    code = "const axios = require('axios');\n\n"
    code += "const config = {\n" + ",\n".join(fields) + "\n};\n\n"
    code += (
        "axios(config)\n"
        "  .then(response => {\n"
        "    console.log(response.data);\n"
        "  })\n"
        "  .catch(error => {\n"
        "    console.error(error);\n"
        "  });"
    )
    return code


EMITTERS: dict[CodeTarget, Emitter] = {
    CodeTarget.CURL: emit_curl,
    CodeTarget.FETCH: emit_fetch,
    CodeTarget.PYTHON: emit_python,
    CodeTarget.AXIOS: emit_axios,
}


def emit(
    target: CodeTarget | str,
    request: ApiRequest,
    variables: Sequence[EnvironmentVariable] = (),
) -> str:
    """Render a request for the given target.

    Raises:
        ValueError: If the target is unknown
    """
    try:
        emitter = EMITTERS[CodeTarget(target)]
    except ValueError:
        valid = ", ".join(t.value for t in CodeTarget)
        raise ValueError(f"Unknown code target: {target}. Use one of: {valid}") from None
    return emitter(request, variables)
