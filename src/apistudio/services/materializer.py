"""Request materialization."""

from collections.abc import Sequence

from apistudio.models.environments import EnvironmentVariable
from apistudio.models.requests import ApiRequest
from apistudio.models.responses import MaterializedRequest
from apistudio.services.resolver import resolve


def materialize(
    request: ApiRequest,
    variables: Sequence[EnvironmentVariable] = (),
) -> MaterializedRequest:
    """Resolve a request into a concrete, wire-ready HTTP call.

    Pure and deterministic; performs no network access.

    Args:
        request: The declarative request
        variables: Variables of the active environment

    Returns:
        The final URL, header mapping and optional body

    Raises:
        InvalidUrlError: If the resolved URL is malformed
    """
    resolved = resolve(request, variables, strict=True, encode_basic=True)
    return MaterializedRequest(
        method=resolved.method,
        url=resolved.url,
        headers=resolved.headers,
        body=resolved.body,
    )
