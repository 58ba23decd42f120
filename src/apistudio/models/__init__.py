"""Pydantic models for apistudio."""

from apistudio.models.environments import Environment, EnvironmentDraft, EnvironmentVariable
from apistudio.models.output import FormatOptions
from apistudio.models.requests import (
    ApiKeyAuth,
    ApiRequest,
    Auth,
    BasicAuth,
    BearerAuth,
    Body,
    Collection,
    FormBody,
    Header,
    HttpMethod,
    NoAuth,
    NoBody,
    Param,
    RawBody,
    UrlEncodedBody,
)
from apistudio.models.responses import ApiResponse, ExecutionResult, MaterializedRequest

__all__ = [
    "ApiKeyAuth",
    "ApiRequest",
    "ApiResponse",
    "Auth",
    "BasicAuth",
    "BearerAuth",
    "Body",
    "Collection",
    "Environment",
    "EnvironmentDraft",
    "EnvironmentVariable",
    "ExecutionResult",
    "FormBody",
    "FormatOptions",
    "Header",
    "HttpMethod",
    "MaterializedRequest",
    "NoAuth",
    "NoBody",
    "Param",
    "RawBody",
    "UrlEncodedBody",
]
