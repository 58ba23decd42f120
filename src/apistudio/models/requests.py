"""Pydantic models for stored requests and collections."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Annotated, Literal
from uuid import uuid4

from pydantic import BaseModel, Field


def new_id() -> str:
    """Generate a stable identifier for a stored entity."""
    return uuid4().hex


def utc_now() -> datetime:
    """Current time, timezone-aware."""
    return datetime.now(UTC)


class HttpMethod(StrEnum):
    """Supported HTTP methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class KeyValue(BaseModel):
    """A toggleable key/value row."""

    id: str = Field(default_factory=new_id)
    key: str = ""
    value: str = ""
    enabled: bool = True

    @property
    def is_effective(self) -> bool:
        """Whether the row takes part in materialization."""
        return self.enabled and bool(self.key) and bool(self.value)


class Header(KeyValue):
    """Request header row."""


class Param(KeyValue):
    """Query parameter row."""


# Body variants


class NoBody(BaseModel):
    type: Literal["none"] = "none"


class RawBody(BaseModel):
    type: Literal["raw"] = "raw"
    content: str = ""
    raw_type: Literal["json", "text", "xml", "html"] = "json"


class FormBody(BaseModel):
    """Reserved: multipart form bodies are stored but never sent."""

    type: Literal["form"] = "form"
    content: str = ""


class UrlEncodedBody(BaseModel):
    type: Literal["urlencoded"] = "urlencoded"
    content: str = ""  # e.g. "a=1&b=2"


Body = Annotated[NoBody | RawBody | FormBody | UrlEncodedBody, Field(discriminator="type")]


# Auth variants


class NoAuth(BaseModel):
    type: Literal["none"] = "none"


class BearerAuth(BaseModel):
    type: Literal["bearer"] = "bearer"
    token: str = ""


class BasicAuth(BaseModel):
    type: Literal["basic"] = "basic"
    username: str = ""
    password: str = ""


class ApiKeyAuth(BaseModel):
    type: Literal["apikey"] = "apikey"
    key: str = ""
    value: str = ""


Auth = Annotated[NoAuth | BearerAuth | BasicAuth | ApiKeyAuth, Field(discriminator="type")]


class ApiRequest(BaseModel):
    """A declarative HTTP request definition."""

    id: str = Field(default_factory=new_id)
    name: str = "Untitled Request"
    method: HttpMethod = HttpMethod.GET
    url: str = ""
    headers: list[Header] = []
    params: list[Param] = []
    body: Body = NoBody()
    auth: Auth = NoAuth()
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def touch(self) -> "ApiRequest":
        """Return a copy with a refreshed update timestamp."""
        return self.model_copy(update={"updated_at": utc_now()})


class Collection(BaseModel):
    """A named group of saved requests."""

    id: str = Field(default_factory=new_id)
    name: str = "New Collection"
    description: str = ""
    requests: list[ApiRequest] = []
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
