"""Pydantic models for materialized requests and execution results."""

from typing import Any

from pydantic import BaseModel, model_validator

from apistudio.models.requests import HttpMethod


class MaterializedRequest(BaseModel):
    """A fully resolved, wire-ready HTTP call."""

    method: HttpMethod
    url: str
    headers: dict[str, str] = {}
    body: str | None = None


class ApiResponse(BaseModel):
    """Normalized response of an executed request."""

    status: int
    status_text: str
    headers: dict[str, str]
    data: Any  # parsed JSON when the body is valid JSON, raw text otherwise
    time: float  # milliseconds
    size: int  # bytes


class ExecutionResult(BaseModel):
    """Outcome of one execution: a response or an error message, never both."""

    response: ApiResponse | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "ExecutionResult":
        """Ensure exactly one of response/error is set."""
        if (self.response is None) == (self.error is None):
            raise ValueError("ExecutionResult needs exactly one of response or error")
        return self

    @property
    def ok(self) -> bool:
        return self.response is not None
