"""Pydantic models for environments and their variables."""

from pydantic import BaseModel, Field

from apistudio.models.requests import KeyValue, new_id


class EnvironmentVariable(KeyValue):
    """A substitutable variable, referenced as ``{{key}}`` in request text."""


class Environment(BaseModel):
    """A named set of variables."""

    id: str = Field(default_factory=new_id)
    name: str = "New Environment"
    variables: list[EnvironmentVariable] = []
    is_active: bool = False


class EnvironmentDraft(BaseModel):
    """An environment being edited, kept apart from its committed value.

    ``original`` is the committed snapshot the draft was started from, or
    None when the draft is a brand new environment.
    """

    environment: Environment
    original: Environment | None = None

    @property
    def is_new(self) -> bool:
        return self.original is None
