"""Shared test fixtures."""

from pathlib import Path

import pytest

from apistudio.models.environments import Environment, EnvironmentVariable
from apistudio.models.requests import (
    ApiRequest,
    BearerAuth,
    Collection,
    Header,
    HttpMethod,
    Param,
    RawBody,
)
from apistudio.repositories.storage import StorageRepository


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def variables() -> list[EnvironmentVariable]:
    """Variables of a typical local environment."""
    return [
        EnvironmentVariable(key="base", value="http://localhost:8000"),
        EnvironmentVariable(key="token", value="secret-token"),
        EnvironmentVariable(key="user", value="jane"),
        EnvironmentVariable(key="unused", value="nope", enabled=False),
    ]


@pytest.fixture
def sample_request() -> ApiRequest:
    """A POST request using headers, params, a JSON body and bearer auth."""
    return ApiRequest(
        name="Create user",
        method=HttpMethod.POST,
        url="{{base}}/users",
        headers=[
            Header(key="Accept", value="application/json"),
            Header(key="X-Trace", value="off", enabled=False),
        ],
        params=[
            Param(key="notify", value="true"),
            Param(key="by", value="{{user}}"),
        ],
        body=RawBody(content='{"name": "{{user}}"}', raw_type="json"),
        auth=BearerAuth(token="{{token}}"),
    )


@pytest.fixture
def environments(variables: list[EnvironmentVariable]) -> list[Environment]:
    """A local (active) and a staging environment."""
    return [
        Environment(name="local", variables=variables, is_active=True),
        Environment(
            name="staging",
            variables=[
                EnvironmentVariable(key="base", value="https://staging.example.com"),
                EnvironmentVariable(key="token", value="staging-token"),
                EnvironmentVariable(key="user", value="bot"),
            ],
        ),
    ]


@pytest.fixture
def data_dir(
    tmp_path: Path,
    sample_request: ApiRequest,
    environments: list[Environment],
) -> Path:
    """A storage directory holding one collection and two environments."""
    repo = StorageRepository(tmp_path)
    repo.save_collections([Collection(name="Users API", requests=[sample_request])])
    repo.save_environments(environments)
    return tmp_path
