"""Environment activation and draft editing."""

from apistudio.models.environments import Environment, EnvironmentDraft, EnvironmentVariable


def new_environment(name: str = "New Environment") -> Environment:
    """Create an empty, inactive environment."""
    return Environment(name=name)


def new_variable(key: str = "", value: str = "", enabled: bool = True) -> EnvironmentVariable:
    """Create an environment variable row."""
    return EnvironmentVariable(key=key, value=value, enabled=enabled)


def find_environment(environments: list[Environment], ref: str) -> Environment:
    """Find an environment by id or name.

    Raises:
        ValueError: If no environment matches
    """
    for environment in environments:
        if ref in (environment.id, environment.name):
            return environment
    raise ValueError(f"Environment not found: {ref}")


def activate(environments: list[Environment], environment_id: str | None) -> list[Environment]:
    """Make one environment active and every other one inactive.

    Passing None deactivates all environments.

    Raises:
        ValueError: If the id does not belong to any environment
    """
    if environment_id is not None and not any(e.id == environment_id for e in environments):
        raise ValueError(f"Environment not found: {environment_id}")
    return [
        e.model_copy(update={"is_active": e.id == environment_id}) for e in environments
    ]


def active_environment(environments: list[Environment]) -> Environment | None:
    """Return the active environment, if any."""
    return next((e for e in environments if e.is_active), None)


def active_variables(environments: list[Environment]) -> list[EnvironmentVariable]:
    """Variables of the active environment, or an empty list."""
    environment = active_environment(environments)
    return list(environment.variables) if environment else []


def delete_environment(environments: list[Environment], environment_id: str) -> list[Environment]:
    """Remove an environment. Removing the active one leaves none active."""
    return [e for e in environments if e.id != environment_id]


def begin_edit(committed: Environment | None = None) -> EnvironmentDraft:
    """Start editing a copy of an environment, or a new one when None."""
    if committed is None:
        return EnvironmentDraft(environment=new_environment())
    return EnvironmentDraft(environment=committed.model_copy(deep=True), original=committed)


def set_variable(draft: EnvironmentDraft, key: str, value: str, enabled: bool = True) -> EnvironmentDraft:
    """Set a variable in a draft, updating the first row with that key or adding one."""
    environment = draft.environment.model_copy(deep=True)
    for variable in environment.variables:
        if variable.key == key:
            variable.value = value
            variable.enabled = enabled
            break
    else:
        environment.variables.append(new_variable(key, value, enabled))
    return draft.model_copy(update={"environment": environment})


def commit(draft: EnvironmentDraft) -> Environment:
    """Turn a draft into the committed environment value."""
    return draft.environment.model_copy(deep=True)


def discard(draft: EnvironmentDraft) -> Environment | None:
    """Drop a draft, returning the untouched committed value (None if it was new)."""
    return draft.original


def save_environment(environments: list[Environment], environment: Environment) -> list[Environment]:
    """Insert a committed environment or replace the one with the same id."""
    if any(e.id == environment.id for e in environments):
        return [environment if e.id == environment.id else e for e in environments]
    return [*environments, environment]
