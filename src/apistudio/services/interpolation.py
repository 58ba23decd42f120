"""Environment variable interpolation."""

from collections.abc import Iterable

from apistudio.models.environments import EnvironmentVariable


def placeholder(key: str) -> str:
    """Return the placeholder token for a variable key."""
    return "{{" + key + "}}"


def interpolate(text: str, variables: Iterable[EnvironmentVariable]) -> str:
    """Replace ``{{key}}`` placeholders with the values of enabled variables.

    Variables are applied one after another, in the order given, each as a
    single global replacement over the accumulated result. Placeholders of
    unknown or disabled variables are left untouched so unresolved names stay
    visible. There is no re-substitution loop: a value containing another
    placeholder is only resolved if that variable comes later in the list.

    Args:
        text: Text that may contain placeholders
        variables: Environment variables to substitute

    Returns:
        The interpolated text
    """
    result = text
    for variable in variables:
        if variable.enabled:
            result = result.replace(placeholder(variable.key), variable.value)
    return result
