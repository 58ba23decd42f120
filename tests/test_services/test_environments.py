"""Tests for environment activation and draft editing."""

import pytest

from apistudio.models.environments import Environment, EnvironmentVariable
from apistudio.services.environments import (
    activate,
    active_environment,
    active_variables,
    begin_edit,
    commit,
    delete_environment,
    discard,
    find_environment,
    new_environment,
    save_environment,
    set_variable,
)


class TestActivation:
    """Tests for exclusive activation."""

    def test_activate_is_exclusive(self, environments: list[Environment]) -> None:
        """Test activating one environment deactivates all others."""
        staging = environments[1]
        result = activate(environments, staging.id)

        assert [e.is_active for e in result] == [False, True]
        assert active_environment(result) == result[1]

    def test_activate_does_not_mutate_input(self, environments: list[Environment]) -> None:
        """Test the input snapshot is left untouched."""
        activate(environments, environments[1].id)
        assert environments[0].is_active is True

    def test_deactivate_all(self, environments: list[Environment]) -> None:
        """Test passing None leaves no environment active."""
        result = activate(environments, None)

        assert active_environment(result) is None
        assert active_variables(result) == []

    def test_activate_unknown(self, environments: list[Environment]) -> None:
        """Test activating an unknown id fails."""
        with pytest.raises(ValueError):
            activate(environments, "missing")

    def test_active_variables(
        self,
        environments: list[Environment],
        variables: list[EnvironmentVariable],
    ) -> None:
        """Test variables come from the active environment."""
        assert active_variables(environments) == variables

    def test_delete_active_leaves_none_active(self, environments: list[Environment]) -> None:
        """Test deleting the active environment leaves none active."""
        result = delete_environment(environments, environments[0].id)

        assert len(result) == 1
        assert active_environment(result) is None

    def test_find_by_name_or_id(self, environments: list[Environment]) -> None:
        """Test lookups work with either name or id."""
        staging = environments[1]

        assert find_environment(environments, "staging") == staging
        assert find_environment(environments, staging.id) == staging

        with pytest.raises(ValueError) as exc_info:
            find_environment(environments, "prod")
        assert "Environment not found" in str(exc_info.value)


class TestDraftEditing:
    """Tests for begin_edit / commit / discard."""

    def test_edit_does_not_touch_committed(self, environments: list[Environment]) -> None:
        """Test changes to a draft leave the committed value alone."""
        committed = environments[0]
        draft = set_variable(begin_edit(committed), "token", "changed")

        assert commit(draft).variables[1].value == "changed"
        assert committed.variables[1].value == "secret-token"

    def test_discard_returns_committed(self, environments: list[Environment]) -> None:
        """Test discarding yields the original value."""
        committed = environments[0]
        draft = set_variable(begin_edit(committed), "token", "changed")

        assert discard(draft) == committed

    def test_new_draft(self) -> None:
        """Test a draft without committed value is new and discards to None."""
        draft = begin_edit()

        assert draft.is_new is True
        assert draft.environment.name == "New Environment"
        assert discard(draft) is None

    def test_set_variable_appends_new_key(self) -> None:
        """Test setting an unknown key adds an enabled variable."""
        draft = set_variable(begin_edit(new_environment("dev")), "host", "localhost")
        variable = draft.environment.variables[0]

        assert (variable.key, variable.value, variable.enabled) == ("host", "localhost", True)

    def test_set_variable_disabled(self) -> None:
        """Test variables can be stored disabled."""
        draft = set_variable(begin_edit(), "host", "localhost", enabled=False)
        assert draft.environment.variables[0].enabled is False

    def test_commit_then_save_inserts_or_replaces(self, environments: list[Environment]) -> None:
        """Test saving a committed draft replaces by id or appends."""
        edited = commit(set_variable(begin_edit(environments[1]), "user", "ops"))
        created = commit(begin_edit())

        result = save_environment(save_environment(environments, edited), created)

        assert len(result) == 3
        assert result[1].variables[2].value == "ops"
        assert result[2].id == created.id
