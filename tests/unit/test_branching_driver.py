"""Unit tests for the branching.driver module."""

from typing import Callable
from unittest.mock import patch

import pytest

from prd_ops_manager.branching.driver import create_unique_branch, ensure_branch
from prd_ops_manager.branching.exceptions import BranchCreationError
from prd_ops_manager.branching.models import BranchAction
from prd_ops_manager.git.exceptions import GitCommandError, GitUnavailableError


def test_skips_when_git_is_unavailable(make_git_client: Callable) -> None:
    """Without git, nothing is done and the result says why."""
    client = make_git_client(available=False)
    result = ensure_branch(client, prompt="Add OAuth login")
    assert result.skipped is True
    assert result.decision is None
    assert result.branch_name is None
    assert client.created == []
    assert result.describe() == "Skipping branch checks: git not found"


def test_skips_outside_a_repository(make_git_client: Callable) -> None:
    """Outside a work tree, nothing is done."""
    client = make_git_client(inside_work_tree=False)
    result = ensure_branch(client, prompt="Add OAuth login")
    assert result.skipped is True
    assert result.skipped_reason == "not inside a git repository"
    assert client.created == []


def test_skips_when_current_branch_is_unknown(make_git_client: Callable) -> None:
    """An undeterminable current branch skips branch management."""
    client = make_git_client(current_branch="")
    result = ensure_branch(client, prompt="Add OAuth login")
    assert result.skipped is True
    assert client.created == []


def test_creates_feature_branch_from_main(make_git_client: Callable) -> None:
    """On main, the feature branch is created and checked out."""
    client = make_git_client()
    result = ensure_branch(client, prompt="Add OAuth login\nMore details here.")
    assert result.created is True
    assert result.decision is not None
    assert result.decision.action == BranchAction.CREATE
    assert result.branch_name == "feature/add-oauth-login"
    assert client.created == ["feature/add-oauth-login"]
    assert client.current_branch() == "feature/add-oauth-login"
    assert result.describe() == "Created branch feature/add-oauth-login"


def test_keeps_desired_branch(make_git_client: Callable) -> None:
    """Being on the desired branch is reported and nothing is created."""
    client = make_git_client(current_branch="feature/add-oauth-login", branches={"main", "feature/add-oauth-login"})
    result = ensure_branch(client, feature_name="add oauth login")
    assert result.decision is not None
    assert result.decision.action == BranchAction.KEEP
    assert result.created is False
    assert client.created == []
    assert result.describe() == "Already on branch feature/add-oauth-login"


def test_reuses_related_branch(make_git_client: Callable) -> None:
    """A related branch is reused."""
    client = make_git_client(current_branch="fix/oauth-token-refresh", branches={"main", "fix/oauth-token-refresh"})
    result = ensure_branch(client, prompt="Add OAuth login")
    assert result.decision is not None
    assert result.decision.action == BranchAction.REUSE
    assert client.created == []
    assert result.describe() == "Using existing branch fix/oauth-token-refresh"


def test_creates_suffixed_branch_when_desired_exists(make_git_client: Callable) -> None:
    """An unrelated branch with an existing desired branch creates the -2 variant."""
    client = make_git_client(current_branch="chore/cleanup", branches={"main", "chore/cleanup", "feature/add-oauth-login"})
    result = ensure_branch(client, prompt="Add OAuth login")
    assert result.branch_name == "feature/add-oauth-login-2"
    assert client.created == ["feature/add-oauth-login-2"]


def test_explicit_branch_and_prefix(make_git_client: Callable) -> None:
    """The explicit branch name wins over the generated one, the prefix applies otherwise."""
    client = make_git_client()
    assert ensure_branch(client, prompt="Add OAuth login", branch_name="team/oauth").branch_name == "team/oauth"

    client = make_git_client()
    assert ensure_branch(client, prompt="Add OAuth login", branch_prefix="task").branch_name == "task/add-oauth-login"


def test_dry_run_does_not_create(make_git_client: Callable) -> None:
    """A dry run reports the branch it would create."""
    client = make_git_client()
    result = ensure_branch(client, prompt="Add OAuth login", dry_run=True)
    assert result.created is False
    assert result.branch_name == "feature/add-oauth-login"
    assert client.created == []
    assert result.describe() == "Would create branch feature/add-oauth-login"


def test_creation_failure_is_reported_not_raised(make_git_client: Callable) -> None:
    """A failing create becomes an error on the result."""
    client = make_git_client()
    error = GitCommandError(["git", "checkout", "-b", "feature/add-oauth-login"], 128, "fatal: not a valid branch name")
    with patch.object(client, "create_branch", side_effect=error):
        result = ensure_branch(client, prompt="Add OAuth login")
    assert result.created is False
    assert result.error is not None
    assert "not a valid branch name" in result.error
    assert result.describe().startswith("Branch management failed:")


def test_git_disappearing_during_inspection_skips(make_git_client: Callable) -> None:
    """Errors while checking branch existence skip branch management."""
    client = make_git_client()
    with patch.object(client, "branch_exists", side_effect=GitUnavailableError("git executable not found: git")):
        result = ensure_branch(client, prompt="Add OAuth login")
    assert result.skipped is True
    assert client.created == []


class TestCreateUniqueBranch:
    """Tests for create_unique_branch."""

    def test_creates_requested_name(self, make_git_client: Callable) -> None:
        """Without interference the requested name is created."""
        client = make_git_client()
        assert create_unique_branch(client, "feature/x", "feature/x") == "feature/x"
        assert client.created == ["feature/x"]

    def test_picks_next_name_when_taken_concurrently(self, make_git_client: Callable) -> None:
        """If the branch appears between check and create, the next free name is used."""
        client = make_git_client()
        original_create = client.create_branch
        raced = {"done": False}

        def create_with_race(name: str) -> None:
            if not raced["done"]:
                raced["done"] = True
                client.branches.add(name)
            original_create(name)

        with patch.object(client, "create_branch", side_effect=create_with_race):
            assert create_unique_branch(client, "feature/x", "feature/x") == "feature/x-2"
        assert client.created == ["feature/x-2"]

    def test_gives_up_after_max_attempts(self, make_git_client: Callable) -> None:
        """Losing the race every time raises BranchCreationError."""
        client = make_git_client()

        def always_taken(name: str) -> None:
            client.branches.add(name)
            raise GitCommandError(["git", "checkout", "-b", name], 128, f"fatal: a branch named '{name}' already exists")

        with patch.object(client, "create_branch", side_effect=always_taken):
            with pytest.raises(BranchCreationError):
                create_unique_branch(client, "feature/x", "feature/x", max_attempts=2)

    def test_other_failures_are_not_retried(self, make_git_client: Callable) -> None:
        """Failures that are not name collisions raise immediately."""
        client = make_git_client()
        error = GitCommandError(["git", "checkout", "-b", "bad..name"], 128, "fatal: 'bad..name' is not a valid branch name")
        with patch.object(client, "create_branch", side_effect=error) as mock_create:
            with pytest.raises(BranchCreationError) as exc_info:
                create_unique_branch(client, "bad..name", "bad..name")
        assert mock_create.call_count == 1
        assert exc_info.value.branch_name == "bad..name"
