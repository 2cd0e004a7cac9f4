"""Fixtures shared by unit and integration tests."""

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Generator, Iterable

import pytest
import structlog

from prd_ops_manager.git.abc import GitClientBase
from prd_ops_manager.git.exceptions import GitCommandError


class InMemoryGitClient(GitClientBase):
    """Git client backed by a set of branch names instead of a repository."""

    def __init__(
        self,
        current_branch: str = "main",
        branches: Iterable[str] = ("main",),
        available: bool = True,
        inside_work_tree: bool = True,
        repo_root: Path | None = None,
    ) -> None:
        """Initialize the fake with a current branch and the set of existing branches."""
        self._current_branch = current_branch
        self.branches = set(branches)
        self.available = available
        self.inside_work_tree = inside_work_tree
        self.repo_root = repo_root
        self.created: list[str] = []
        self.exists_calls: list[str] = []

    def is_available(self) -> bool:
        """Return whether git is reported as available."""
        return self.available

    def is_inside_work_tree(self) -> bool:
        """Return whether the fake is inside a work tree."""
        return self.inside_work_tree

    def repository_root(self) -> Path | None:
        """Return the configured repository root."""
        return self.repo_root

    def current_branch(self) -> str:
        """Return the current branch."""
        return self._current_branch

    def branch_exists(self, name: str) -> bool:
        """Return whether the branch is in the set."""
        self.exists_calls.append(name)
        return name in self.branches

    def create_branch(self, name: str) -> None:
        """Add the branch to the set and make it current, failing like git if it exists."""
        if name in self.branches:
            raise GitCommandError(["git", "checkout", "-b", name], 128, f"fatal: a branch named '{name}' already exists")
        self.branches.add(name)
        self.created.append(name)
        self._current_branch = name


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_git_client() -> Callable[..., InMemoryGitClient]:
    """Factory for in-memory git clients."""
    return InMemoryGitClient


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """Create a git repository with a single commit on main."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "--initial-branch=main")
    _git(repo, "config", "user.email", "tests@example.com")
    _git(repo, "config", "user.name", "Tests")
    _git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("# Test repository\n", encoding="utf-8")
    _git(repo, "add", "README.md")
    _git(repo, "commit", "-m", "Initial commit")
    return repo
