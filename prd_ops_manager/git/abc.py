"""Base ABC for git clients."""

from abc import ABC, abstractmethod
from pathlib import Path


class GitClientBase(ABC):
    """Base ABC for git clients.

    Branch reconciliation only ever talks to git through this interface so
    that it can be exercised against an in-memory set of branch names.
    """

    # Environment
    @abstractmethod
    def is_available(self) -> bool:
        """Return whether git can be used at all."""
        pass

    @abstractmethod
    def is_inside_work_tree(self) -> bool:
        """Return whether the working directory is inside a git work tree."""
        pass

    @abstractmethod
    def repository_root(self) -> Path | None:
        """Return the top-level directory of the repository, if there is one."""
        pass

    # Branches
    @abstractmethod
    def current_branch(self) -> str:
        """Return the checked-out branch name, "HEAD" when detached, or "" when unavailable."""
        pass

    @abstractmethod
    def branch_exists(self, name: str) -> bool:
        """Return whether a local branch with the given name exists."""
        pass

    @abstractmethod
    def create_branch(self, name: str) -> None:
        """Create a branch from the current commit and switch to it.

        Fails if the branch already exists.
        """
        pass
