"""Custom exceptions for the branching module."""


class BranchCreationError(Exception):
    """Raised when a new branch could not be created and checked out."""

    def __init__(self, branch_name: str, reason: str) -> None:
        """Initializes the exception with the branch name and the reason creation failed."""
        super().__init__(f"Could not create branch '{branch_name}': {reason}")
        self.branch_name = branch_name
        self.reason = reason
