"""Contains exceptions raised when running git commands."""


class GitCommandError(Exception):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        """Initializes the exception with the failed command and its output."""
        super().__init__(f"Command '{' '.join(command)}' failed with exit code {returncode}: {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class GitUnavailableError(Exception):
    """Raised when the git executable cannot be found."""

    pass
