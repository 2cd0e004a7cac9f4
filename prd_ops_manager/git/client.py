"""Git client backed by the git command line executable."""

import shutil
import subprocess
from pathlib import Path

import structlog

from prd_ops_manager.git.abc import GitClientBase
from prd_ops_manager.git.exceptions import GitCommandError, GitUnavailableError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class GitCLIClient(GitClientBase):
    """Runs git as a subprocess inside a working directory."""

    def __init__(self, working_directory: Path | None = None, git_executable: str = "git") -> None:
        """Initialize the client.

        Args:
            working_directory (Path | None): Directory git commands run in. Defaults to the process working directory.
            git_executable (str): Name or path of the git executable.
        """
        self.working_directory = working_directory
        self.git_executable = git_executable

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Run a git command and return the completed process."""
        command = [self.git_executable, *args]
        logger.debug("Running git command", command=" ".join(command), cwd=str(self.working_directory or Path.cwd()))
        try:
            result = subprocess.run(
                command,
                cwd=self.working_directory,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
            )
        except FileNotFoundError as exc:
            raise GitUnavailableError(f"git executable not found: {self.git_executable}") from exc
        if check and result.returncode != 0:
            raise GitCommandError(command, result.returncode, result.stderr)
        return result

    def is_available(self) -> bool:
        """Return whether the git executable is on the PATH."""
        return shutil.which(self.git_executable) is not None

    def is_inside_work_tree(self) -> bool:
        """Return whether the working directory is inside a git work tree."""
        try:
            result = self._run("rev-parse", "--is-inside-work-tree", check=False)
        except GitUnavailableError:
            return False
        return result.returncode == 0 and result.stdout.strip() == "true"

    def repository_root(self) -> Path | None:
        """Return the top-level directory of the repository, or None outside of one."""
        try:
            result = self._run("rev-parse", "--show-toplevel", check=False)
        except GitUnavailableError:
            return None
        if result.returncode != 0 or not result.stdout.strip():
            return None
        return Path(result.stdout.strip())

    def current_branch(self) -> str:
        """Return the checked-out branch name.

        git reports "HEAD" for a detached HEAD. In a repository with no commits
        rev-parse fails, so the name of the unborn branch is read from the
        symbolic ref instead. An empty string is returned when neither works.
        """
        try:
            result = self._run("rev-parse", "--abbrev-ref", "HEAD", check=False)
            if result.returncode == 0:
                return result.stdout.strip()
            result = self._run("symbolic-ref", "--short", "-q", "HEAD", check=False)
        except GitUnavailableError:
            return ""
        if result.returncode != 0:
            return ""
        return result.stdout.strip()

    def branch_exists(self, name: str) -> bool:
        """Return whether refs/heads/<name> exists."""
        result = self._run("show-ref", "--verify", "--quiet", f"refs/heads/{name}", check=False)
        return result.returncode == 0

    def create_branch(self, name: str) -> None:
        """Create a branch from the current commit and switch to it."""
        self._run("checkout", "-b", name)
        logger.debug("Created and switched to branch", branch=name)
