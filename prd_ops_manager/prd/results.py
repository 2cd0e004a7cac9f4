"""Contains results of the prepare workflow."""

from pathlib import Path

from prd_ops_manager.branching.results import EnsureBranchResult


class PreparePRDResult:
    """Contains results of the prepare workflow."""

    def __init__(
        self,
        repo_root: Path,
        prompt_text: str,
        prd_file: Path,
        progress_file: Path,
        prompt_file: Path | None = None,
        branch_result: EnsureBranchResult | None = None,
    ) -> None:
        """Initialize the result with the rendered prompt and the files involved."""
        self.repo_root = repo_root
        self.prompt_text = prompt_text
        self.prd_file = prd_file
        self.progress_file = progress_file
        self.prompt_file = prompt_file
        self.branch_result = branch_result
