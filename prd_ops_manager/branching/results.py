"""Contains results of branch reconciliation."""

from prd_ops_manager.branching.models import BranchAction, BranchDecision


class EnsureBranchResult:
    """Contains results of the ensure-branch workflow."""

    def __init__(
        self,
        decision: BranchDecision | None = None,
        created: bool = False,
        skipped_reason: str | None = None,
        error: str | None = None,
    ) -> None:
        """Initialize the result with the decision taken and what was done about it."""
        self.decision = decision
        self.created = created
        self.skipped_reason = skipped_reason
        self.error = error

    @property
    def branch_name(self) -> str | None:
        """Name of the branch work should happen on, if one was decided."""
        if self.decision is None:
            return None
        return self.decision.branch_name

    @property
    def skipped(self) -> bool:
        """Whether branch management was skipped entirely."""
        return self.skipped_reason is not None

    def describe(self) -> str:
        """Return a one-line, human readable summary of the outcome."""
        if self.skipped_reason is not None:
            return f"Skipping branch checks: {self.skipped_reason}"
        if self.error is not None:
            return f"Branch management failed: {self.error}"
        if self.decision is None:
            return "No branch decision was made"
        if self.decision.action == BranchAction.KEEP:
            return f"Already on branch {self.decision.branch_name}"
        if self.decision.action == BranchAction.REUSE:
            return f"Using existing branch {self.decision.branch_name}"
        if self.created:
            return f"Created branch {self.decision.branch_name}"
        return f"Would create branch {self.decision.branch_name}"
