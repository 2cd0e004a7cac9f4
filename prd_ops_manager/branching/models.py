"""Internal data models for branch reconciliation."""

from dataclasses import dataclass
from enum import Enum

from prd_ops_manager.utils.constants import DEFAULT_PROTECTED_BRANCHES


class BranchAction(str, Enum):
    """Enum for branch reconciliation decisions."""

    KEEP = "keep"
    REUSE = "reuse"
    CREATE = "create"


@dataclass(frozen=True)
class BranchReconcileConfig:
    """Inputs of a single branch reconciliation."""

    current_branch: str
    desired_slug: str
    desired_branch: str
    protected_branches: tuple[str, ...] = DEFAULT_PROTECTED_BRANCHES


@dataclass(frozen=True)
class BranchDecision:
    """Outcome of a branch reconciliation.

    For KEEP and REUSE, branch_name is the current branch. For CREATE it is
    the unused name that should be created and switched to.
    """

    action: BranchAction
    branch_name: str
