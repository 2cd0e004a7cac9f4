"""Applies branch reconciliation decisions to a git repository.

Branch management is a convenience for the surrounding workflow: every
failure in here is logged and reported on the result, never raised.
"""

from typing import Iterable

import structlog

from prd_ops_manager.branching.exceptions import BranchCreationError
from prd_ops_manager.branching.models import BranchAction, BranchDecision
from prd_ops_manager.branching.reconciler import build_reconcile_config, decide_branch_action, unique_branch_name
from prd_ops_manager.branching.results import EnsureBranchResult
from prd_ops_manager.git.abc import GitClientBase
from prd_ops_manager.git.exceptions import GitCommandError, GitUnavailableError
from prd_ops_manager.utils.constants import DEFAULT_BRANCH_PREFIX, DEFAULT_PROTECTED_BRANCHES, MAX_BRANCH_CREATE_ATTEMPTS

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def create_unique_branch(
    git_client: GitClientBase,
    desired_branch: str,
    branch_name: str,
    max_attempts: int = MAX_BRANCH_CREATE_ATTEMPTS,
) -> str:
    """Create and switch to branch_name, picking a new unique name if it gets taken first.

    Another process can create the same branch between the existence check
    and the create. When creation fails and the branch now exists, a fresh
    unique name is derived from desired_branch and creation is retried.

    Returns:
        str: The name of the branch that was created.

    Raises:
        BranchCreationError: If creation fails for any other reason, or keeps
            losing the race after max_attempts.
    """
    for attempt in range(1, max_attempts + 1):
        try:
            git_client.create_branch(branch_name)
            return branch_name
        except GitCommandError as exc:
            if not git_client.branch_exists(branch_name):
                raise BranchCreationError(branch_name, exc.stderr.strip() or str(exc)) from exc
            logger.warning(
                "Branch was created by someone else before we could create it",
                branch=branch_name,
                attempt=attempt,
                max_attempts=max_attempts,
            )
            branch_name = unique_branch_name(desired_branch, git_client.branch_exists)
    raise BranchCreationError(branch_name, f"name was taken on each of {max_attempts} attempts")


def ensure_branch(
    git_client: GitClientBase,
    prompt: str | None = None,
    feature_name: str | None = None,
    branch_name: str | None = None,
    branch_prefix: str = DEFAULT_BRANCH_PREFIX,
    protected_branches: Iterable[str] = DEFAULT_PROTECTED_BRANCHES,
    dry_run: bool = False,
) -> EnsureBranchResult:
    """Make sure work on a feature happens on a suitable branch.

    Args:
        git_client (GitClientBase): Client used to inspect and modify the repository.
        prompt (str | None): Feature prompt; its first line is slugified when no feature name is given.
        feature_name (str | None): Short feature name used for the slug.
        branch_name (str | None): Explicit branch name to use instead of <prefix>/<slug>.
        branch_prefix (str): Namespace of generated branch names.
        protected_branches (Iterable[str]): Branches that are never worked on directly.
        dry_run (bool): Decide but do not create any branch.

    Returns:
        EnsureBranchResult: The decision and whether a branch was created.
    """
    if not git_client.is_available():
        logger.warning("git not found, skipping branch checks")
        return EnsureBranchResult(skipped_reason="git not found")

    if not git_client.is_inside_work_tree():
        logger.warning("Not inside a git repository, skipping branch checks")
        return EnsureBranchResult(skipped_reason="not inside a git repository")

    current_branch = git_client.current_branch()
    if not current_branch:
        logger.warning("Could not determine the current branch, skipping branch checks")
        return EnsureBranchResult(skipped_reason="current branch could not be determined")

    config = build_reconcile_config(
        current_branch=current_branch,
        feature_name=feature_name,
        prompt=prompt,
        branch_name=branch_name,
        branch_prefix=branch_prefix,
        protected_branches=protected_branches,
    )
    logger.debug(
        "Reconciling branch",
        current_branch=config.current_branch,
        desired_branch=config.desired_branch,
        slug=config.desired_slug,
    )

    try:
        decision = decide_branch_action(config, git_client.branch_exists)
    except (GitCommandError, GitUnavailableError) as exc:
        logger.warning("Failed to inspect existing branches, skipping branch checks", error=str(exc))
        return EnsureBranchResult(skipped_reason=str(exc))

    if decision.action == BranchAction.KEEP:
        logger.info("Already on branch", branch=decision.branch_name)
        return EnsureBranchResult(decision=decision)

    if decision.action == BranchAction.REUSE:
        logger.info("Using existing branch", branch=decision.branch_name)
        return EnsureBranchResult(decision=decision)

    if dry_run:
        logger.info("Dry run, not creating branch", branch=decision.branch_name)
        return EnsureBranchResult(decision=decision)

    try:
        created_branch = create_unique_branch(git_client, config.desired_branch, decision.branch_name)
    except (BranchCreationError, GitUnavailableError) as exc:
        logger.warning("Failed to create branch, continuing on the current branch", branch=decision.branch_name, error=str(exc))
        return EnsureBranchResult(decision=decision, error=str(exc))

    logger.info("Created branch", branch=created_branch)
    return EnsureBranchResult(decision=BranchDecision(BranchAction.CREATE, created_branch), created=True)
