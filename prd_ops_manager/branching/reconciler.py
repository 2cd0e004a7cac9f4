"""Decides which branch work on a feature should happen on.

Nothing in this module touches git. Existence of branches is queried through
a predicate so the decision can be made against any set of branch names; the
caller is responsible for acting on the returned decision.
"""

from typing import Callable, Iterable

import structlog

from prd_ops_manager.branching.models import BranchAction, BranchDecision, BranchReconcileConfig
from prd_ops_manager.utils.constants import (
    DEFAULT_BRANCH_PREFIX,
    DEFAULT_PROTECTED_BRANCHES,
    RELATED_TOKEN_MIN_LENGTH,
    SLUG_SEPARATOR,
    UNIQUE_SUFFIX_START,
)
from prd_ops_manager.utils.helpers import first_line, generate_branch_name, slugify_feature

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

BranchExistsPredicate = Callable[[str], bool]


def build_reconcile_config(
    current_branch: str,
    feature_name: str | None = None,
    prompt: str | None = None,
    branch_name: str | None = None,
    branch_prefix: str = DEFAULT_BRANCH_PREFIX,
    protected_branches: Iterable[str] = DEFAULT_PROTECTED_BRANCHES,
) -> BranchReconcileConfig:
    """Build the reconciliation inputs for one invocation.

    The slug is taken from the feature name when one is given, otherwise from
    the first line of the prompt. An explicit branch name overrides the
    generated <prefix>/<slug> name but does not change the slug used for the
    relatedness check.
    """
    slug_source = feature_name or first_line(prompt or "")
    desired_slug = slugify_feature(slug_source)
    desired_branch = branch_name or generate_branch_name(desired_slug, prefix=branch_prefix)
    return BranchReconcileConfig(
        current_branch=current_branch,
        desired_slug=desired_slug,
        desired_branch=desired_branch,
        protected_branches=tuple(protected_branches),
    )


def is_branch_related(current_branch: str, slug: str) -> bool:
    """Check whether the current branch plausibly already belongs to the feature described by slug.

    The checks are directional. The branch is related when:

    - the slug is empty,
    - the slug appears in the current branch name,
    - the current branch name, minus everything up to and including its first
      "/", appears in the slug, or
    - any hyphen-separated slug token of at least four characters appears in
      the current branch name.
    """
    if not slug:
        return True
    if slug in current_branch:
        return True

    remainder = current_branch.split("/", 1)[-1]
    if remainder in slug:
        return True

    for token in slug.split(SLUG_SEPARATOR):
        if len(token) >= RELATED_TOKEN_MIN_LENGTH and token in current_branch:
            logger.debug("Slug token found in current branch", token=token, current_branch=current_branch)
            return True

    return False


def unique_branch_name(name: str, branch_exists: BranchExistsPredicate) -> str:
    """Return name if it is unused, otherwise the first unused name-2, name-3, ..."""
    if not branch_exists(name):
        return name
    suffix = UNIQUE_SUFFIX_START
    candidate = f"{name}-{suffix}"
    while branch_exists(candidate):
        suffix += 1
        candidate = f"{name}-{suffix}"
    logger.debug("Branch name already taken, using suffixed name", name=name, candidate=candidate)
    return candidate


def decide_branch_action(config: BranchReconcileConfig, branch_exists: BranchExistsPredicate) -> BranchDecision:
    """Decide whether to keep the current branch, reuse it, or create a new one."""
    current_branch = config.current_branch

    if current_branch == config.desired_branch:
        return BranchDecision(BranchAction.KEEP, current_branch)

    if current_branch in config.protected_branches:
        logger.debug("Current branch is protected", current_branch=current_branch)
        return BranchDecision(BranchAction.CREATE, unique_branch_name(config.desired_branch, branch_exists))

    if is_branch_related(current_branch, config.desired_slug):
        return BranchDecision(BranchAction.REUSE, current_branch)

    logger.debug("Current branch is unrelated to the feature", current_branch=current_branch, slug=config.desired_slug)
    return BranchDecision(BranchAction.CREATE, unique_branch_name(config.desired_branch, branch_exists))
