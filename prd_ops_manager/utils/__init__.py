"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_BRANCH_PREFIX,
    DEFAULT_PROTECTED_BRANCHES,
    SLUG_FALLBACK,
    SLUG_MAX_LENGTH,
)
from .helpers import generate_branch_name, slugify_feature, slugify_title

__all__ = [
    "DEFAULT_BRANCH_PREFIX",
    "DEFAULT_PROTECTED_BRANCHES",
    "SLUG_FALLBACK",
    "SLUG_MAX_LENGTH",
    "generate_branch_name",
    "slugify_feature",
    "slugify_title",
]
