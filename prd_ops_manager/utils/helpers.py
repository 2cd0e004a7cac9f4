"""General utility functions and helper classes."""

import re

from prd_ops_manager.utils.constants import DEFAULT_BRANCH_PREFIX, SLUG_FALLBACK, SLUG_MAX_LENGTH, SLUG_SEPARATOR

_NON_ALPHANUMERIC_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify_title(title: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Slugify a title for use in branch names (lowercase, hyphens, alphanum only).

    The result never starts or ends with a hyphen and is at most max_length
    characters long. An empty string is returned if nothing alphanumeric is
    left; use slugify_feature() when a non-empty slug is required.
    """
    slug = _NON_ALPHANUMERIC_PATTERN.sub(SLUG_SEPARATOR, title.lower())
    slug = slug.strip(SLUG_SEPARATOR)
    # Truncation can cut right after a separator.
    return slug[:max_length].rstrip(SLUG_SEPARATOR)


def slugify_feature(title: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Slugify a feature name, falling back to a fixed slug when the result would be empty."""
    return slugify_title(title, max_length=max_length) or SLUG_FALLBACK


def first_line(text: str) -> str:
    """Return the text up to the first newline character."""
    return text.split("\n", 1)[0]


def generate_branch_name(slug: str, prefix: str = DEFAULT_BRANCH_PREFIX) -> str:
    """Generate a branch name like 'feature/add-oauth-login'."""
    return f"{prefix}/{slug}"
