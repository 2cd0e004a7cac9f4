"""Shared constants used across the application."""

# Slug Constants
# --------------

SLUG_MAX_LENGTH = 50
"""Maximum length of a slug derived from a feature name or prompt."""

SLUG_FALLBACK = "feature"
"""Slug used when normalization of the input yields an empty string."""

SLUG_SEPARATOR = "-"
"""Separator placed between alphanumeric runs of a slug."""

# Branch Constants
# ----------------

DEFAULT_BRANCH_PREFIX = "feature"
"""Namespace prefix of generated branch names (e.g., feature/add-oauth-login)."""

DEFAULT_PROTECTED_BRANCHES = ("main", "master", "HEAD")
"""Branches that work is never done on directly. HEAD is what git reports for a detached HEAD."""

RELATED_TOKEN_MIN_LENGTH = 4
"""Minimum slug token length considered when matching a slug against the current branch."""

UNIQUE_SUFFIX_START = 2
"""First numeric suffix tried when a branch name is already taken."""

MAX_BRANCH_CREATE_ATTEMPTS = 3
"""Number of times branch creation is retried when the chosen name is taken between check and create."""

# PRD File Constants
# ------------------

DEFAULT_PRD_FILE = "PRD.md"
"""Default path of the PRD document, relative to the repository root."""

DEFAULT_PROGRESS_FILE = "progress.txt"
"""Default path of the progress file, relative to the repository root."""

PROMPT_FILE_SUFFIX = ".prompt.md"
"""Suffix appended to the PRD file stem to name the rendered generation prompt."""
