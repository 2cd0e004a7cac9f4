"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class BaseConfig:
    """Configuration class for the PRD Operations Manager CLI."""

    debug: bool
    branch_prefix: str
    protected_branches: tuple[str, ...]


@dataclass
class EnsureBranchConfig(BaseConfig):
    """Configuration class for the branch ensure command."""

    prompt: str | None
    feature_name: str | None
    branch_name: str | None
    dry_run: bool


@dataclass
class PreparePRDConfig(BaseConfig):
    """Configuration class for the prepare command."""

    prompt: str
    feature_name: str | None
    branch_name: str | None
    create_branch: bool
    prd_file: Path
    progress_file: Path
    # None writes the rendered prompt to stdout.
    prompt_file: Path | None
