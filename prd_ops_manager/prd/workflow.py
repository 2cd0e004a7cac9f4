"""Orchestrates preparation of a repository for PRD generation."""

from pathlib import Path

import structlog

from prd_ops_manager.branching.driver import ensure_branch
from prd_ops_manager.configuration.models import PreparePRDConfig
from prd_ops_manager.git.abc import GitClientBase
from prd_ops_manager.prd.results import PreparePRDResult
from prd_ops_manager.schemas.prd import PRDPromptModel
from prd_ops_manager.utils.templates import render_packaged_template

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

PRD_PROMPT_TEMPLATE = "prd_prompt.j2"


def resolve_in_repository(path: Path, repo_root: Path) -> Path:
    """Resolve a relative path against the repository root."""
    if path.is_absolute():
        return path
    return repo_root / path


def render_prd_prompt(repo_root: Path, prompt: str) -> str:
    """Render the prompt that asks a coding assistant to write the PRD."""
    return render_packaged_template(PRD_PROMPT_TEMPLATE, PRDPromptModel(repo_root=str(repo_root), prompt=prompt))


def run_prepare_prd_workflow(config: PreparePRDConfig, git_client: GitClientBase, working_directory: Path | None = None) -> PreparePRDResult:
    """Prepare a repository for PRD generation.

    Files are resolved against the repository root, or the working directory
    when not inside a repository. The progress file is truncated so the next
    run starts from a clean slate; an existing PRD file is never touched.
    """
    repo_root = git_client.repository_root() or (working_directory or Path.cwd()).resolve()
    logger.info("Preparing PRD generation", repo_root=str(repo_root))

    branch_result = None
    if config.create_branch:
        branch_result = ensure_branch(
            git_client,
            prompt=config.prompt,
            feature_name=config.feature_name,
            branch_name=config.branch_name,
            branch_prefix=config.branch_prefix,
            protected_branches=config.protected_branches,
        )
    else:
        logger.info("Branch checks disabled")

    prompt_text = render_prd_prompt(repo_root, config.prompt)

    prompt_file = None
    if config.prompt_file is not None:
        prompt_file = resolve_in_repository(config.prompt_file, repo_root)
        prompt_file.parent.mkdir(parents=True, exist_ok=True)
        prompt_file.write_text(prompt_text, encoding="utf-8")
        logger.info("Wrote PRD generation prompt", prompt_file=str(prompt_file))

    prd_file = resolve_in_repository(config.prd_file, repo_root)
    if prd_file.exists():
        logger.warning("PRD file already exists and will be overwritten by the next generation", prd_file=str(prd_file))

    progress_file = resolve_in_repository(config.progress_file, repo_root)
    progress_file.parent.mkdir(parents=True, exist_ok=True)
    progress_file.write_text("", encoding="utf-8")
    logger.info("Created blank progress file", progress_file=str(progress_file))

    return PreparePRDResult(
        repo_root=repo_root,
        prompt_text=prompt_text,
        prd_file=prd_file,
        progress_file=progress_file,
        prompt_file=prompt_file,
        branch_result=branch_result,
    )
