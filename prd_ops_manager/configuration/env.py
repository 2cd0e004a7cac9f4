"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from prd_ops_manager.utils.constants import (
    DEFAULT_BRANCH_PREFIX,
    DEFAULT_PRD_FILE,
    DEFAULT_PROGRESS_FILE,
    DEFAULT_PROTECTED_BRANCHES,
)


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # PRD file settings
    PRD_FILE: str = DEFAULT_PRD_FILE
    PROGRESS_FILE: str = DEFAULT_PROGRESS_FILE

    # Branch settings
    BRANCH_PREFIX: str = DEFAULT_BRANCH_PREFIX
    # Comma-separated list of branch names
    PROTECTED_BRANCHES: str = ",".join(DEFAULT_PROTECTED_BRANCHES)


settings = Settings()
