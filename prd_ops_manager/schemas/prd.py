"""Pydantic schema for the PRD generation prompt."""

from pydantic import BaseModel, field_validator


class PRDPromptModel(BaseModel):
    """Pydantic model for the values rendered into the PRD generation prompt."""

    repo_root: str
    prompt: str

    @field_validator("prompt")
    @classmethod
    def prompt_must_not_be_blank(cls, value: str) -> str:
        """Reject prompts that contain nothing but whitespace."""
        if not value.strip():
            raise ValueError("Feature prompt must not be empty")
        return value
