"""Renders the Jinja2 templates packaged with prd-ops-manager."""

from pathlib import Path

import jinja2
import structlog
from pydantic import BaseModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TEMPLATES_DIRECTORY = Path(__file__).parent.parent / "templates"


def render_packaged_template(template_name: str, model: BaseModel, templates_directory: Path = TEMPLATES_DIRECTORY) -> str:
    """Render a packaged template against the fields of a Pydantic model.

    Undefined variables raise instead of rendering as empty text, so a template
    drifting from its model fails loudly.
    """
    environment = jinja2.Environment(
        loader=jinja2.FileSystemLoader(templates_directory),
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
    )
    try:
        return environment.get_template(template_name).render(model.model_dump())
    except jinja2.TemplateError as exc:
        logger.error("Failed to render template", template_name=template_name, model_type=type(model).__name__, error=str(exc))
        raise
