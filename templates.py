"""
Template rendering for the catalog web interface.

Views are Mako templates under ``settings.views_dir``. Every ``${}``
expression is HTML-escaped unless the template opts out with ``| n``.
"""

import logging
from functools import lru_cache
from typing import Any

from fastapi.responses import HTMLResponse
from mako import exceptions
from mako.lookup import TemplateLookup

from config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def get_template_lookup(views_dir: str) -> TemplateLookup:
    """Get the Mako template lookup for a views directory."""
    return TemplateLookup(
        directories=[views_dir],
        input_encoding="utf-8",
        default_filters=["h"],
    )


def serve_template(templatename: str, **kwargs: Any) -> str:
    """Render a template with the shared layout context.

    Args:
        templatename: The template file to render
        **kwargs: Context variables passed to the template

    Returns:
        The rendered HTML string
    """
    lookup = get_template_lookup(settings.views_dir)
    kwargs.setdefault("errors", None)
    try:
        template = lookup.get_template(templatename)
        return template.render(app_name=settings.app_name, **kwargs)
    except Exception:
        logger.exception(f"Failed to render template {templatename}")
        if settings.debug:
            return exceptions.html_error_template().render().decode("utf-8")
        raise


def render(view: str, status_code: int = 200, **context: Any) -> HTMLResponse:
    """Render a named view (without extension) into an HTML response."""
    return HTMLResponse(serve_template(f"{view}.html", **context), status_code=status_code)
