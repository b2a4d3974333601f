"""Jinja2 template renderer for show-more markup."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from showmore.core.models import RenderInstruction


def _get_template_dir() -> Path:
    """Find the templates directory."""
    templates_dir = Path(__file__).parent.parent / "templates"
    if templates_dir.exists():
        return templates_dir
    # Fallback: check cwd
    cwd_templates = Path.cwd() / "templates"
    if cwd_templates.exists():
        return cwd_templates
    raise FileNotFoundError("Cannot find templates/ directory")


def get_env() -> Environment:
    """Return a Jinja2 environment configured for widget templates."""
    return Environment(
        loader=FileSystemLoader(str(_get_template_dir())),
        autoescape=False,  # Content is markup; labels are escaped in the template
    )


def render_more(view: RenderInstruction) -> str:
    """Render one instance view as HTML."""
    env = get_env()
    template = env.get_template("more.html.j2")
    return template.render(view=view)


def render_page(body_html: str, title: str = "Show more") -> str:
    """Wrap rendered widget markup in a standalone HTML page."""
    env = get_env()
    template = env.get_template("page.html.j2")
    return template.render(body=body_html, title=title)
