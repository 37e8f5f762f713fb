"""Jinja2 template loading for page rendering."""

from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, select_autoescape

from quire.rendering import filters


class TemplateLoader:
    """Loads and renders the HTML page templates.

    Supports:
    - Template inheritance (base templates)
    - Custom filters (date formatting, markdown rendering)
    - Configurable template directory
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize TemplateLoader.

        Args:
            template_dir: Path to template directory. Defaults to the templates bundled
                with ``quire.rendering``.

        """
        if template_dir is None:
            template_dir = Path(str(files("quire.rendering").joinpath("templates")))

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "xml", "jinja2"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._register_filters()

    def _register_filters(self) -> None:
        self.env.filters["format_date"] = filters.format_date
        self.env.filters["markdown"] = filters.markdown

    def load_template(self, template_name: str) -> Template:
        """Load a template by name.

        Raises:
            TemplateNotFound: If template does not exist

        """
        return self.env.get_template(template_name)

    def render_template(self, template_name: str, **context: Any) -> str:
        """Load and render a template with context."""
        return self.load_template(template_name).render(**context)
