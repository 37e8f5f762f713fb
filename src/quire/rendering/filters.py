"""Custom Jinja2 filters for page templates."""

from datetime import date

from markdown_it import MarkdownIt
from markupsafe import Markup

_md = MarkdownIt("commonmark", {"html": True})


def format_date(value: date, format_str: str = "%d %B %Y") -> str:
    """Format a date or datetime.

    Args:
        value: Date to format
        format_str: strftime format string

    Returns:
        Formatted date string

    """
    if not isinstance(value, date):
        return str(value)
    return value.strftime(format_str)


def markdown(content: str | None) -> Markup:
    """Render a Markdown body to HTML. Empty bodies render as nothing."""
    if not content:
        return Markup("")
    return Markup(_md.render(content).strip())
