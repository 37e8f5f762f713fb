from datetime import date, datetime

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from quire.rendering.filters import format_date, markdown
from quire.rendering.template_loader import TemplateLoader


def test_bundled_templates_are_found():
    loader = TemplateLoader()

    for name in ("base.html.jinja2", "index.html.jinja2", "posts.html.jinja2", "talks.html.jinja2"):
        assert loader.load_template(name) is not None


def test_missing_template_raises():
    with pytest.raises(TemplateNotFound):
        TemplateLoader().load_template("podcasts.html.jinja2")


def test_html_templates_autoescape(tmp_path):
    (tmp_path / "page.html.jinja2").write_text("{{ value }}")

    assert TemplateLoader(tmp_path).render_template("page.html.jinja2", value="<b>") == "&lt;b&gt;"


def test_undefined_variables_fail_loudly(tmp_path):
    (tmp_path / "page.html.jinja2").write_text("{{ missing }}")

    with pytest.raises(UndefinedError):
        TemplateLoader(tmp_path).render_template("page.html.jinja2")


def test_markdown_filter_is_not_escaped(tmp_path):
    (tmp_path / "page.html.jinja2").write_text("{{ body | markdown }}")

    html = TemplateLoader(tmp_path).render_template("page.html.jinja2", body="**bold**")

    assert html == "<p><strong>bold</strong></p>"


def test_format_date():
    assert format_date(date(2024, 2, 1)) == "01 February 2024"
    assert format_date(datetime(2024, 2, 1, 9, 30), "%Y-%m-%d %H:%M") == "2024-02-01 09:30"
    assert format_date("not a date") == "not a date"


def test_markdown_empty_body():
    assert markdown(None) == ""
    assert markdown("") == ""
