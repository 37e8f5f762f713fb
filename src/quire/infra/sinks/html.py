"""HTML Output Sink for publishing routed records as static pages."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from quire.core.config import QuireConfig
from quire.core.feed import as_datetime
from quire.core.pipeline import BuildResult
from quire.core.routes import output_paths, route_url
from quire.rendering.template_loader import TemplateLoader

logger = logging.getLogger(__name__)


class HtmlSink:
    """Publishes a BuildResult as one HTML page per route plus an index page.

    Records are consumed as-is; the sink never validates or mutates them.
    Each routed collection is rendered with ``<collection>.html.jinja2``.
    """

    def __init__(self, output_dir: Path, config: QuireConfig, templates: TemplateLoader | None = None) -> None:
        """Initialize the HTML output sink.

        Args:
            output_dir: Directory where pages will be written
            config: Site configuration (channel metadata and route prefixes)
            templates: Template loader, defaults to the bundled templates

        """
        self.output_dir = Path(output_dir)
        self.config = config
        self.templates = templates or TemplateLoader()

    def publish(self, result: BuildResult) -> list[Path]:
        """Render every page, then write them and return the written paths.

        A template error leaves the output directory untouched.
        """
        pages: dict[str, str] = {}
        for path, record in output_paths(result.routes, self.config.routes.prefixes()).items():
            template = f"{record.collection}.html.jinja2"
            pages[path.as_posix()] = self.templates.render_template(
                template, record=record, **self._base_context()
            )
        pages["index.html"] = self._render_index(result)

        written = [self._write(relative, html) for relative, html in pages.items()]
        logger.info("Wrote %d page(s) to %s", len(written), self.output_dir)
        return written

    def _base_context(self) -> dict[str, Any]:
        return {"site": self.config.site, "feed_path": self.config.routes.feed}

    def _render_index(self, result: BuildResult) -> str:
        posts = self._listing(result.routes.get("posts", {}), "posts")
        posts.sort(key=lambda item: as_datetime(item["record"]["pubDate"]), reverse=True)
        talks = self._listing(result.routes.get("talks", {}), "talks")
        return self.templates.render_template(
            "index.html.jinja2",
            posts=posts,
            talks=talks,
            collections=dict(result.collections),
            **self._base_context(),
        )

    def _listing(self, routes: Mapping[str, Any], collection: str) -> list[dict[str, Any]]:
        prefix = self.config.routes.prefix_for(collection)
        return [{"url": route_url(prefix, slug), "record": record} for slug, record in routes.items()]

    def _write(self, relative: str, content: str) -> Path:
        path = self.output_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
