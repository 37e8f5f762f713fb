"""Build the site: run the pipeline, then write pages and the feed."""

from __future__ import annotations

from pathlib import Path

from quire.content import site_registry
from quire.core.config import QuireConfig
from quire.core.pipeline import BuildResult, run_pipeline
from quire.core.schema import SchemaRegistry
from quire.infra.sinks import HtmlSink, RssSink
from quire.rendering.template_loader import TemplateLoader


def build_site(config: QuireConfig, schemas: SchemaRegistry | None = None) -> BuildResult:
    """Validate and project the site's content without writing anything."""
    return run_pipeline(schemas if schemas is not None else site_registry(), config)


def publish_site(
    result: BuildResult,
    config: QuireConfig,
    templates: TemplateLoader | None = None,
) -> list[Path]:
    """Write pages and the feed into the configured output directory."""
    output_dir = config.paths.abs_output_dir
    written = HtmlSink(output_dir, config, templates).publish(result)

    if result.feed is not None:
        feed_path = output_dir / config.routes.feed
        RssSink(feed_path).publish(result.feed)
        written.append(feed_path)
    return written
