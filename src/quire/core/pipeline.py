"""Single-pass build: load, resolve, project, emit.

Stages run strictly in order and each consumes the complete output of the
previous one. Any error aborts the build; nothing is partially produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from quire.core.config import QuireConfig
from quire.core.feed import build_feed
from quire.core.loader import CollectionLoader
from quire.core.resolver import CollectionRegistry, resolve_references
from quire.core.routes import project_routes
from quire.core.schema import SchemaRegistry
from quire.core.types import FeedDocument, Record

logger = logging.getLogger(__name__)

FEED_COLLECTION = "posts"


@dataclass(frozen=True)
class BuildResult:
    schemas: SchemaRegistry
    collections: CollectionRegistry
    routes: dict[str, dict[str, Record]]
    feed: FeedDocument | None

    def route_count(self) -> int:
        return sum(len(routes) for routes in self.routes.values())


def load_collections(schemas: SchemaRegistry, config: QuireConfig) -> CollectionRegistry:
    """Load and validate every declared collection."""
    loader = CollectionLoader(schemas, config.paths.abs_content_dirs)
    return CollectionRegistry({schema.name: loader.load_collection(schema.name) for schema in schemas})


def run_pipeline(schemas: SchemaRegistry, config: QuireConfig) -> BuildResult:
    """Run the whole pipeline and return its immutable result."""
    loaded = load_collections(schemas, config)

    # Resolution starts only once every collection is loaded.
    resolved = CollectionRegistry(
        {schema.name: resolve_references(loaded[schema.name], schema, loaded) for schema in schemas}
    )

    routes = {schema.name: project_routes(resolved[schema.name]) for schema in schemas if schema.routable}

    feed = None
    if FEED_COLLECTION in resolved:
        feed = build_feed(
            resolved[FEED_COLLECTION],
            title=config.site.title,
            description=config.site.description,
            site=config.site.url,
            route_prefix=config.routes.prefix_for(FEED_COLLECTION),
            language=config.site.language,
        )

    result = BuildResult(schemas=schemas, collections=resolved, routes=routes, feed=feed)
    logger.info(
        "Built %d collection(s) with %d route(s)", len(resolved), result.route_count()
    )
    return result
