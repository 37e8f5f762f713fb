"""Map content records to the pages that render them."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath

from quire.core.exceptions import SlugCollisionError
from quire.core.types import Record


def project_routes(records: Iterable[Record]) -> dict[str, Record]:
    """Build the slug -> record mapping for one content collection.

    Raises:
        SlugCollisionError: If two records resolve to the same slug.
        ValueError: If a record has no slug (data collections are not routable).

    """
    routes: dict[str, Record] = {}
    for record in records:
        if record.slug is None:
            msg = f"Record '{record.collection}/{record.id}' has no slug and cannot be routed"
            raise ValueError(msg)
        if record.slug in routes:
            raise SlugCollisionError(
                record.collection, record.slug, [routes[record.slug].source, record.source]
            )
        routes[record.slug] = record
    return routes


def route_url(prefix: str, slug: str) -> str:
    """Site-relative URL of a routed record, e.g. ``/articles/hello-world/``."""
    parts = [part for part in (prefix.strip("/"), slug.strip("/")) if part]
    return "/" + "/".join(parts) + "/"


def output_path(prefix: str, slug: str) -> PurePosixPath:
    """Output file of a routed record relative to the build directory."""
    return PurePosixPath(route_url(prefix, slug).lstrip("/")) / "index.html"


def output_paths(
    routes: Mapping[str, Mapping[str, Record]],
    prefixes: Mapping[str, str],
) -> dict[PurePosixPath, Record]:
    """Assign every routed record of every collection its output file.

    Raises:
        SlugCollisionError: If two collections would write the same file.

    """
    paths: dict[PurePosixPath, Record] = {}
    for collection, collection_routes in routes.items():
        prefix = prefixes.get(collection, collection)
        for slug, record in collection_routes.items():
            path = output_path(prefix, slug)
            if path in paths:
                raise SlugCollisionError(collection, slug, [paths[path].source, record.source])
            paths[path] = record
    return paths
