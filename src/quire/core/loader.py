"""Read raw records from disk and validate them against their schema."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from quire.core.exceptions import SchemaValidationError, SlugCollisionError
from quire.core.schema import CollectionType, Schema, SchemaRegistry
from quire.core.types import Record
from quire.core.utils import derive_id, is_url_safe, normalize_slug

logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = frozenset({".md", ".mdx", ".markdown"})
DATA_SUFFIXES = frozenset({".yaml", ".yml", ".json"})


def parse_frontmatter(content: str, *, collection: str, source: Path) -> tuple[dict[str, Any], str]:
    """Split a Markdown document into its front-matter mapping and body.

    Raises:
        SchemaValidationError: If the front matter is not valid YAML or is not a mapping.

    """
    text = content.strip()
    handler = frontmatter.detect_format(text, frontmatter.handlers)
    if handler is None:
        return {}, text
    try:
        raw, body = handler.split(text)
    except ValueError:
        return {}, text

    # frontmatter.loads() silently drops non-mapping metadata, so load it here.
    try:
        metadata = handler.load(raw)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        raise SchemaValidationError(collection, source, None, f"malformed front matter: {exc}") from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise SchemaValidationError(
            collection, source, None, f"front matter must be a mapping, got {type(metadata).__name__}"
        )
    return dict(metadata), body.strip()


def parse_data_file(content: str, *, collection: str, source: Path) -> dict[str, Any]:
    """Parse a YAML or JSON data record."""
    try:
        if source.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SchemaValidationError(collection, source, None, f"malformed data file: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaValidationError(
            collection, source, None, f"data file must be a mapping, got {type(data).__name__}"
        )
    return data


class CollectionLoader:
    """Loads collections from one or more content roots.

    Each root holds one directory per collection (``<root>/<name>/``). Files
    whose path contains a segment starting with ``_`` or ``.`` are ignored.
    """

    def __init__(self, registry: SchemaRegistry, content_dirs: Sequence[Path]) -> None:
        self.registry = registry
        self.content_dirs = [Path(directory) for directory in content_dirs]

    def load_collection(self, name: str) -> tuple[Record, ...]:
        """Load and validate every record of ``name``.

        The first invalid record aborts the whole load.
        """
        schema = self.registry.get(name)
        suffixes = CONTENT_SUFFIXES if schema.type is CollectionType.CONTENT else DATA_SUFFIXES

        records: list[Record] = []
        for root in self.content_dirs:
            directory = root / name
            if not directory.is_dir():
                continue
            for path in sorted(directory.rglob("*")):
                if not path.is_file():
                    continue
                relative = path.relative_to(directory)
                if any(part.startswith(("_", ".")) for part in relative.parts):
                    continue
                if path.suffix.lower() not in suffixes:
                    logger.debug("Skipping %s: not a %s record", path, schema.type.value)
                    continue
                records.append(self._load_record(schema, path, derive_id(relative)))

        if schema.type is CollectionType.DATA:
            _ensure_unique_ids(name, records)

        logger.info("Loaded %d record(s) from collection '%s'", len(records), name)
        return tuple(records)

    def _load_record(self, schema: Schema, path: Path, record_id: str) -> Record:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SchemaValidationError(schema.name, path, None, f"unreadable record: {exc}") from exc

        if schema.type is CollectionType.DATA:
            data = parse_data_file(text, collection=schema.name, source=path)
            validated = schema.validate(data, source=path)
            return Record(collection=schema.name, id=record_id, source=path, data=dict(validated))

        metadata, body = parse_frontmatter(text, collection=schema.name, source=path)
        slug = record_id
        if "slug" in metadata:
            override = metadata.pop("slug")
            if not isinstance(override, str) or not normalize_slug(override):
                raise SchemaValidationError(schema.name, path, "slug", "slug must be a non-empty string")
            slug = normalize_slug(override)
        if not is_url_safe(slug):
            raise SchemaValidationError(schema.name, path, "slug", f"slug '{slug}' is not URL-safe")

        validated = schema.validate(metadata, source=path)
        return Record(
            collection=schema.name,
            id=slug,
            slug=slug,
            source=path,
            data=dict(validated),
            body=body,
        )


def _ensure_unique_ids(collection: str, records: list[Record]) -> None:
    seen: dict[str, Record] = {}
    for record in records:
        if record.id in seen:
            raise SlugCollisionError(collection, record.id, [seen[record.id].source, record.source])
        seen[record.id] = record


def load_collection(registry: SchemaRegistry, name: str, content_dirs: Sequence[Path]) -> tuple[Record, ...]:
    """Shortcut for ``CollectionLoader(registry, content_dirs).load_collection(name)``."""
    return CollectionLoader(registry, content_dirs).load_collection(name)
