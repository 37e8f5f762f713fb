"""Core exceptions for the Quire build pipeline.

Every error here aborts the build. Nothing is defaulted or skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class QuireError(Exception):
    """Base exception for all Quire errors."""


class ConfigError(QuireError):
    """Raised when the site configuration cannot be read or is invalid."""

    def __init__(self, path: Path, reason: str | Exception) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in {path}: {reason}")


class DuplicateCollectionError(QuireError):
    """Raised when a collection name is registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Collection '{name}' is already defined")


class UnknownCollectionError(QuireError, LookupError):
    """Raised when a collection name has no registered schema."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        msg = f"Unknown collection: '{name}'"
        if self.available:
            msg += f". Available: {', '.join(self.available)}"
        super().__init__(msg)


class SchemaValidationError(QuireError):
    """Raised when a record does not satisfy its collection schema."""

    def __init__(
        self,
        collection: str,
        source: Path | str | None,
        field: str | None,
        reason: str,
    ) -> None:
        self.collection = collection
        self.source = source
        self.field = field
        self.reason = reason
        location = f"{collection}:{source}" if source is not None else collection
        if field:
            location += f" [{field}]"
        super().__init__(f"{location}: {reason}")


class MalformedDateError(SchemaValidationError):
    """Raised when a date field cannot be parsed into a calendar date."""

    def __init__(self, collection: str, source: Path | str | None, field: str | None, value: Any) -> None:
        self.value = value
        super().__init__(collection, source, field, f"malformed date {value!r}")


class UnresolvedReferenceError(QuireError):
    """Raised when a reference points at an id missing from its target collection."""

    def __init__(self, collection: str, record_id: str, field: str, target: str, missing: str) -> None:
        self.collection = collection
        self.record_id = record_id
        self.field = field
        self.target = target
        self.missing = missing
        super().__init__(
            f"{collection}/{record_id} [{field}]: reference '{missing}' not found in collection '{target}'"
        )


class SlugCollisionError(QuireError):
    """Raised when two records of one collection derive the same identifier."""

    def __init__(self, collection: str, slug: str, sources: list[Path | str]) -> None:
        self.collection = collection
        self.slug = slug
        self.sources = sources
        joined = ", ".join(str(source) for source in sources)
        super().__init__(f"Collection '{collection}' has duplicate slug '{slug}' ({joined})")
