"""Collection schemas and the registry that owns them.

A schema maps field names to :class:`FieldSpec` values. ``FieldSpec`` is a
tagged variant: ``kind`` selects the constraint and only the payload that
belongs to that kind is set (``target`` for references, ``item`` for arrays,
``fields`` for nested objects). Validation is a single recursive match over
the kind.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any

from quire.core.exceptions import (
    DuplicateCollectionError,
    MalformedDateError,
    SchemaValidationError,
    UnknownCollectionError,
)

_IDENTIFIER = re.compile(r"\S+")


class FieldKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    IMAGE = "image"
    REFERENCE = "reference"
    ARRAY = "array"
    OBJECT = "object"


class CollectionType(str, Enum):
    CONTENT = "content"
    DATA = "data"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    kind: FieldKind
    optional: bool = False
    target: str | None = None
    item: FieldSpec | None = None
    fields: Mapping[str, FieldSpec] = field(default_factory=dict)

    @property
    def reference_target(self) -> str | None:
        """Collection referenced by this field, directly or through an array."""
        if self.kind is FieldKind.REFERENCE:
            return self.target
        if self.kind is FieldKind.ARRAY and self.item is not None:
            return self.item.reference_target
        return None


def string() -> FieldSpec:
    return FieldSpec(FieldKind.STRING)


def number() -> FieldSpec:
    return FieldSpec(FieldKind.NUMBER)


def date() -> FieldSpec:
    return FieldSpec(FieldKind.DATE)


def image() -> FieldSpec:
    """A path to an asset, relative to the record's own file."""
    return FieldSpec(FieldKind.IMAGE)


def reference(collection: str) -> FieldSpec:
    return FieldSpec(FieldKind.REFERENCE, target=collection)


def array_of(item: FieldSpec) -> FieldSpec:
    return FieldSpec(FieldKind.ARRAY, item=item)


def nested(fields: Mapping[str, FieldSpec]) -> FieldSpec:
    return FieldSpec(FieldKind.OBJECT, fields=dict(fields))


def optional(spec: FieldSpec) -> FieldSpec:
    return replace(spec, optional=True)


@dataclass(frozen=True, slots=True)
class _Context:
    collection: str
    source: Path | None
    strict: bool


def parse_date(value: Any) -> dt.date | None:
    """Parse a front-matter value into a date, or return None if it is not one.

    ``date`` and ``datetime`` values pass through untouched. Strings are read as
    ISO-8601, first as a calendar date then as a full timestamp.
    """
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        return None


def _check(spec: FieldSpec, value: Any, path: str, ctx: _Context) -> Any:
    def fail(reason: str) -> SchemaValidationError:
        return SchemaValidationError(ctx.collection, ctx.source, path, reason)

    match spec.kind:
        case FieldKind.STRING:
            if not isinstance(value, str):
                raise fail(f"expected string, got {type(value).__name__}")
            return value
        case FieldKind.NUMBER:
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise fail(f"expected number, got {type(value).__name__}")
            return value
        case FieldKind.DATE:
            parsed = parse_date(value)
            if parsed is None:
                raise MalformedDateError(ctx.collection, ctx.source, path, value)
            return parsed
        case FieldKind.IMAGE:
            if not isinstance(value, str) or not value:
                raise fail("expected image path")
            if ctx.source is not None and not (ctx.source.parent / value).is_file():
                raise fail(f"image '{value}' not found")
            return value
        case FieldKind.REFERENCE:
            if not isinstance(value, str) or not _IDENTIFIER.fullmatch(value):
                raise fail(f"malformed reference {value!r} to '{spec.target}'")
            return value
        case FieldKind.ARRAY:
            if isinstance(value, str) or not isinstance(value, Sequence):
                raise fail(f"expected array, got {type(value).__name__}")
            assert spec.item is not None
            checked = [_check(spec.item, item, f"{path}[{index}]", ctx) for index, item in enumerate(value)]
            if all(new is old for new, old in zip(checked, value)):
                return value
            return checked
        case FieldKind.OBJECT:
            if not isinstance(value, Mapping):
                raise fail(f"expected object, got {type(value).__name__}")
            return _check_fields(spec.fields, value, f"{path}.", ctx)
    msg = f"Unsupported field kind: {spec.kind}"
    raise TypeError(msg)


def _check_fields(fields: Mapping[str, FieldSpec], data: Mapping[str, Any], prefix: str, ctx: _Context) -> Any:
    if ctx.strict:
        unknown = sorted(set(data) - set(fields))
        if unknown:
            raise SchemaValidationError(
                ctx.collection, ctx.source, f"{prefix}{unknown[0]}", "unknown field"
            )

    result = dict(data)
    changed = False
    for name, spec in fields.items():
        path = f"{prefix}{name}"
        value = data.get(name)
        if value is None:
            if spec.optional:
                continue
            raise SchemaValidationError(ctx.collection, ctx.source, path, "missing required field")
        checked = _check(spec, value, path, ctx)
        if checked is not value:
            result[name] = checked
            changed = True
    return result if changed else data


@dataclass(frozen=True, slots=True)
class Schema:
    """Shape and constraints of one named collection."""

    name: str
    fields: Mapping[str, FieldSpec]
    type: CollectionType = CollectionType.CONTENT
    strict: bool = False

    def validate(self, data: Mapping[str, Any], source: Path | None = None) -> Mapping[str, Any]:
        """Validate a front-matter mapping.

        Returns ``data`` itself when nothing needed coercing, otherwise a copy
        with parsed dates. Raises SchemaValidationError on the first violation.
        """
        if not isinstance(data, Mapping):
            raise SchemaValidationError(self.name, source, None, "front matter must be a mapping")
        return _check_fields(self.fields, data, "", _Context(self.name, source, self.strict))

    @property
    def routable(self) -> bool:
        return self.type is CollectionType.CONTENT

    def reference_fields(self) -> dict[str, str]:
        """Field paths holding references, mapped to their target collection.

        Nested objects contribute dotted paths (``venue.host``); arrays share
        the path of the field that holds them.
        """
        return dict(_reference_paths(self.fields, ""))

    def iter_references(self, data: Mapping[str, Any]) -> Iterator[tuple[str, str, str]]:
        """Yield ``(field path, target collection, id)`` for every reference in validated ``data``.

        References come out in the order the record declares them.
        """
        return _reference_values(self.fields, data, "")


def _reference_paths(fields: Mapping[str, FieldSpec], prefix: str) -> Iterator[tuple[str, str]]:
    for name, spec in fields.items():
        yield from _spec_reference_paths(spec, f"{prefix}{name}")


def _spec_reference_paths(spec: FieldSpec, path: str) -> Iterator[tuple[str, str]]:
    match spec.kind:
        case FieldKind.REFERENCE:
            assert spec.target is not None
            yield path, spec.target
        case FieldKind.ARRAY:
            assert spec.item is not None
            yield from _spec_reference_paths(spec.item, path)
        case FieldKind.OBJECT:
            yield from _reference_paths(spec.fields, f"{path}.")


def _reference_values(
    fields: Mapping[str, FieldSpec], data: Mapping[str, Any], prefix: str
) -> Iterator[tuple[str, str, str]]:
    for name, spec in fields.items():
        value = data.get(name)
        if value is not None:
            yield from _spec_reference_values(spec, value, f"{prefix}{name}")


def _spec_reference_values(spec: FieldSpec, value: Any, path: str) -> Iterator[tuple[str, str, str]]:
    match spec.kind:
        case FieldKind.REFERENCE:
            assert spec.target is not None
            yield path, spec.target, value
        case FieldKind.ARRAY:
            assert spec.item is not None
            for item in value:
                if item is not None:
                    yield from _spec_reference_values(spec.item, item, path)
        case FieldKind.OBJECT:
            yield from _reference_values(spec.fields, value, f"{path}.")


class SchemaRegistry:
    """Declares collections once; lookups afterwards are read-only."""

    def __init__(self) -> None:
        self._schemas: dict[str, Schema] = {}

    def define_schema(
        self,
        name: str,
        fields: Mapping[str, FieldSpec],
        *,
        type: CollectionType = CollectionType.CONTENT,
        strict: bool = False,
    ) -> Schema:
        if name in self._schemas:
            raise DuplicateCollectionError(name)
        schema = Schema(name=name, fields=dict(fields), type=type, strict=strict)
        self._schemas[name] = schema
        return schema

    def get(self, name: str) -> Schema:
        try:
            return self._schemas[name]
        except KeyError:
            raise UnknownCollectionError(name, self.names()) from None

    def names(self) -> list[str]:
        return list(self._schemas)

    def check_references(self) -> None:
        """Ensure every reference field targets a declared collection."""
        for schema in self._schemas.values():
            for target in schema.reference_fields().values():
                if target not in self._schemas:
                    raise UnknownCollectionError(target, self.names())

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[Schema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)
