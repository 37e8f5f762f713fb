"""Cross-collection reference resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

from quire.core.exceptions import UnknownCollectionError, UnresolvedReferenceError
from quire.core.schema import Schema
from quire.core.types import Record

logger = logging.getLogger(__name__)


class CollectionRegistry(Mapping[str, tuple[Record, ...]]):
    """Validated records per collection name, with lookup by record id.

    Passed explicitly to :func:`resolve_references`; there is no global lookup.
    """

    def __init__(self, collections: Mapping[str, Iterable[Record]] | None = None) -> None:
        self._records: dict[str, tuple[Record, ...]] = {}
        self._index: dict[str, dict[str, Record]] = {}
        for name, records in (collections or {}).items():
            self.add(name, records)

    def add(self, name: str, records: Iterable[Record]) -> None:
        records = tuple(records)
        self._records[name] = records
        self._index[name] = {record.id: record for record in records}

    def lookup(self, collection: str, record_id: str) -> Record | None:
        try:
            index = self._index[collection]
        except KeyError:
            raise UnknownCollectionError(collection, list(self._records)) from None
        return index.get(record_id)

    def __getitem__(self, name: str) -> tuple[Record, ...]:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


def resolve_references(
    records: Iterable[Record],
    schema: Schema,
    registry: CollectionRegistry,
) -> tuple[Record, ...]:
    """Return copies of ``records`` with every reference field materialized.

    Targets are keyed by field path (``events``, ``venue.host``) and keep the
    order in which the source record declares them, however deeply nested.

    Raises:
        UnresolvedReferenceError: If a referenced id is missing from its target collection.

    """
    if not schema.reference_fields():
        return tuple(records)

    resolved: list[Record] = []
    for record in records:
        references: dict[str, list[Record]] = {}
        for path, target, target_id in schema.iter_references(record.data):
            found = registry.lookup(target, target_id)
            if found is None:
                raise UnresolvedReferenceError(schema.name, record.id, path, target, target_id)
            references.setdefault(path, []).append(found)
        materialized = {path: tuple(targets) for path, targets in references.items()}
        resolved.append(record.model_copy(update={"references": materialized}))

    logger.debug("Resolved references for %d record(s) in '%s'", len(resolved), schema.name)
    return tuple(resolved)
