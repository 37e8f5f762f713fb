"""Core data types for the Quire pipeline."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """One validated entry of a collection.

    ``id`` is derived from the source path and is the key references resolve
    against. Content records also carry ``slug`` (equal to ``id``); data
    records never do because they are not routed.
    """

    model_config = ConfigDict(frozen=True)

    collection: str
    id: str
    source: Path
    data: dict[str, Any] = Field(default_factory=dict)
    body: str | None = None
    slug: str | None = None
    references: dict[str, tuple[Record, ...]] = Field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def related(self, field: str) -> tuple[Record, ...]:
        """Records materialized for a reference field, in declared order."""
        return self.references.get(field, ())


class FeedEntry(BaseModel):
    title: str
    pub_date: datetime
    description: str
    link: str


class FeedDocument(BaseModel):
    title: str
    description: str
    site: str
    language: str = "en-us"
    last_build_date: datetime
    entries: list[FeedEntry] = Field(default_factory=list)
