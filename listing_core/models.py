"""Shared data structures for listings and query results."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Listing:
    """A single property record as loaded from the dataset file."""

    id: Any
    name: Optional[str]
    price: Any
    fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), repr=False)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Listing":
        name = record.get("NAME", record.get("name"))
        return cls(
            id=record.get("id"),
            name=name if isinstance(name, str) else None,
            price=record.get("price"),
            fields=MappingProxyType(dict(record)),
        )

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    @property
    def thumbnail_url(self) -> Optional[str]:
        """The thumbnail link, only when it is a plain http(s) URL."""

        value = self.fields.get("thumbnail")
        if isinstance(value, str) and value.strip().lower().startswith(("http://", "https://")):
            return value.strip()
        return None

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.fields)


@dataclass(frozen=True)
class Dataset:
    """Ordered, immutable collection of every listing loaded at startup."""

    listings: Tuple[Listing, ...]
    source: str = ""

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]], source: str = "") -> "Dataset":
        return cls(listings=tuple(Listing.from_record(record) for record in records), source=source)

    def __len__(self) -> int:
        return len(self.listings)

    def __iter__(self) -> Iterator[Listing]:
        return iter(self.listings)


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a named query operation.

    ``kind`` is one of ``"record"``, ``"records"``, ``"not_found"`` or
    ``"no_matches"`` so callers can branch without inspecting ``None``.
    """

    operation: str
    kind: str
    record: Optional[Listing] = None
    records: Tuple[Listing, ...] = ()

    @classmethod
    def single(cls, operation: str, record: Optional[Listing]) -> "QueryResult":
        if record is None:
            return cls(operation=operation, kind="not_found")
        return cls(operation=operation, kind="record", record=record)

    @classmethod
    def many(cls, operation: str, records: Sequence[Listing]) -> "QueryResult":
        if not records:
            return cls(operation=operation, kind="no_matches")
        return cls(operation=operation, kind="records", records=tuple(records))

    @property
    def found(self) -> bool:
        return self.kind in ("record", "records")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "kind": self.kind,
            "record": self.record.to_dict() if self.record else None,
            "records": [record.to_dict() for record in self.records],
        }
