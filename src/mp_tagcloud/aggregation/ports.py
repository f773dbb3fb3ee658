"""Aggregation ports — counts storage, entity scanning and the backend that builds both.

Concrete implementations live in ``adapters/mongodb`` and
``testing/fakes``.
"""

from __future__ import annotations

import abc
from collections.abc import AsyncIterator, Sequence
from typing import TYPE_CHECKING, Any

from mp_tagcloud.aggregation.records import AggregateRecord, RecordQuery
from mp_tagcloud.kernel.tagging import Snapshot

if TYPE_CHECKING:
    from mp_tagcloud.aggregation.rule import CollectionRef


class CountsStore(abc.ABC):
    """Port: the ``(tag, group) -> count`` collection behind one rule.

    A grouped store keys records by ``(tag, group)``; an ungrouped store
    keys them by ``tag`` alone.
    """

    grouped: bool = False

    @property
    @abc.abstractmethod
    def name(self) -> str: ...

    @abc.abstractmethod
    async def increment(self, tag: str, group: Any, delta: int) -> None:
        """Atomically add *delta* to the record, creating it at *delta* when absent."""

    @abc.abstractmethod
    async def find(self, query: RecordQuery) -> list[AggregateRecord]:
        """Return visible records (``count > 0``) matching *query*.

        Sorted by tag ascending, or by count descending then tag when
        ``query.order_by_count`` is set. A missing collection yields ``[]``.
        """

    @abc.abstractmethod
    async def replace_all(self, records: Sequence[AggregateRecord]) -> None:
        """Atomically replace the whole collection with *records*."""

    @abc.abstractmethod
    async def compact(self) -> int:
        """Delete records with ``count <= 0``; return how many were removed."""

    @abc.abstractmethod
    async def drop(self) -> None: ...

    async def ensure_indexes(self) -> None:
        """Create storage indexes. No-op unless the backend has any."""


class EntitySource(abc.ABC):
    """Port: read-only full scan over the entities of one type."""

    @abc.abstractmethod
    def scan(self, fields: Sequence[str] | None = None) -> AsyncIterator[Snapshot]:
        """Yield a snapshot of every entity.

        *fields* is a hint: a backend may return only those attributes.
        ``None`` asks for whole snapshots.
        """


class StorageBackend(abc.ABC):
    """Port: builds counts stores and entity sources for one database."""

    @property
    @abc.abstractmethod
    def default_database(self) -> Any: ...

    @abc.abstractmethod
    def counts_store(self, ref: CollectionRef, *, grouped: bool = False) -> CountsStore: ...

    @abc.abstractmethod
    def entity_source(self, entity: str, database: Any = None) -> EntitySource: ...


__all__ = ["CountsStore", "EntitySource", "StorageBackend"]
