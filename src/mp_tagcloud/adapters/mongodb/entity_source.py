"""MongoDB adapter — MongoEntitySource."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Any

from pymongo.errors import PyMongoError

from mp_tagcloud.aggregation.ports import EntitySource
from mp_tagcloud.kernel.errors import StorageError
from mp_tagcloud.kernel.tagging import Snapshot


class MongoEntitySource(EntitySource):
    """Full scan over an entity collection, projected to the requested fields."""

    def __init__(self, collection: Any) -> None:
        self._col = collection

    async def scan(self, fields: Sequence[str] | None = None) -> AsyncIterator[Snapshot]:
        projection = {field: 1 for field in fields} if fields else None
        try:
            async for doc in self._col.find({}, projection=projection):
                yield doc
        except PyMongoError as exc:
            raise StorageError("scan", self._col.name, cause=exc) from exc


__all__ = ["MongoEntitySource"]
