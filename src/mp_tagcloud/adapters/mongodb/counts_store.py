"""MongoDB adapter — MongoCountsStore."""

from __future__ import annotations

import contextlib
import logging
import re
import uuid
from collections.abc import Sequence
from typing import Any

from pymongo.errors import PyMongoError

from mp_tagcloud.aggregation.ports import CountsStore
from mp_tagcloud.aggregation.records import AggregateRecord, RecordQuery
from mp_tagcloud.kernel.errors import StorageError

logger = logging.getLogger(__name__)


class MongoCountsStore(CountsStore):
    """Counts collection of one aggregation rule, backed by a motor collection.

    Documents have the shape ``{"tag": str, "group"?: any, "count": int}``.
    Call :meth:`ensure_indexes` once on startup to create the unique
    ``(tag[, group])`` index; with it in place concurrent upserts of the same
    key cannot produce duplicate documents.

    Increments are a single ``update_one(..., {"$inc": ...}, upsert=True)``,
    so two saves touching the same tag serialise in the server rather than
    racing on a read-modify-write.
    """

    INDEX_NAME = "idx_tag_group"

    def __init__(self, collection: Any, *, grouped: bool = False) -> None:
        self._col = collection
        self.grouped = grouped

    @property
    def name(self) -> str:
        return self._col.name

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    @classmethod
    async def create_indexes(cls, collection: Any, *, grouped: bool = False) -> None:
        """Create the unique key index. Idempotent."""
        keys = [("tag", 1), ("group", 1)] if grouped else [("tag", 1)]
        await collection.create_index(keys, unique=True, name=cls.INDEX_NAME)

    async def ensure_indexes(self) -> None:
        try:
            await self.create_indexes(self._col, grouped=self.grouped)
        except PyMongoError as exc:
            raise StorageError("create_indexes", self.name, cause=exc) from exc

    # ------------------------------------------------------------------
    # CountsStore interface
    # ------------------------------------------------------------------

    async def increment(self, tag: str, group: Any, delta: int) -> None:
        try:
            await self._col.update_one(self._key(tag, group), {"$inc": {"count": delta}}, upsert=True)
        except PyMongoError as exc:
            raise StorageError("increment", self.name, cause=exc) from exc

    async def find(self, query: RecordQuery) -> list[AggregateRecord]:
        cursor = self._col.find(
            self._filter(query),
            projection={"_id": 0},
            sort=self._sort(query),
        )
        if query.limit > 0:
            cursor = cursor.limit(query.limit)
        try:
            return [self._from_doc(doc) async for doc in cursor]
        except PyMongoError as exc:
            raise StorageError("find", self.name, cause=exc) from exc

    async def replace_all(self, records: Sequence[AggregateRecord]) -> None:
        """Write *records* to a scratch collection and rename it over this one.

        ``renameCollection`` with ``dropTarget`` swaps the contents in one
        step, so readers see either the old or the new aggregate.
        """
        if not records:
            await self._clear()
            return

        scratch = self._col.database[f"{self.name}.recalc_{uuid.uuid4().hex[:12]}"]
        try:
            await self.create_indexes(scratch, grouped=self.grouped)
            await scratch.insert_many([self._to_doc(r) for r in records], ordered=False)
            await scratch.rename(self.name, dropTarget=True)
        except PyMongoError as exc:
            with contextlib.suppress(PyMongoError):
                await scratch.drop()
            raise StorageError("replace_all", self.name, cause=exc) from exc
        logger.debug("mongodb.counts_replaced collection=%s records=%d", self.name, len(records))

    async def _clear(self) -> None:
        # delete_many keeps the unique key index that drop() would remove
        try:
            await self._col.delete_many({})
            await self.create_indexes(self._col, grouped=self.grouped)
        except PyMongoError as exc:
            raise StorageError("replace_all", self.name, cause=exc) from exc

    async def compact(self) -> int:
        try:
            result = await self._col.delete_many({"count": {"$lte": 0}})
        except PyMongoError as exc:
            raise StorageError("compact", self.name, cause=exc) from exc
        return result.deleted_count

    async def drop(self) -> None:
        try:
            await self._col.drop()
        except PyMongoError as exc:
            raise StorageError("drop", self.name, cause=exc) from exc

    # ------------------------------------------------------------------
    # Query / (de)serialisation helpers
    # ------------------------------------------------------------------

    def _key(self, tag: str, group: Any) -> dict[str, Any]:
        if self.grouped:
            return {"tag": tag, "group": group}
        return {"tag": tag}

    def _filter(self, query: RecordQuery) -> dict[str, Any]:
        criteria: dict[str, Any] = {"count": {"$gt": 0}}
        if query.group is not None:
            criteria["group"] = query.group
        if query.prefix:
            criteria["tag"] = {"$regex": f"^{re.escape(query.prefix)}"}
        return criteria

    def _sort(self, query: RecordQuery) -> list[tuple[str, int]]:
        if query.order_by_count:
            return [("count", -1), ("tag", 1)]
        return [("tag", 1)]

    def _to_doc(self, record: AggregateRecord) -> dict[str, Any]:
        doc: dict[str, Any] = {"tag": record.tag, "count": record.count}
        if self.grouped:
            doc["group"] = record.group
        return doc

    def _from_doc(self, doc: dict[str, Any]) -> AggregateRecord:
        return AggregateRecord(tag=doc["tag"], count=int(doc["count"]), group=doc.get("group"))


__all__ = ["MongoCountsStore"]
