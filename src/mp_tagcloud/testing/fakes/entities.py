"""Testing fakes – InMemoryEntityStore."""
from __future__ import annotations

import copy
import itertools
from collections.abc import AsyncIterator, Sequence
from typing import Any, Protocol

from mp_tagcloud.aggregation.ports import EntitySource
from mp_tagcloud.kernel.tagging import Snapshot


class LifecycleListener(Protocol):
    async def on_entity_saved(self, before: Snapshot | None, after: Snapshot) -> None: ...

    async def on_entity_destroyed(self, before: Snapshot) -> None: ...


class InMemoryEntityStore(EntitySource):
    """Stand-in for the entity persistence layer.

    Stores documents by ``_id`` and, after every create/update/destroy,
    fires the post-commit hooks of each subscribed listener with detached
    before/after snapshots.
    """

    def __init__(self) -> None:
        self._docs: dict[Any, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._listeners: list[LifecycleListener] = []

    def subscribe(self, listener: LifecycleListener) -> None:
        self._listeners.append(listener)

    async def create(self, **attributes: Any) -> Any:
        doc = dict(attributes)
        doc.setdefault("_id", next(self._ids))
        self._docs[doc["_id"]] = doc
        for listener in self._listeners:
            await listener.on_entity_saved(None, copy.deepcopy(doc))
        return doc["_id"]

    async def update(self, entity_id: Any, **changes: Any) -> None:
        before = copy.deepcopy(self._docs[entity_id])
        self._docs[entity_id].update(changes)
        after = copy.deepcopy(self._docs[entity_id])
        for listener in self._listeners:
            await listener.on_entity_saved(before, after)

    async def destroy(self, entity_id: Any) -> None:
        before = self._docs.pop(entity_id)
        for listener in self._listeners:
            await listener.on_entity_destroyed(copy.deepcopy(before))

    def get(self, entity_id: Any) -> dict[str, Any]:
        return copy.deepcopy(self._docs[entity_id])

    async def scan(self, fields: Sequence[str] | None = None) -> AsyncIterator[Snapshot]:
        for doc in list(self._docs.values()):
            if fields is None:
                yield copy.deepcopy(doc)
            else:
                yield {key: copy.deepcopy(doc[key]) for key in ("_id", *fields) if key in doc}


__all__ = ["InMemoryEntityStore", "LifecycleListener"]
