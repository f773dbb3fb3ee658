"""MongoDB adapter — MongoBackend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mp_tagcloud.adapters.mongodb.counts_store import MongoCountsStore
from mp_tagcloud.adapters.mongodb.entity_source import MongoEntitySource
from mp_tagcloud.aggregation.ports import StorageBackend

if TYPE_CHECKING:
    from mp_tagcloud.aggregation.rule import CollectionRef
    from mp_tagcloud.config.settings import TagCloudSettings


class MongoBackend(StorageBackend):
    """Builds motor-backed counts stores and entity sources.

    ``CollectionRef.database`` may be a motor database handle or a database
    name; names are looked up on the client of the default database.

    Usage::

        backend = MongoBackend.from_settings(TagCloudSettings())
        registry = AggregationRegistry("articles", backend=backend)
    """

    def __init__(self, database: Any, *, client: Any = None) -> None:
        self._db = database
        self._client = client if client is not None else getattr(database, "client", None)

    @classmethod
    def from_settings(cls, settings: TagCloudSettings) -> MongoBackend:
        import motor.motor_asyncio as motor_async

        client = motor_async.AsyncIOMotorClient(settings.mongo_uri)
        return cls(client[settings.database], client=client)

    @property
    def default_database(self) -> Any:
        return self._db

    def counts_store(self, ref: CollectionRef, *, grouped: bool = False) -> MongoCountsStore:
        if ref.handle is not None:
            return MongoCountsStore(ref.handle, grouped=grouped)
        return MongoCountsStore(self._database(ref.database)[ref.name], grouped=grouped)

    def entity_source(self, entity: str, database: Any = None) -> MongoEntitySource:
        return MongoEntitySource(self._database(database)[entity])

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def _database(self, database: Any) -> Any:
        if database is None:
            return self._db
        if isinstance(database, str):
            return self._client[database]
        return database


__all__ = ["MongoBackend"]
