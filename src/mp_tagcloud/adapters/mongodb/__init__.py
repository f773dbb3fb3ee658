"""MongoDB adapter — counts store, entity source and backend.

Built on motor (asyncio driver for MongoDB)::

    pip install mp-tagcloud
"""

from mp_tagcloud.adapters.mongodb.backend import MongoBackend
from mp_tagcloud.adapters.mongodb.counts_store import MongoCountsStore
from mp_tagcloud.adapters.mongodb.entity_source import MongoEntitySource

__all__ = [
    "MongoBackend",
    "MongoCountsStore",
    "MongoEntitySource",
]
