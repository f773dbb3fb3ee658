"""Testing fakes – in-memory doubles for the aggregation ports."""
from mp_tagcloud.testing.fakes.backend import InMemoryBackend
from mp_tagcloud.testing.fakes.counts_store import InMemoryCountsStore
from mp_tagcloud.testing.fakes.entities import InMemoryEntityStore, LifecycleListener

__all__ = [
    "InMemoryBackend",
    "InMemoryCountsStore",
    "InMemoryEntityStore",
    "LifecycleListener",
]
