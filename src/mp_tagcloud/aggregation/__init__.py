"""Aggregation – rules, strategies and the per-entity-type registry."""
from mp_tagcloud.aggregation.records import AggregateRecord, RecalculationResult, RecordQuery
from mp_tagcloud.aggregation.ports import CountsStore, EntitySource, StorageBackend
from mp_tagcloud.aggregation.rule import AggregationRule, CollectionRef
from mp_tagcloud.aggregation.registry import AggregationRegistry

__all__ = [
    "AggregateRecord",
    "AggregationRegistry",
    "AggregationRule",
    "CollectionRef",
    "CountsStore",
    "EntitySource",
    "RecalculationResult",
    "RecordQuery",
    "StorageBackend",
]
