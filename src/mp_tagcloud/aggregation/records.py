"""Aggregation – records stored in a rule's counts collection and query/result value objects."""

from __future__ import annotations

import dataclasses
from collections.abc import Hashable
from typing import Any

from bson import json_util


@dataclasses.dataclass(frozen=True)
class AggregateRecord:
    """One ``(tag, group) -> count`` entry.

    Only records with ``count > 0`` are visible to readers; a record that
    decays to zero stays in storage until compacted.
    """

    tag: str
    count: int
    group: Any = None

    @property
    def visible(self) -> bool:
        return self.count > 0


@dataclasses.dataclass(frozen=True)
class RecordQuery:
    """Read criteria understood by every :class:`CountsStore`.

    ``group=None`` means "no group filter". ``limit <= 0`` means unlimited.
    """

    group: Any = None
    prefix: str | None = None
    order_by_count: bool = False
    limit: int = 0


@dataclasses.dataclass(frozen=True)
class RecalculationResult:
    """Outcome of a full recomputation of one rule."""

    rule: str
    tags: int
    records: int
    elapsed_ms: float


@dataclasses.dataclass(frozen=True)
class _EncodedGroup:
    text: str


def group_key(group: Any) -> Hashable:
    """Hashable key for a group value.

    Scalars are their own key. Documents and arrays, which MongoDB accepts
    as group values, are keyed by their extended JSON.
    """
    try:
        hash(group)
    except TypeError:
        return _EncodedGroup(json_util.dumps(group))
    return group


__all__ = ["AggregateRecord", "RecalculationResult", "RecordQuery", "group_key"]
