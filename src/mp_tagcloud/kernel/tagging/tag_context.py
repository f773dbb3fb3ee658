"""Tagging – TagContext: one tag-bearing attribute of an entity type."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from mp_tagcloud.kernel.errors import InvalidTagFormatError

Snapshot = Mapping[str, Any]


@dataclasses.dataclass(frozen=True)
class TagContext:
    """Binding between an entity type and the attribute its tags live in.

    ``name`` is how rules and readers refer to the context; ``attribute_key``
    is the field read from entity snapshots. The two only differ when the
    context is declared with an alias.
    """

    DEFAULT_ATTRIBUTE: ClassVar[str] = "tags"
    DEFAULT_SEPARATOR: ClassVar[str] = " "

    name: str
    attribute_key: str
    separator: str = DEFAULT_SEPARATOR

    @classmethod
    def declare(
        cls,
        attribute_key: str | None = None,
        *,
        as_: str | None = None,
        separator: str | None = None,
    ) -> TagContext:
        key = attribute_key or cls.DEFAULT_ATTRIBUTE
        return cls(
            name=as_ or key,
            attribute_key=key,
            separator=separator if separator is not None else cls.DEFAULT_SEPARATOR,
        )

    def format_tags(self, value: Any) -> list[str]:
        """Coerce *value* into a cleaned, de-duplicated, ordered tag list.

        Strings are split on :attr:`separator`; lists, tuples and sets are
        taken as they are. ``None`` members are dropped, the rest stripped,
        blanks removed and duplicates removed keeping the first occurrence.

        Raises:
            InvalidTagFormatError: *value* is neither a string nor a collection.
        """
        if value is None:
            return []
        if isinstance(value, str):
            raw: Iterable[Any] = value.split(self.separator)
        elif isinstance(value, (list, tuple, set, frozenset)):
            raw = value
        else:
            raise InvalidTagFormatError(value)

        cleaned: dict[str, None] = {}
        for item in raw:
            if item is None:
                continue
            if not isinstance(item, str):
                raise InvalidTagFormatError(item)
            tag = item.strip()
            if tag:
                cleaned.setdefault(tag, None)
        return list(cleaned)

    def tag_string(self, tags: Iterable[str]) -> str:
        return self.separator.join(tags)

    def tags_of(self, snapshot: Snapshot | None) -> list[str]:
        """Return the normalised tags stored on *snapshot* (``[]`` when absent)."""
        if snapshot is None:
            return []
        return self.format_tags(snapshot.get(self.attribute_key))

    def tagged_with_filter(self, tags: Any) -> dict[str, Any]:
        """MongoDB filter matching entities that carry every tag in *tags*."""
        return {self.attribute_key: {"$all": self.format_tags(tags)}}


__all__ = ["Snapshot", "TagContext"]
