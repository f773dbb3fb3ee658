"""Domain errors — bad tag input and invalid queries."""

from __future__ import annotations

from typing import Any

from mp_tagcloud.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when tag input or a query violates the aggregation model."""

    default_code = "domain_error"


class InvalidTagFormatError(DomainError):
    """Tag input cannot be coerced into a list of tags."""

    default_code = "invalid_tag_format"

    def __init__(self, value: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot convert {type(value).__name__} to a tag list",
            detail={"type": type(value).__name__},
            **kwargs,
        )
        self.value = value


class InvalidTagQueryError(DomainError):
    """A read asked for something the rule cannot answer."""

    default_code = "invalid_tag_query"


class RuleNotFoundError(DomainError):
    """No rule is registered under the requested name or context."""

    default_code = "rule_not_found"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"Aggregation rule '{name}' not found", **kwargs)
        self.name = name


__all__ = [
    "DomainError",
    "InvalidTagFormatError",
    "InvalidTagQueryError",
    "RuleNotFoundError",
]
