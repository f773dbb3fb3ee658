"""Configuration errors — raised while declaring contexts and rules, never at runtime."""

from __future__ import annotations

from typing import Any

from mp_tagcloud.kernel.errors.base import BaseError


class ConfigurationError(BaseError):
    """A tag context or aggregation rule declaration is invalid."""

    default_code = "configuration_error"


class TagContextNotFoundError(ConfigurationError):
    """A rule references a tag context that was never declared."""

    default_code = "tag_context_not_found"

    def __init__(self, context: str, entity: str | None = None, **kwargs: Any) -> None:
        msg = f"Tag context '{context}' not found"
        if entity is not None:
            msg = f"Tag context '{context}' not found on '{entity}'"
        super().__init__(msg, detail={"context": context, "entity": entity}, **kwargs)
        self.context = context
        self.entity = entity


class InvalidStrategyError(ConfigurationError):
    """The strategy is not a concrete :class:`AggregationStrategy` variant."""

    default_code = "invalid_strategy"

    def __init__(self, strategy: Any, **kwargs: Any) -> None:
        super().__init__(
            f"{strategy!r} is not a valid aggregation strategy",
            detail={"strategy": repr(strategy)},
            **kwargs,
        )
        self.strategy = strategy


class DuplicateRuleNameError(ConfigurationError):
    """Two rules on the same entity type resolved to the same name."""

    default_code = "duplicate_rule_name"

    def __init__(self, name: str, entity: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            f"Aggregation rule '{name}' is already registered",
            detail={"rule": name, "entity": entity},
            **kwargs,
        )
        self.name = name
        self.entity = entity


class DuplicateTagContextError(ConfigurationError):
    """A tag context with the same name is already declared."""

    default_code = "duplicate_tag_context"

    def __init__(self, context: str, **kwargs: Any) -> None:
        super().__init__(f"Tag context '{context}' is already declared", **kwargs)
        self.context = context


class ContextDeclaredAfterGlobalRuleError(ConfigurationError):
    """A tag context was declared after a rule covering all contexts.

    The global rule was expanded when it was declared, so the new context
    would silently be left out of aggregation.
    """

    default_code = "context_after_global_rule"

    def __init__(self, context: str, **kwargs: Any) -> None:
        super().__init__(
            f"Tag context '{context}' cannot be declared after a global aggregation rule",
            **kwargs,
        )
        self.context = context


class UnsupportedOptionForStrategyError(ConfigurationError):
    """The strategy does not implement an option the rule asks for."""

    default_code = "unsupported_option_for_strategy"

    def __init__(self, strategy: str, option: str, **kwargs: Any) -> None:
        super().__init__(
            f"'{option}' is not supported by the {strategy} strategy",
            detail={"strategy": strategy, "option": option},
            **kwargs,
        )
        self.strategy = strategy
        self.option = option


__all__ = [
    "ConfigurationError",
    "ContextDeclaredAfterGlobalRuleError",
    "DuplicateRuleNameError",
    "DuplicateTagContextError",
    "InvalidStrategyError",
    "TagContextNotFoundError",
    "UnsupportedOptionForStrategyError",
]
