"""Aggregation – rule and collection name generation."""

from __future__ import annotations

import re

DEFAULT_COLLECTION_TEMPLATE = "{entity}_{rule}_aggregation"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """``RealTime`` -> ``real_time``, ``BatchRecompute`` -> ``batch_recompute``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def detokenize(
    template: str,
    *,
    context: str,
    group_by: str | None = None,
    strategy: str = "",
) -> str:
    """Substitute ``{context}``, ``{groupBy}``/``{group_by}`` and ``{strategy}`` in *template*.

    Unknown brace groups are left as they are.
    """
    subs = {
        "{context}": context,
        "{groupBy}": group_by or "",
        "{group_by}": group_by or "",
        "{strategy}": strategy,
    }
    out = template
    for token, value in subs.items():
        out = out.replace(token, value)
    return out


def default_rule_template(*, grouped: bool, scoped: bool, default_strategy: bool) -> str:
    template = "{context}"
    if grouped:
        template += "_by_{groupBy}"
    if scoped:
        template += "_with_scope"
    if not default_strategy:
        template += "_via_{strategy}"
    return template


def default_collection_name(entity: str, rule: str, template: str = DEFAULT_COLLECTION_TEMPLATE) -> str:
    return template.replace("{entity}", entity).replace("{rule}", rule)


__all__ = [
    "DEFAULT_COLLECTION_TEMPLATE",
    "default_collection_name",
    "default_rule_template",
    "detokenize",
    "underscore",
]
