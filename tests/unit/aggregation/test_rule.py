"""Unit tests for AggregationRule resolution and rule naming."""

from __future__ import annotations

import dataclasses
from types import SimpleNamespace
from typing import Any

import pytest

from mp_tagcloud.aggregation import AggregationRule
from mp_tagcloud.aggregation.naming import (
    default_collection_name,
    default_rule_template,
    detokenize,
    underscore,
)
from mp_tagcloud.aggregation.strategies import (
    AggregationStrategy,
    BatchRecompute,
    RealTime,
    resolve_strategy,
)
from mp_tagcloud.kernel.errors import (
    InvalidStrategyError,
    TagContextNotFoundError,
    UnsupportedOptionForStrategyError,
)
from mp_tagcloud.kernel.tagging import TagContext


class Nightly(BatchRecompute):
    supports_group_by = True
    supports_scope = True


@dataclasses.dataclass
class _Articles:
    entity: str = "articles"
    database: Any = "main"
    contexts: dict[str, TagContext] = dataclasses.field(
        default_factory=lambda: {
            "tags": TagContext.declare(),
            "artists": TagContext.declare("a", as_="artists"),
        }
    )
    default_strategy: type[AggregationStrategy] = RealTime
    collection_name_template: str = "{entity}_{rule}_aggregation"


def _scope(doc: Any) -> bool:
    return True


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------


class TestNaming:
    def test_underscore(self) -> None:
        assert underscore("RealTime") == "real_time"
        assert underscore("BatchRecompute") == "batch_recompute"
        assert underscore("Nightly") == "nightly"

    def test_detokenize_all_tokens(self) -> None:
        assert detokenize(
            "{context}-{groupBy}-{group_by}-{strategy}", context="tags", group_by="user", strategy="real_time"
        ) == "tags-user-user-real_time"

    def test_detokenize_without_group(self) -> None:
        assert detokenize("{context}_{groupBy}", context="tags") == "tags_"

    @pytest.mark.parametrize(
        ("grouped", "scoped", "default_strategy", "expected"),
        [
            (False, False, True, "{context}"),
            (True, False, True, "{context}_by_{groupBy}"),
            (False, True, True, "{context}_with_scope"),
            (False, False, False, "{context}_via_{strategy}"),
            (True, True, False, "{context}_by_{groupBy}_with_scope_via_{strategy}"),
        ],
    )
    def test_default_rule_template(self, grouped: bool, scoped: bool, default_strategy: bool, expected: str) -> None:
        assert default_rule_template(grouped=grouped, scoped=scoped, default_strategy=default_strategy) == expected

    def test_default_collection_name(self) -> None:
        assert default_collection_name("articles", "tags", "{entity}_{rule}_aggregation") == "articles_tags_aggregation"


# ---------------------------------------------------------------------------
# Rule names
# ---------------------------------------------------------------------------


class TestRuleName:
    def test_plain(self) -> None:
        assert AggregationRule.resolve(_Articles(), "tags").name == "tags"

    def test_alias_context(self) -> None:
        rule = AggregationRule.resolve(_Articles(), "artists")
        assert rule.name == "artists"
        assert rule.context.attribute_key == "a"

    def test_group_by(self) -> None:
        rule = AggregationRule.resolve(_Articles(), "tags", group_by="foo")
        assert rule.name == "tags_by_foo"
        assert rule.grouped

    def test_scope(self) -> None:
        assert AggregationRule.resolve(_Articles(), "tags", scope=_scope).name == "tags_with_scope"

    def test_non_default_strategy(self) -> None:
        rule = AggregationRule.resolve(_Articles(), "tags", strategy=BatchRecompute)
        assert rule.name == "tags_via_batch_recompute"
        assert rule.strategy_identifier == "batch_recompute"

    def test_default_strategy_by_identifier_is_not_suffixed(self) -> None:
        assert AggregationRule.resolve(_Articles(), "tags", strategy="real_time").name == "tags"

    def test_all_options(self) -> None:
        rule = AggregationRule.resolve(_Articles(), "tags", group_by="foo", scope=_scope, strategy=Nightly)
        assert rule.name == "tags_by_foo_with_scope_via_nightly"

    def test_explicit_name(self) -> None:
        assert AggregationRule.resolve(_Articles(), "tags", name="my_cloud").name == "my_cloud"

    def test_explicit_name_with_tokens(self) -> None:
        rule = AggregationRule.resolve(
            _Articles(),
            "tags",
            name="my_{context}_with_group_{groupBy}_and_strat_{strategy}",
            group_by="foo",
            strategy=Nightly,
        )
        assert rule.name == "my_tags_with_group_foo_and_strat_nightly"


# ---------------------------------------------------------------------------
# Storage resolution
# ---------------------------------------------------------------------------


class TestCollectionResolution:
    def test_defaults(self) -> None:
        ref = AggregationRule.resolve(_Articles(), "tags").collection
        assert ref.name == "articles_tags_aggregation"
        assert ref.database == "main"
        assert ref.handle is None

    def test_default_name_follows_rule_name(self) -> None:
        ref = AggregationRule.resolve(_Articles(), "tags", group_by="user").collection
        assert ref.name == "articles_tags_by_user_aggregation"

    def test_custom_template(self) -> None:
        ref = AggregationRule.resolve(_Articles(collection_name_template="agg_{rule}_{entity}"), "tags").collection
        assert ref.name == "agg_tags_articles"

    def test_database_option(self) -> None:
        ref = AggregationRule.resolve(_Articles(), "tags", database="other").collection
        assert ref.name == "articles_tags_aggregation"
        assert ref.database == "other"

    def test_collection_name(self) -> None:
        ref = AggregationRule.resolve(_Articles(), "tags", collection_name="foobar").collection
        assert ref.name == "foobar"
        assert ref.database == "main"

    def test_collection_name_with_tokens(self) -> None:
        ref = AggregationRule.resolve(_Articles(), "tags", collection_name="{context}_by_{groupBy}", group_by="u").collection
        assert ref.name == "tags_by_u"

    def test_collection_name_and_database(self) -> None:
        ref = AggregationRule.resolve(_Articles(), "tags", collection_name="foobar", database="other").collection
        assert (ref.name, ref.database) == ("foobar", "other")

    def test_collection_handle_wins(self) -> None:
        handle = SimpleNamespace(name="my_collection", database="handle_db")
        ref = AggregationRule.resolve(
            _Articles(), "tags", collection=handle, collection_name="ignored", database="ignored"
        ).collection
        assert ref.name == "my_collection"
        assert ref.database == "handle_db"
        assert ref.handle is handle


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestRuleValidation:
    def test_unknown_context(self) -> None:
        with pytest.raises(TagContextNotFoundError):
            AggregationRule.resolve(_Articles(), "foobar")

    @pytest.mark.parametrize("strategy", ["nope", list, AggregationStrategy, 42])
    def test_invalid_strategy(self, strategy: Any) -> None:
        with pytest.raises(InvalidStrategyError):
            AggregationRule.resolve(_Articles(), "tags", strategy=strategy)

    def test_batch_recompute_rejects_group_by(self) -> None:
        with pytest.raises(UnsupportedOptionForStrategyError):
            AggregationRule.resolve(_Articles(), "tags", strategy="batch_recompute", group_by="user")

    def test_rule_is_frozen(self) -> None:
        rule = AggregationRule.resolve(_Articles(), "tags")
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.name = "other"  # type: ignore[misc]


class TestResolveStrategy:
    def test_identifiers(self) -> None:
        assert resolve_strategy("real_time") is RealTime
        assert resolve_strategy("batch_recompute") is BatchRecompute

    def test_custom_subclass(self) -> None:
        assert resolve_strategy(Nightly) is Nightly
        assert Nightly.identifier == "nightly"
