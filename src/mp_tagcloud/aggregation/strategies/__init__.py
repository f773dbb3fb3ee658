"""Aggregation strategies – RealTime (incremental) and BatchRecompute (full scan)."""
from __future__ import annotations

from typing import Any

from mp_tagcloud.aggregation.strategies.base import AggregationStrategy
from mp_tagcloud.aggregation.strategies.batch_recompute import BatchRecompute, count_tags, recompute
from mp_tagcloud.aggregation.strategies.real_time import RealTime
from mp_tagcloud.kernel.errors import InvalidStrategyError

DEFAULT_STRATEGY: type[AggregationStrategy] = RealTime

STRATEGIES: dict[str, type[AggregationStrategy]] = {
    RealTime.identifier: RealTime,
    BatchRecompute.identifier: BatchRecompute,
}


def resolve_strategy(strategy: Any) -> type[AggregationStrategy]:
    """Accept a strategy class or its identifier (``"real_time"``, ``"batch_recompute"``).

    Raises:
        InvalidStrategyError: not a concrete :class:`AggregationStrategy` subclass.
    """
    if isinstance(strategy, str):
        try:
            return STRATEGIES[strategy]
        except KeyError:
            raise InvalidStrategyError(strategy) from None
    if (
        isinstance(strategy, type)
        and issubclass(strategy, AggregationStrategy)
        and strategy.is_concrete()
    ):
        return strategy
    raise InvalidStrategyError(strategy)


__all__ = [
    "DEFAULT_STRATEGY",
    "STRATEGIES",
    "AggregationStrategy",
    "BatchRecompute",
    "RealTime",
    "count_tags",
    "recompute",
    "resolve_strategy",
]
