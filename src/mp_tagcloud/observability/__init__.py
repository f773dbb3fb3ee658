"""Observability – structured logging for the aggregation engine."""
from mp_tagcloud.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
