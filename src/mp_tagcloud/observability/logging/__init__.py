"""Observability – structlog configuration and logger helpers."""
from mp_tagcloud.observability.logging.factory import JsonLoggerFactory
from mp_tagcloud.observability.logging.processors import error_dict_processor, get_logger

__all__ = ["JsonLoggerFactory", "error_dict_processor", "get_logger"]
