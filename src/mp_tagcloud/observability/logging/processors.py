"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog

from mp_tagcloud.kernel.errors import BaseError


def error_dict_processor(
    logger: Any,           # noqa: ARG001
    method_name: str,      # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Render :class:`BaseError` values as their ``to_dict()`` payload.

    Usage::

        log.error("tagcloud.save_failed", error=exc)
    """
    for key, value in event_dict.items():
        if isinstance(value, BaseError):
            event_dict[key] = value.to_dict()
    return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger, optionally bound to *initial_values*.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs bound on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["error_dict_processor", "get_logger"]
