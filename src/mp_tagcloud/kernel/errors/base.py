"""BaseError: common parent of declaration, tag-input and counts-storage failures."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Parent of every error raised by tag aggregation.

    Registries raise subclasses while contexts and rules are declared, tag
    parsing raises them for malformed input, and the counts stores raise
    them when MongoDB fails. Each one carries a stable ``code`` and a
    ``detail`` dict (rule, context, collection, ...) that
    :func:`~mp_tagcloud.observability.logging.error_dict_processor` renders
    straight into structured log lines.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Names of the rule, context or collection involved.
        cause: Driver or parsing exception being wrapped.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """``code``, ``message`` and ``detail``, plus ``cause`` when wrapping another error."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
