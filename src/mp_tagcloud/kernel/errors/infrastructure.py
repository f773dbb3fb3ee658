"""Infrastructure errors — failures of the backing counts store."""

from __future__ import annotations

from typing import Any

from mp_tagcloud.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a configuration or input problem."""

    default_code = "infrastructure_error"


class StorageError(InfrastructureError):
    """A counts-store operation failed.

    Never retried internally: an increment that is retried without an
    idempotency key may be applied twice.
    """

    default_code = "storage_error"

    def __init__(
        self,
        operation: str,
        collection: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or f"Storage operation '{operation}' failed on '{collection}'",
            detail={"operation": operation, "collection": collection},
            **kwargs,
        )
        self.operation = operation
        self.collection = collection


__all__ = ["InfrastructureError", "StorageError"]
