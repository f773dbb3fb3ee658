"""Config settings – Settings: dataclass filled from prefixed environment variables."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class Settings:
    """Dataclass settings read from ``<PREFIX>_<FIELD>`` environment variables.

    Subclasses set ``_prefix`` (``TagCloudSettings`` uses ``TAGCLOUD``) and
    reject unusable values in :meth:`_validate`, which runs on construction
    so a bad strategy name or collection template fails before any
    registry is built.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """``TagCloudSettings.env_key("database")`` -> ``"TAGCLOUD_DATABASE"``."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _validate(self) -> None:
        """Raise :class:`InvalidSettingValueError` for values the engine cannot use."""


__all__ = ["Settings"]
