"""Config settings – TagCloudSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from mp_tagcloud.config.settings.base import Settings
from mp_tagcloud.config.validation import InvalidSettingValueError

_STRATEGY_IDENTIFIERS = frozenset({"real_time", "batch_recompute"})


@dataclasses.dataclass
class TagCloudSettings(Settings):
    """Runtime configuration, read from ``TAGCLOUD_*`` environment variables.

    ``collection_name_template`` builds default aggregation collection names
    from the ``{entity}`` collection name and the ``{rule}`` name.
    """

    _prefix: ClassVar[str] = "TAGCLOUD"

    mongo_uri: str = "mongodb://localhost:27017"
    database: str = "tagcloud"
    default_strategy: str = "real_time"
    collection_name_template: str = "{entity}_{rule}_aggregation"
    log_level: str = "INFO"

    def _validate(self) -> None:
        if self.default_strategy not in _STRATEGY_IDENTIFIERS:
            raise InvalidSettingValueError(
                "default_strategy",
                self.default_strategy,
                f"expected one of {sorted(_STRATEGY_IDENTIFIERS)}",
            )
        for token in ("{entity}", "{rule}"):
            if token not in self.collection_name_template:
                raise InvalidSettingValueError(
                    "collection_name_template",
                    self.collection_name_template,
                    f"missing {token} token",
                )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown level name")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["TagCloudSettings"]
