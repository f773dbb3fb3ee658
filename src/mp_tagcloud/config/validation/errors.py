"""Config validation errors – failures while loading ``TagCloudSettings``."""
from mp_tagcloud.kernel.errors import ConfigurationError


class ConfigError(ConfigurationError):
    """Settings could not be loaded or built."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting without a default has no value in any loader."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable, e.g. an unknown strategy identifier."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "value": repr(value), "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
