"""Config settings – 12-factor env-based configuration."""
from mp_tagcloud.config.settings.base import Settings
from mp_tagcloud.config.settings.factory import SettingsFactory
from mp_tagcloud.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from mp_tagcloud.config.settings.tagcloud import TagCloudSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "TagCloudSettings",
]
