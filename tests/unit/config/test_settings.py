"""Unit tests for TagCloudSettings and the settings loaders."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mp_tagcloud.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    SettingsFactory,
    SettingsLoader,
    TagCloudSettings,
)


class _BrokenLoader(SettingsLoader):
    def load(self, settings_class):  # type: ignore[override]
        raise ConfigError("unavailable")


class TestTagCloudSettings:
    def test_defaults(self) -> None:
        settings = TagCloudSettings()
        assert settings.database == "tagcloud"
        assert settings.default_strategy == "real_time"
        assert settings.collection_name_template == "{entity}_{rule}_aggregation"
        assert settings.log_level_value == logging.INFO

    def test_unknown_strategy(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            TagCloudSettings(default_strategy="map_reduce")
        assert exc_info.value.setting_name == "default_strategy"

    @pytest.mark.parametrize("template", ["{rule}_aggregation", "{entity}_counts"])
    def test_template_needs_entity_and_rule(self, template: str) -> None:
        with pytest.raises(InvalidSettingValueError):
            TagCloudSettings(collection_name_template=template)

    def test_unknown_log_level(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            TagCloudSettings(log_level="chatty")

    def test_log_level_is_case_insensitive(self) -> None:
        assert TagCloudSettings(log_level="debug").log_level_value == logging.DEBUG


    def test_env_key(self) -> None:
        assert TagCloudSettings.env_key("default_strategy") == "TAGCLOUD_DEFAULT_STRATEGY"

    def test_invalid_value_detail(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            TagCloudSettings(default_strategy="map_reduce")
        assert exc_info.value.detail["setting"] == "default_strategy"
        assert exc_info.value.detail["value"] == "'map_reduce'"


class TestEnvSettingsLoader:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGCLOUD_DATABASE", "blog")
        monkeypatch.setenv("TAGCLOUD_DEFAULT_STRATEGY", "batch_recompute")
        settings = EnvSettingsLoader().load(TagCloudSettings)
        assert settings.database == "blog"
        assert settings.default_strategy == "batch_recompute"
        assert settings.mongo_uri == "mongodb://localhost:27017"

    def test_invalid_value_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGCLOUD_DEFAULT_STRATEGY", "nope")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(TagCloudSettings)


class TestDotenvSettingsLoader:
    def test_reads_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("TAGCLOUD_DATABASE=from_dotenv\n")
        # registered with monkeypatch so teardown restores the variable
        monkeypatch.setenv("TAGCLOUD_DATABASE", "placeholder")
        settings = DotenvSettingsLoader(str(env_file), override=True).load(TagCloudSettings)
        assert settings.database == "from_dotenv"


class TestSettingsFactory:
    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGCLOUD_DATABASE", "blog")
        settings = SettingsFactory.create(
            TagCloudSettings, loaders=[EnvSettingsLoader()], overrides={"database": "override"}
        )
        assert settings.database == "override"

    def test_failing_loader_is_skipped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGCLOUD_LOG_LEVEL", "WARNING")
        settings = SettingsFactory.create(TagCloudSettings, loaders=[EnvSettingsLoader(), _BrokenLoader()])
        assert settings.log_level == "WARNING"

    def test_invalid_override(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SettingsFactory.create(TagCloudSettings, overrides={"default_strategy": "nope"})

    def test_unknown_field(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(TagCloudSettings, overrides={"colour": "blue"})
