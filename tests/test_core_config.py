# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from dataclasses import dataclass, field

import pytest

from qwatch_lib.core.config import Config, _dict_to_dataclass


def test_dict_to_dataclass_nested_conversion():
    @dataclass
    class Inner:
        value: int = 0

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)
        name: str = "default"

    data = {"inner": {"value": 99}, "name": "outer"}
    result = _dict_to_dataclass(Outer, data)

    assert isinstance(result, Outer)
    assert isinstance(result.inner, Inner)
    assert result.inner.value == 99
    assert result.name == "outer"


def test_dict_to_dataclass_partial_data_uses_defaults():
    @dataclass
    class Settings:
        required: str = "default"
        optional: int = 42

    result = _dict_to_dataclass(Settings, {"required": "provided"})

    assert result.required == "provided"
    assert result.optional == 42


def test_dict_to_dataclass_extra_fields_ignored():
    @dataclass
    class Settings:
        valid: str = "default"

    result = _dict_to_dataclass(Settings, {"valid": "value", "invalid": "ignored"})

    assert result.valid == "value"
    assert not hasattr(result, "invalid")


def test_dict_to_dataclass_non_dataclass_returns_unchanged():
    data = {"key": "value"}
    assert _dict_to_dataclass(str, data) == data


def test_get_config_path_env_variable_highest_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "custom_config.toml"
    config_file.write_text("")

    (tmp_path / "qwatch_config.toml").write_text("")

    monkeypatch.setenv("QWATCH_CONFIG", str(config_file))
    monkeypatch.chdir(tmp_path)

    assert Config._get_config_path() == config_file


def test_get_config_path_current_directory_second_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "qwatch_config.toml"
    config_file.write_text("")

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("QWATCH_CONFIG", raising=False)

    xdg_config = tmp_path / "config"
    (xdg_config / "qwatch").mkdir(parents=True)
    (xdg_config / "qwatch" / "config.toml").write_text("")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))

    assert Config._get_config_path() == config_file


def test_get_config_path_xdg_config_home_third_priority(tmp_path, monkeypatch):
    xdg_config = tmp_path / "config"
    (xdg_config / "qwatch").mkdir(parents=True)
    config_file = xdg_config / "qwatch" / "config.toml"
    config_file.write_text("")

    other_dir = tmp_path / "other"
    other_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))
    monkeypatch.chdir(other_dir)
    monkeypatch.delenv("QWATCH_CONFIG", raising=False)

    assert Config._get_config_path() == config_file


def test_get_config_path_returns_none_when_no_config_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("QWATCH_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))

    assert Config._get_config_path() is None


def test_load_with_explicit_path(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
binary_name = "qwatchd"

[clock]
tick_interval = 0.5

[density]
medium_min_width = 50

[links]
base_url = "https://example.org"

[exit_codes]
default = 100
""")

    config = Config.load(config_file)

    assert config.binary_name == "qwatchd"
    assert config.clock.tick_interval == 0.5
    assert config.density.medium_min_width == 50
    assert config.links.base_url == "https://example.org"
    assert config.exit_codes.default == 100

    # non-overriden values
    assert config.density.full_min_width == 90
    assert config.links.queue_detail_template == "/queues/{name}"
    assert config.exit_codes.unexpected_error == 99


def test_load_presenter_settings(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
[queues_presenter]
pause_icon = "||"
paused_style = "red"
""")

    config = Config.load(config_file)

    assert config.queues_presenter.pause_icon == "||"
    assert config.queues_presenter.paused_style == "red"
    assert config.queues_presenter.resume_icon == "▶"
    assert config.queues_presenter.loading_text == "Loading..."


def test_load_returns_defaults_when_file_missing(tmp_path):
    assert Config.load(tmp_path / "does_not_exist.toml") == Config()


def test_load_empty_config_file_uses_all_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("")

    assert Config.load(config_file) == Config()


def test_load_without_path_searches_standard_locations(tmp_path, monkeypatch):
    (tmp_path / "qwatch_config.toml").write_text('binary_name = "qwatchd"\n')

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("QWATCH_CONFIG", raising=False)

    assert Config.load().binary_name == "qwatchd"


def test_load_with_invalid_toml_raises_error(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
[clock
tick_interval = 5
""")  # missing closing bracket

    with pytest.raises(ValueError, match="Could not read qwatch config"):
        Config.load(config_file)
