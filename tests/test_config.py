"""Tests for loading converter settings from jatsgraph.toml."""

import pytest
from pydantic import ValidationError

from jatsgraph.config import DEFAULT_DOI_BASE_URL, DEFAULT_FIGURE_URL, ConverterSettings, load_config


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No config from the environment or the working directory leaks in."""
    monkeypatch.delenv("JATSGRAPH_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


def write(path, body):
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_without_file():
    settings = load_config()
    assert settings == ConverterSettings()
    assert settings.strict is False
    assert settings.doi_base_url == DEFAULT_DOI_BASE_URL
    assert settings.placeholder_figure_url == DEFAULT_FIGURE_URL


def test_explicit_path(tmp_path):
    path = write(tmp_path / "custom.toml", '[converter]\nstrict = true\ndoi_base_url = "https://doi.org/"\n')
    settings = load_config(path)
    assert settings.strict is True
    assert settings.doi_base_url == "https://doi.org/"


def test_working_directory_file(tmp_path):
    write(tmp_path / "jatsgraph.toml", '[converter]\nlog_level = "DEBUG"\n')
    assert load_config().log_level == "DEBUG"


def test_env_var_wins(tmp_path, monkeypatch):
    write(tmp_path / "jatsgraph.toml", "[converter]\nstrict = false\n")
    env_file = write(tmp_path / "env.toml", "[converter]\nstrict = true\n")
    monkeypatch.setenv("JATSGRAPH_CONFIG", str(env_file))
    assert load_config().strict is True


def test_overrides_win_over_file(tmp_path):
    path = write(tmp_path / "c.toml", "[converter]\nstrict = true\n")
    assert load_config(path, strict=False).strict is False


def test_none_overrides_are_ignored(tmp_path):
    path = write(tmp_path / "c.toml", "[converter]\nstrict = true\n")
    assert load_config(path, strict=None).strict is True


def test_other_tables_and_unknown_keys_are_ignored(tmp_path):
    path = write(tmp_path / "c.toml", '[server]\nport = 1\n[converter]\ncolour = "blue"\n')
    assert load_config(path) == ConverterSettings()


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = write(tmp_path / "c.toml", '[converter]\nstrict = "sometimes"\n')
    assert load_config(path) == ConverterSettings()


def test_unreadable_toml_falls_back_to_defaults(tmp_path):
    path = write(tmp_path / "c.toml", "[converter\nstrict = ")
    assert load_config(path) == ConverterSettings()


def test_settings_are_frozen():
    settings = ConverterSettings()
    with pytest.raises(ValidationError):
        settings.strict = True
