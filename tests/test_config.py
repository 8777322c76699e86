"""Tests for settings loading and validation."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from ensure.config import Settings, get_settings, load_settings, reset_settings
from ensure.errors import ConfigError


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "ensure.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_defaults():
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.log is False
    assert settings.log_file is None
    assert settings.test_prefix == "test"
    assert settings.location == "auto"


def test_load_file(tmp_yaml):
    path = tmp_yaml("""\
        log: true
        log_file: /tmp/ensure.log
        test_prefix: check_
        location: stack
    """)
    settings = load_settings(path, environ={})
    assert settings.log is True
    assert settings.log_file == Path("/tmp/ensure.log")
    assert settings.test_prefix == "check_"
    assert settings.location == "stack"


def test_empty_file(tmp_yaml):
    assert load_settings(tmp_yaml(""), environ={}) == Settings()


def test_file_from_environment(tmp_yaml):
    path = tmp_yaml("location: none\n")
    settings = load_settings(environ={"ENSURE_CONFIG": str(path)})
    assert settings.location == "none"


def test_environment_overrides_file(tmp_yaml):
    path = tmp_yaml("location: none\nlog: false\n")
    settings = load_settings(path, environ={"ENSURE_LOCATION": "stack", "ENSURE_LOG": "1"})
    assert settings.location == "stack"
    assert settings.log is True


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("no", False)],
)
def test_log_flag_parsing(raw, expected):
    assert load_settings(environ={"ENSURE_LOG": raw}).log is expected


def test_empty_environment_value_is_ignored():
    assert load_settings(environ={"ENSURE_LOCATION": ""}).location == "auto"


def test_variables_expanded_from_os_environ(tmp_yaml, tmp_path, monkeypatch):
    monkeypatch.setenv("ENSURE_TEST_LOG_DIR", str(tmp_path))
    path = tmp_yaml("log_file: ${ENSURE_TEST_LOG_DIR}/ensure.log\n")
    settings = load_settings(path, environ={})
    assert settings.log_file == tmp_path / "ensure.log"


def test_unset_variable_rejected(tmp_yaml, monkeypatch):
    monkeypatch.delenv("ENSURE_TEST_UNSET", raising=False)
    path = tmp_yaml("log_file: ${ENSURE_TEST_UNSET}/ensure.log\n")
    with pytest.raises(ConfigError, match="ENSURE_TEST_UNSET"):
        load_settings(path, environ={})


def test_variable_default_used(tmp_yaml, monkeypatch):
    monkeypatch.delenv("ENSURE_TEST_UNSET", raising=False)
    path = tmp_yaml("log_file: ${ENSURE_TEST_UNSET:-/var/log}/ensure.log\n")
    assert load_settings(path, environ={}).log_file == Path("/var/log/ensure.log")


def test_invalid_location_rejected():
    with pytest.raises(ConfigError, match="location"):
        load_settings(environ={"ENSURE_LOCATION": "sideways"})


def test_unknown_key_rejected(tmp_yaml):
    with pytest.raises(ConfigError, match="colour"):
        load_settings(tmp_yaml("colour: red\n"), environ={})


def test_empty_test_prefix_rejected(tmp_yaml):
    with pytest.raises(ConfigError, match="test_prefix"):
        load_settings(tmp_yaml("test_prefix: ''\n"), environ={})


def test_non_mapping_file_rejected(tmp_yaml):
    with pytest.raises(ConfigError, match="mapping"):
        load_settings(tmp_yaml("- a\n- b\n"), environ={})


def test_invalid_yaml_rejected(tmp_yaml):
    with pytest.raises(ConfigError, match="invalid YAML"):
        load_settings(tmp_yaml("log: [unclosed\n"), environ={})


def test_missing_file_rejected(tmp_path):
    with pytest.raises(ConfigError, match="cannot read"):
        load_settings(tmp_path / "nope.yaml", environ={})


def test_settings_are_frozen():
    with pytest.raises(ValidationError):
        Settings().log = True


def test_get_settings_is_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("ENSURE_LOCATION", "stack")
    assert get_settings() is first
    reset_settings()
    assert get_settings().location == "stack"
