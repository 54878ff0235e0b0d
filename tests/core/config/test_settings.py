# tests/core/config/test_settings.py
"""
Testes da leitura tipada das chaves de runtime e dos defaults embutidos.
"""

from pathlib import Path

import pytest

from pipeflow.core.config.errors import ConfigTypeConflictError, InvalidConfigValueError
from pipeflow.core.config.settings import DEFAULT_CONFIG, resolve_config, runtime_settings


def test_defaults_when_config_is_absent():
    cfg = resolve_config(None)
    settings = runtime_settings(cfg)

    assert cfg == DEFAULT_CONFIG
    assert cfg is not DEFAULT_CONFIG
    assert settings.log_level == "INFO"
    assert settings.manifest_enabled is True
    assert settings.manifest_path is None
    assert settings.capture_values is True


def test_overrides_are_applied():
    cfg = resolve_config(
        {"runtime": {"log_level": "debug"}, "manifest": {"path": "out/run.json", "capture_values": False}}
    )
    settings = runtime_settings(cfg)

    assert settings.log_level == "DEBUG"
    assert settings.manifest_path == Path("out/run.json")
    assert settings.capture_values is False


def test_invalid_log_level():
    with pytest.raises(InvalidConfigValueError):
        runtime_settings(resolve_config({"runtime": {"log_level": "CHATTY"}}))


def test_non_boolean_flag_conflicts_with_defaults():
    with pytest.raises(ConfigTypeConflictError):
        resolve_config({"manifest": {"enabled": "yes"}})


def test_non_boolean_flag_in_raw_config():
    with pytest.raises(InvalidConfigValueError):
        runtime_settings({"manifest": {"enabled": "yes"}})


def test_invalid_manifest_path():
    with pytest.raises(InvalidConfigValueError):
        runtime_settings({"manifest": {"path": 3}})
