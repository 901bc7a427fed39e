"""Tests for resolver settings and environment overrides."""

import logging

import pytest

from podscope_core.errors import ConfigError
from podscope_core.settings import (
    ENV_LOG_LEVEL,
    ENV_WARN_DUPLICATE_NAMES,
    ResolverSettings,
    configure_logging,
)


def test_defaults():
    settings = ResolverSettings.from_env(environ={})
    assert settings.log_level == "WARNING"
    assert settings.warn_on_duplicate_names is True


def test_environment_overrides_base():
    settings = ResolverSettings.from_env(
        {"log_level": "INFO", "warn_on_duplicate_names": True},
        environ={ENV_LOG_LEVEL: "debug", ENV_WARN_DUPLICATE_NAMES: "off"},
    )
    assert settings.log_level == "DEBUG"
    assert settings.warn_on_duplicate_names is False


def test_invalid_boolean_is_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="podscope_core.settings"):
        settings = ResolverSettings.from_env(environ={ENV_WARN_DUPLICATE_NAMES: "maybe"})
    assert settings.warn_on_duplicate_names is True
    assert ENV_WARN_DUPLICATE_NAMES in caplog.text
    assert caplog.records[-1].args == (ENV_WARN_DUPLICATE_NAMES, "maybe")


def test_invalid_log_level_is_rejected():
    with pytest.raises(ConfigError):
        ResolverSettings.from_env(environ={ENV_LOG_LEVEL: "LOUD"})


def test_unknown_settings_are_rejected():
    with pytest.raises(ConfigError):
        ResolverSettings.from_dict({"merge_mode": "replace"})


def test_non_boolean_flag_is_rejected():
    with pytest.raises(ConfigError):
        ResolverSettings(warn_on_duplicate_names="yes")


def test_configure_logging_sets_package_level():
    package_logger = configure_logging(ResolverSettings(log_level="debug"))
    try:
        assert package_logger.name == "podscope_core"
        assert package_logger.level == logging.DEBUG
    finally:
        package_logger.setLevel(logging.NOTSET)
