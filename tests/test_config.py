"""Tests for settings resolution and logging setup."""

from __future__ import annotations

import importlib
import logging


def _config():
    return importlib.import_module("surveybull.config")


def test_defaults_when_nothing_is_configured():
    config = _config()

    settings = config.load_settings(secrets={}, environ={})

    assert settings == config.Settings()
    assert settings.api_base_url == "https://localhost:7216"
    assert settings.submission_url is None


def test_secrets_table_takes_precedence_over_environment():
    config = _config()
    secrets = {
        "api": {"base_url": "https://api.example/", "skip_tunnel_warning": True, "timeout": "5"},
        "submission": {"url": "https://responses.example/api"},
        "log_level": "debug",
    }
    environ = {
        "SURVEY_API_BASE_URL": "https://env.example",
        "SURVEY_SUBMISSION_URL": "https://env.example/responses",
    }

    settings = config.load_settings(secrets=secrets, environ=environ)

    assert settings.api_base_url == "https://api.example"
    assert settings.skip_tunnel_warning is True
    assert settings.request_timeout == 5.0
    assert settings.submission_url == "https://responses.example/api"
    assert settings.log_level == "DEBUG"


def test_flat_secrets_keys_are_supported():
    config = _config()

    settings = config.load_settings(
        secrets={"api_base_url": "https://flat.example", "submission_url": "https://flat.example/r"},
        environ={},
    )

    assert settings.api_base_url == "https://flat.example"
    assert settings.submission_url == "https://flat.example/r"


def test_environment_fallback():
    config = _config()
    environ = {
        "SURVEY_API_BASE_URL": "https://env.example/",
        "SURVEY_SKIP_TUNNEL_WARNING": "yes",
        "SURVEY_REQUEST_TIMEOUT": "2.5",
        "SURVEY_LOG_LEVEL": "warning",
    }

    settings = config.load_settings(secrets={}, environ=environ)

    assert settings.api_base_url == "https://env.example"
    assert settings.skip_tunnel_warning is True
    assert settings.request_timeout == 2.5
    assert settings.log_level == "WARNING"


def test_invalid_timeout_uses_default():
    config = _config()

    for value in ("soon", "0", "-3"):
        settings = config.load_settings(secrets={}, environ={"SURVEY_REQUEST_TIMEOUT": value})
        assert settings.request_timeout == config.DEFAULT_REQUEST_TIMEOUT


def test_blank_values_are_ignored():
    config = _config()

    settings = config.load_settings(
        secrets={"api": {"base_url": "  "}},
        environ={"SURVEY_API_BASE_URL": "https://env.example"},
    )

    assert settings.api_base_url == "https://env.example"


def test_configure_logging_adds_a_single_handler():
    config = _config()
    logger = logging.getLogger("surveybull")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    for handler in saved_handlers:
        logger.removeHandler(handler)

    try:
        config.configure_logging("debug")
        config.configure_logging("info")
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO

        config.configure_logging("not-a-level")
        assert logger.level == logging.INFO
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        for handler in saved_handlers:
            logger.addHandler(handler)
        logger.setLevel(saved_level)
