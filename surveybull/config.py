"""Runtime configuration resolved from Streamlit secrets and the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

DEFAULT_API_BASE_URL = "https://localhost:7216"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"

ENV_API_BASE_URL = "SURVEY_API_BASE_URL"
ENV_SKIP_TUNNEL_WARNING = "SURVEY_SKIP_TUNNEL_WARNING"
ENV_REQUEST_TIMEOUT = "SURVEY_REQUEST_TIMEOUT"
ENV_SUBMISSION_URL = "SURVEY_SUBMISSION_URL"
ENV_LOG_LEVEL = "SURVEY_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Settings shared by the survey pages."""

    api_base_url: str = DEFAULT_API_BASE_URL
    skip_tunnel_warning: bool = False
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    submission_url: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _secrets_dict(secrets: Mapping, name: str) -> Dict[str, Any]:
    """Return a mapping stored under ``name`` in ``secrets``."""

    value = secrets.get(name, {})
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def _streamlit_secrets() -> Mapping:
    """Return Streamlit secrets, or an empty mapping when none are configured."""

    try:
        return dict(st.secrets)
    except (FileNotFoundError, StreamlitAPIException):
        return {}


def _first_value(*values: Any) -> Any:
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def _as_timeout(value: Any) -> float:
    if value is None:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return DEFAULT_REQUEST_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_REQUEST_TIMEOUT


def load_settings(
    secrets: Optional[Mapping] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve :class:`Settings` from secrets, then environment, then defaults."""

    if secrets is None:
        secrets = _streamlit_secrets()
    if environ is None:
        environ = os.environ

    api = _secrets_dict(secrets, "api")
    submission = _secrets_dict(secrets, "submission")

    base_url = _first_value(
        api.get("base_url"),
        secrets.get("api_base_url"),
        environ.get(ENV_API_BASE_URL),
        DEFAULT_API_BASE_URL,
    )
    skip_warning = _first_value(
        api.get("skip_tunnel_warning"),
        secrets.get("skip_tunnel_warning"),
        environ.get(ENV_SKIP_TUNNEL_WARNING),
    )
    timeout = _first_value(
        api.get("timeout"),
        secrets.get("request_timeout"),
        environ.get(ENV_REQUEST_TIMEOUT),
    )
    submission_url = _first_value(
        submission.get("url"),
        secrets.get("submission_url"),
        environ.get(ENV_SUBMISSION_URL),
    )
    log_level = _first_value(
        secrets.get("log_level"),
        environ.get(ENV_LOG_LEVEL),
        DEFAULT_LOG_LEVEL,
    )

    return Settings(
        api_base_url=str(base_url).strip().rstrip("/"),
        skip_tunnel_warning=_as_bool(skip_warning),
        request_timeout=_as_timeout(timeout),
        submission_url=str(submission_url).strip() if submission_url else None,
        log_level=str(log_level).strip().upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Attach a stream handler to the package logger once per process."""

    logger = logging.getLogger("surveybull")
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logger.setLevel(resolved)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


__all__ = ["Settings", "configure_logging", "load_settings"]
