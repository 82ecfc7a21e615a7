"""
settings.py

Runtime configuration and logging setup.

Values come from environment variables first and then from Streamlit secrets
(an ``[openai]`` table in ``.streamlit/secrets.toml``):

    OPENAI_API_KEY          API key for the extraction service
    FOLIO_OPENAI_MODEL      model name (default: gpt-4.1-mini)
    FOLIO_MAX_UPLOAD_MB     largest accepted PDF in megabytes (default: 10)
    FOLIO_TOTAL_TOLERANCE   allowed gap between line sum and document total (default: 1.0)
    FOLIO_LOG_LEVEL         logging level name (default: INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_MAX_UPLOAD_MB = 10
DEFAULT_TOTAL_TOLERANCE = 1.0
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    max_upload_mb: int = DEFAULT_MAX_UPLOAD_MB
    total_tolerance: float = DEFAULT_TOTAL_TOLERANCE
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def _streamlit_secrets() -> Mapping:
    """The ``[openai]`` table of the Streamlit secrets, or an empty mapping."""
    try:
        import streamlit as st

        return st.secrets.get("openai", {})
    except Exception as e:
        # No secrets.toml, or not running inside Streamlit
        logger.debug("Streamlit secrets unavailable: %s", e)
        return {}


def _lookup(name: str, secret_key: str, environ: Mapping[str, str], secrets: Mapping) -> Optional[str]:
    value = environ.get(name)
    if value:
        return value
    value = secrets.get(secret_key)
    return str(value) if value else None


def _as_number(raw: Optional[str], default, cast, name: str):
    if raw is None:
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", name, raw, default)
        return default
    return value


def load_settings(
    environ: Optional[Mapping[str, str]] = None, secrets: Optional[Mapping] = None
) -> Settings:
    """Build :class:`Settings` from the environment and Streamlit secrets."""
    environ = os.environ if environ is None else environ
    secrets = _streamlit_secrets() if secrets is None else secrets

    level = (_lookup("FOLIO_LOG_LEVEL", "log_level", environ, secrets) or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown FOLIO_LOG_LEVEL=%r, using %s", level, DEFAULT_LOG_LEVEL)
        level = DEFAULT_LOG_LEVEL

    return Settings(
        openai_api_key=_lookup("OPENAI_API_KEY", "api_key", environ, secrets),
        openai_model=_lookup("FOLIO_OPENAI_MODEL", "model", environ, secrets) or DEFAULT_MODEL,
        max_upload_mb=_as_number(
            _lookup("FOLIO_MAX_UPLOAD_MB", "max_upload_mb", environ, secrets),
            DEFAULT_MAX_UPLOAD_MB,
            int,
            "FOLIO_MAX_UPLOAD_MB",
        ),
        total_tolerance=_as_number(
            _lookup("FOLIO_TOTAL_TOLERANCE", "total_tolerance", environ, secrets),
            DEFAULT_TOTAL_TOLERANCE,
            float,
            "FOLIO_TOTAL_TOLERANCE",
        ),
        log_level=level,
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
