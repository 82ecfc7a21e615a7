"""
Tests for configuration loading from the environment and Streamlit secrets.
"""

import logging

from settings import (
    DEFAULT_MAX_UPLOAD_MB,
    DEFAULT_MODEL,
    DEFAULT_TOTAL_TOLERANCE,
    load_settings,
)


def test_defaults():
    settings = load_settings(environ={}, secrets={})
    assert settings.openai_api_key is None
    assert settings.openai_model == DEFAULT_MODEL
    assert settings.max_upload_mb == DEFAULT_MAX_UPLOAD_MB
    assert settings.max_upload_bytes == DEFAULT_MAX_UPLOAD_MB * 1024 * 1024
    assert settings.total_tolerance == DEFAULT_TOTAL_TOLERANCE
    assert settings.log_level == 'INFO'


def test_environment_values():
    settings = load_settings(
        environ={
            'OPENAI_API_KEY': 'sk-env',
            'FOLIO_OPENAI_MODEL': 'gpt-4o',
            'FOLIO_MAX_UPLOAD_MB': '5',
            'FOLIO_TOTAL_TOLERANCE': '0.5',
            'FOLIO_LOG_LEVEL': 'debug',
        },
        secrets={},
    )
    assert settings.openai_api_key == 'sk-env'
    assert settings.openai_model == 'gpt-4o'
    assert settings.max_upload_mb == 5
    assert settings.total_tolerance == 0.5
    assert settings.log_level == 'DEBUG'


def test_secrets_used_when_environment_is_silent():
    settings = load_settings(environ={}, secrets={'api_key': 'sk-secret', 'max_upload_mb': 20})
    assert settings.openai_api_key == 'sk-secret'
    assert settings.max_upload_mb == 20


def test_environment_wins_over_secrets():
    settings = load_settings(environ={'OPENAI_API_KEY': 'sk-env'}, secrets={'api_key': 'sk-secret'})
    assert settings.openai_api_key == 'sk-env'


def test_invalid_values_fall_back_to_defaults(caplog):
    with caplog.at_level(logging.WARNING, logger='settings'):
        settings = load_settings(
            environ={
                'FOLIO_MAX_UPLOAD_MB': 'ten',
                'FOLIO_TOTAL_TOLERANCE': '-1',
                'FOLIO_LOG_LEVEL': 'chatty',
            },
            secrets={},
        )
    assert settings.max_upload_mb == DEFAULT_MAX_UPLOAD_MB
    assert settings.total_tolerance == DEFAULT_TOTAL_TOLERANCE
    assert settings.log_level == 'INFO'
    assert len(caplog.records) == 3
