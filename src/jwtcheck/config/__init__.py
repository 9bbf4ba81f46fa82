"""
Configuration management for jwtcheck
"""

from .settings import (
    KeyConfig,
    PRIMARY_KEY_ENV,
    SECONDARY_KEY_ENV,
    ENVIRONMENT_ENV,
    LEGACY_ENVIRONMENT_ENV,
    LOG_LEVEL_ENV,
    DEVELOPMENT,
    PRODUCTION,
    TEST,
    ENVIRONMENTS,
    read_key_file,
    configure_logging,
    load_config,
)

__all__ = [
    'KeyConfig',
    'PRIMARY_KEY_ENV',
    'SECONDARY_KEY_ENV',
    'ENVIRONMENT_ENV',
    'LEGACY_ENVIRONMENT_ENV',
    'LOG_LEVEL_ENV',
    'DEVELOPMENT',
    'PRODUCTION',
    'TEST',
    'ENVIRONMENTS',
    'read_key_file',
    'configure_logging',
    'load_config',
]
