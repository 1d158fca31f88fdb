"""Configuration for the importer."""

from .config import (
    ISSUE_STATES,
    MAX_BATCH_SIZE,
    ClubhouseConfig,
    Config,
    ConfigViolation,
    GitHubConfig,
    ImportConfig,
    LoggingConfig,
    validate_settings,
)

__all__ = [
    'ISSUE_STATES',
    'MAX_BATCH_SIZE',
    'ClubhouseConfig',
    'Config',
    'ConfigViolation',
    'GitHubConfig',
    'ImportConfig',
    'LoggingConfig',
    'validate_settings',
]
