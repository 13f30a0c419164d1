"""Configuration management module for the job catalog."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config, validate_config_file
from .models import (
    AnalyticsConfig,
    CatalogConfig,
    DedupConfig,
    EnrichmentConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
)
from .validators import check_for_warnings, emit_warnings

__all__ = [
    # Main loader functions
    "load_config",
    "parse_config",
    "validate_config_file",
    "load_environment_config",
    "check_for_warnings",
    "emit_warnings",
    # Configuration models
    "CatalogConfig",
    "DedupConfig",
    "EnrichmentConfig",
    "AnalyticsConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
