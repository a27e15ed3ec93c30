"""
Configuration module for LogParse.

Provides the configuration file loader, the configured groups and the
resolved per-run options.
"""

from .loader import CONFIG_FILE_NAME, ConfigLoader
from .settings import DEFAULT_EXTENSION, ParseConfig, ParseOptions

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigLoader",
    "DEFAULT_EXTENSION",
    "ParseConfig",
    "ParseOptions",
]
