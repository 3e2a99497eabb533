"""Configuration management for rasterfont.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- VectorizeConfig: Tracing and simplification settings
- FontConfig: Font naming and metrics
- BuildConfig: FontForge discovery and supervision settings
- LoggingConfig: Logging settings
- RasterFontSettings: Main application settings
"""

from rasterfont.config.settings import (
    DEFAULT_TOOL_CANDIDATES,
    BuildConfig,
    FontConfig,
    LoggingConfig,
    RasterFontSettings,
    VectorizeConfig,
    get_default_settings,
)

__all__ = [
    "DEFAULT_TOOL_CANDIDATES",
    "BuildConfig",
    "FontConfig",
    "LoggingConfig",
    "RasterFontSettings",
    "VectorizeConfig",
    "get_default_settings",
]
