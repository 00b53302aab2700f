"""Configuration management for approxoffset.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ApproximationConfig: Error bound and refinement limits
- OffsetConfig: Offset radius
- ProcessingConfig: Multi-polygon processing settings
- LoggingConfig: Logging settings
- OffsetSettings: Main application settings
"""

from approxoffset.config.settings import (
    ApproximationConfig,
    LoggingConfig,
    OffsetConfig,
    OffsetSettings,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "ApproximationConfig",
    "LoggingConfig",
    "OffsetConfig",
    "OffsetSettings",
    "ProcessingConfig",
    "get_default_settings",
]
