"""Configuration management for LED Layout.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- PlacementConfig: Per-character placement request
- PlacementTuning: Numeric constants of the placement engine
- ValidationOptions: Path edit validation thresholds
- ProcessingConfig: Multi-character processing settings
- LoggingConfig: Logging settings
- LedLayoutSettings: Main application settings
"""

from ledlayout.config.settings import (
    DEFAULT_PIXELS_PER_INCH,
    LedLayoutSettings,
    LoggingConfig,
    Orientation,
    PlacementConfig,
    PlacementTuning,
    ProcessingConfig,
    ValidationOptions,
    get_default_settings,
)

__all__ = [
    "DEFAULT_PIXELS_PER_INCH",
    "LedLayoutSettings",
    "LoggingConfig",
    "Orientation",
    "PlacementConfig",
    "PlacementTuning",
    "ProcessingConfig",
    "ValidationOptions",
    "get_default_settings",
]
