"""Utility functions for ledlayout.

This module provides utility functions including:

- Logging setup and configuration
- Placement statistics tracking
"""

from ledlayout.utils.logging import (
    PlacementLogger,
    PlacementStats,
    configure_logging,
)

__all__ = [
    "PlacementLogger",
    "PlacementStats",
    "configure_logging",
]
