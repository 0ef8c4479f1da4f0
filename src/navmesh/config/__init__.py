"""Configuration management for navmesh.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Shared geometric tolerance
- DecompositionConfig: Trapezoidation and triangulation settings
- NavigationConfig: Path node clearance settings
- LoggingConfig: Logging settings
- NavmeshSettings: Main application settings
"""

from navmesh.config.settings import (
    DecompositionConfig,
    GeometryConfig,
    LoggingConfig,
    NavigationConfig,
    NavmeshSettings,
    get_default_settings,
)

__all__ = [
    "DecompositionConfig",
    "GeometryConfig",
    "LoggingConfig",
    "NavigationConfig",
    "NavmeshSettings",
    "get_default_settings",
]
