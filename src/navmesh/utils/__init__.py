"""Utility functions for Navmesh."""

from navmesh.utils.logging import BuildLogger, BuildStats, configure_logging

__all__ = [
    "BuildLogger",
    "BuildStats",
    "configure_logging",
]
