"""Command-line interface for navmesh.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Map triangulation with build statistics and JSON export
- Course plotting between two points
- Land/sea classification of a point
"""

from navmesh.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
