"""Configuration settings for Navmesh."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Configuration for geometric comparisons.

    A single distance tolerance is used for every collinearity, parallelism,
    on-segment and parametric-range test so that all primitives agree on
    what "touching" means.
    """

    epsilon: float = Field(
        default=1e-6,
        gt=0.0,
        le=0.1,
        description="Distance tolerance for collinear and on-segment tests",
    )


class DecompositionConfig(BaseModel):
    """Configuration for trapezoidal decomposition and triangulation."""

    coordinate_bound: float = Field(
        default=10000.0,
        gt=0.0,
        description="Half-extent of the sentinel trapezoid covering the world",
    )
    probe_distance: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Distance candidate diagonals are probed inward from each end",
    )
    validate_simple: bool = Field(
        default=False,
        description="Reject self-intersecting islands instead of triangulating best effort",
    )


class NavigationConfig(BaseModel):
    """Configuration for path nodes and boundary queries."""

    corner_clearance: float = Field(
        default=1.0,
        ge=0.0,
        le=100.0,
        description="Scale of the outward push applied to boundary corners",
    )
    edge_clearance: float = Field(
        default=1.0,
        ge=0.0,
        le=100.0,
        description="Distance a closest boundary point is nudged off the edge",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class NavmeshSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    decomposition: DecompositionConfig = Field(default_factory=DecompositionConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> NavmeshSettings:
    """Get default application settings."""
    return NavmeshSettings()
