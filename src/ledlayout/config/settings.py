"""Configuration settings for LED Layout."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from ledlayout.catalog import LEDModule

# Outline units per physical inch used by the design canvas
DEFAULT_PIXELS_PER_INCH = 12.5


class Orientation(str, Enum):
    """Module orientation for generated positions."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    AUTO = "auto"


class PlacementTuning(BaseModel):
    """Numeric constants of the placement engine.

    All lengths are in outline units (canvas pixels for font-rendered
    outlines). The defaults reproduce the reference behaviour; they are
    exposed so callers can adapt to unusual coordinate scales.
    """

    inset_distance: float = Field(
        default=2.0,
        gt=0.0,
        description="Distance inside the outline used to probe for the fill side",
    )
    min_local_width: float = Field(
        default=6.0,
        ge=0.0,
        description="Strokes thinner than this cannot hold a module",
    )
    samples_per_module: float = Field(
        default=12.0,
        gt=0.0,
        description="Outline samples taken per requested module",
    )
    min_step: float = Field(default=1.5, gt=0.0, description="Smallest sampling stride")
    max_step: float = Field(default=4.0, gt=0.0, description="Largest sampling stride")
    tangent_delta: float = Field(
        default=0.25,
        gt=0.0,
        description="Half-width of the finite difference used for tangents",
    )
    dedup_cell_factor: float = Field(
        default=0.9,
        gt=0.0,
        description="Deduplication grid cell size as a fraction of the step",
    )
    dedup_radius_factor: float = Field(
        default=0.75,
        gt=0.0,
        le=1.0,
        description="Minimum candidate separation as a fraction of the cell size",
    )
    chain_break_factor: float = Field(
        default=4.0,
        gt=1.0,
        description="Chain break threshold as a multiple of the step",
    )
    chain_break_render_factor: float = Field(
        default=1.25,
        gt=0.0,
        description="Chain break threshold as a multiple of the module render length",
    )
    module_render_length: float = Field(
        default=12.0,
        gt=0.0,
        description="Rendered module length used for footprint tests",
    )
    module_render_height: float = Field(
        default=5.0,
        gt=0.0,
        description="Rendered module height used for column spacing",
    )
    capsule_scale: float = Field(default=0.9, gt=0.0, le=1.0)
    retry_capsule_scale: float = Field(default=0.85, gt=0.0, le=1.0)
    retry_offset_scale: float = Field(default=0.75, gt=0.0, le=1.0)
    min_usable_width_factor: float = Field(
        default=1.25,
        gt=0.0,
        description="Lower bound of column span as a multiple of module height",
    )
    usable_width_factor: float = Field(
        default=0.65,
        gt=0.0,
        le=1.0,
        description="Column span as a fraction of the local stroke width",
    )
    edge_march_step: float = Field(
        default=2.0,
        gt=0.0,
        description="Linear march stride when searching for a stroke edge",
    )
    edge_refine_iterations: int = Field(
        default=12,
        ge=1,
        le=40,
        description="Bisection iterations refining an edge crossing",
    )


class PlacementConfig(BaseModel):
    """Per-character placement request."""

    target_module: LEDModule
    pixels_per_inch: float = Field(
        default=DEFAULT_PIXELS_PER_INCH,
        gt=0.0,
        description="Outline units per physical inch",
    )
    target_count: int | None = Field(
        default=None,
        ge=0,
        description="Requested module count (None = derive from module density)",
    )
    column_count: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Parallel module columns per centerline point",
    )
    orientation: Orientation = Field(default=Orientation.AUTO)
    tuning: PlacementTuning = Field(default_factory=PlacementTuning)


class ValidationOptions(BaseModel):
    """Options for free-hand path edit validation."""

    strict: bool = Field(
        default=False,
        description="Treat every violation as an error instead of a warning",
    )
    sample_spacing: float = Field(default=8.0, gt=0.0)
    min_samples: int = Field(default=24, ge=3)
    max_samples: int = Field(default=220, ge=3)
    bbox_margin_min: float = Field(default=3.0, ge=0.0)
    bbox_margin_ratio: float = Field(default=0.06, ge=0.0)
    length_ratio_limit: float = Field(default=3.5, gt=1.0)
    median_segment_factor: float = Field(default=14.0, gt=0.0)
    diagonal_factor: float = Field(default=2.2, gt=0.0)
    severe_spike_ratio: float = Field(default=2.5, gt=1.0)
    min_bbox_extent: float = Field(default=1e-3, gt=0.0)


class ProcessingConfig(BaseModel):
    """Configuration for multi-character processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
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


class LedLayoutSettings(BaseModel):
    """Main application settings."""

    tuning: PlacementTuning = Field(default_factory=PlacementTuning)
    validation: ValidationOptions = Field(default_factory=ValidationOptions)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> LedLayoutSettings:
    """Get default application settings."""
    return LedLayoutSettings()
