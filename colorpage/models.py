"""Data models and constants for the photo coloring converter."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from colorpage.errors import InvalidSettingsError

if TYPE_CHECKING:
    from colorpage.image_processing.buffer import PixelBuffer

# AIDEV-NOTE: Bounds filter buffer size; larger photos are downscaled on load
MAX_IMAGE_DIMENSION = 1200  # px, longest side after loading

# Configuration file path
CONFIG_FILE = Path.home() / ".photo_coloring_config.json"


class LineWeight(Enum):
    """Stroke weight of the generated line art.

    AIDEV-NOTE: The weight drives (weight - 1) extra dilation passes,
    so thin/medium/thick thicken the ink by 0/1/2 passes.
    """

    THIN = "thin"
    MEDIUM = "medium"
    THICK = "thick"

    @property
    def weight(self) -> int:
        return {"thin": 1, "medium": 2, "thick": 3}[self.value]

    @property
    def dilation_passes(self) -> int:
        return max(self.weight - 1, 0)

    @property
    def stroke_width(self) -> float:
        """Stroke width in output units for SVG previews."""
        return {"thin": 0.5, "medium": 1.0, "thick": 1.5}[self.value]


class ComplexityLevel(Enum):
    """How much fine detail survives the morphological cleanup."""

    SIMPLE = "simple"  # Aggressive speckle removal
    MODERATE = "moderate"
    COMPLEX = "complex"  # Preserve detail, no opening

    @property
    def opening_iterations(self) -> int:
        return {"simple": 2, "moderate": 1, "complex": 0}[self.value]


class PageSize(Enum):
    """Printed page size. Only consumed by the layout collaborator."""

    A4 = "a4"
    LETTER = "letter"
    A3 = "a3"


class PageTheme(Enum):
    """Page decoration theme. Only consumed by the layout collaborator."""

    MINIMAL = "minimal"
    DECORATIVE = "decorative"
    EDUCATIONAL = "educational"


@dataclass(frozen=True)
class ProcessingSettings:
    """Per-run configuration for the pixel pipeline.

    AIDEV-NOTE: Frozen so a batch can capture it once; a settings change
    made while a batch is running only affects the next run.
    """

    # Edge detection
    edge_threshold: float = 50.0  # Sobel magnitude cutoff

    # Line art style
    line_weight: LineWeight = LineWeight.MEDIUM
    complexity_level: ComplexityLevel = ComplexityLevel.MODERATE

    # Filter parameters
    gaussian_radius: float = 1.5  # px, 0 disables blur
    morphology_radius: int = 2  # px, window is (2r+1) x (2r+1)
    contrast_factor: float = 1.2  # multiplier around mid-gray
    brightness_offset: int = 0  # added after contrast

    # Layout hints, carried through untouched
    page_size: PageSize = PageSize.A4
    page_theme: PageTheme = PageTheme.MINIMAL

    def __post_init__(self):
        if not math.isfinite(self.edge_threshold) or self.edge_threshold < 0:
            raise InvalidSettingsError(
                f"edge_threshold must be a finite number >= 0, got {self.edge_threshold}"
            )
        if not math.isfinite(self.gaussian_radius) or self.gaussian_radius < 0:
            raise InvalidSettingsError(
                f"gaussian_radius must be >= 0, got {self.gaussian_radius}"
            )
        if isinstance(self.morphology_radius, bool) or not isinstance(
            self.morphology_radius, int
        ):
            raise InvalidSettingsError("morphology_radius must be an integer")
        if self.morphology_radius < 1:
            raise InvalidSettingsError(
                f"morphology_radius must be >= 1, got {self.morphology_radius}"
            )
        if not math.isfinite(self.contrast_factor) or self.contrast_factor <= 0:
            raise InvalidSettingsError(
                f"contrast_factor must be > 0, got {self.contrast_factor}"
            )
        if isinstance(self.brightness_offset, bool) or not isinstance(
            self.brightness_offset, int
        ):
            raise InvalidSettingsError("brightness_offset must be an integer")
        for name, enum_type in (
            ("line_weight", LineWeight),
            ("complexity_level", ComplexityLevel),
            ("page_size", PageSize),
            ("page_theme", PageTheme),
        ):
            if not isinstance(getattr(self, name), enum_type):
                raise InvalidSettingsError(
                    f"{name} must be a {enum_type.__name__}, got {getattr(self, name)!r}"
                )


@dataclass(frozen=True)
class ExtractionLimits:
    """Size caps and tolerances that bound the cost of one image."""

    simplify_tolerance: float = 1.0  # px, Douglas-Peucker tolerance
    min_contour_points: int = 10  # Smaller regions are treated as noise
    max_contour_points: int = 1000  # Flood traversal stops here
    max_image_pixels: int = MAX_IMAGE_DIMENSION * MAX_IMAGE_DIMENSION * 4
    max_paths_per_image: int = 20000

    def __post_init__(self):
        if self.simplify_tolerance < 0:
            raise InvalidSettingsError("simplify_tolerance must be >= 0")
        if self.min_contour_points < 1:
            raise InvalidSettingsError("min_contour_points must be >= 1")
        if self.max_contour_points < self.min_contour_points:
            raise InvalidSettingsError(
                "max_contour_points must be >= min_contour_points"
            )
        if self.max_image_pixels < 1 or self.max_paths_per_image < 1:
            raise InvalidSettingsError("size caps must be positive")


# --- Vector Models ---


class Point(NamedTuple):
    """A point in pixel-space coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box in pixel space."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class VectorPath:
    """A simplified, curve-fitted path extracted from one ink region.

    AIDEV-NOTE: path_data uses SVG path grammar (M, Q, L) so downstream
    layout code can drop it straight into a <path d="..."> element.
    """

    points: "tuple[Point, ...]"  # Simplified points the curve follows
    path_data: str  # Curve-command string
    length: float  # Polyline length of points, in px
    bounds: BoundingBox


@dataclass
class ExtractionStats:
    """Accounting for every contour seen while vectorizing one image."""

    contours_traced: int = 0  # Regions kept by the tracer
    contours_discarded: int = 0  # Regions below the minimum point count
    contours_truncated: int = 0  # Regions that hit the point cap
    paths_built: int = 0
    paths_degenerate: int = 0  # Fewer than 2 points after simplification
    paths_failed: int = 0
    failure_reasons: "list[str]" = field(default_factory=list)

    @property
    def contours_dropped(self) -> int:
        return self.contours_discarded + self.paths_degenerate + self.paths_failed


# --- Result Models ---


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ImageResult:
    """Result of processing one source image."""

    filename: str
    width: int  # px
    height: int  # px

    # Final binarized buffer, for raster preview
    processed: "PixelBuffer"

    # Extracted vector paths
    paths: "tuple[VectorPath, ...]"

    stats: ExtractionStats = field(default_factory=ExtractionStats)
    processed_at: str = field(default_factory=_utc_timestamp)

    @property
    def path_count(self) -> int:
        return len(self.paths)

    @property
    def total_length(self) -> float:
        return sum(path.length for path in self.paths)


@dataclass(frozen=True)
class ImageFailure:
    """A batch entry that could not be processed."""

    index: int
    filename: str
    error_kind: str  # Exception class name, e.g. "InvalidInputError"
    reason: str


@dataclass
class BatchResult:
    """Partial-result-friendly outcome of a batch run."""

    results: "list[ImageResult]" = field(default_factory=list)
    failures: "list[ImageFailure]" = field(default_factory=list)
    cancelled: bool = False

    @property
    def succeeded(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    def summary(self) -> str:
        """Human-readable completion report, one line per failure."""
        lines = [f"{self.succeeded} succeeded, {self.failed} failed"]
        if self.cancelled:
            lines[0] += " (cancelled)"
        for failure in self.failures:
            lines.append(
                f"  #{failure.index + 1} {failure.filename}: "
                f"{failure.error_kind}: {failure.reason}"
            )
        return "\n".join(lines)
