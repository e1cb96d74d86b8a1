"""Photo Coloring Converter - photographs to printable line art.

Reduces a photo to black-and-white line regions with a fixed pixel
pipeline, then extracts smooth, simplified vector paths from them.
"""

from .errors import (
    ColorPageError,
    ExtractionError,
    InvalidInputError,
    InvalidSettingsError,
    ProcessingCancelledError,
    ResourceExhaustedError,
)
from .image_processing import CancellationToken, PixelBuffer, PixelPipeline
from .models import (
    BatchResult,
    BoundingBox,
    ComplexityLevel,
    ExtractionLimits,
    ExtractionStats,
    ImageFailure,
    ImageResult,
    LineWeight,
    PageSize,
    PageTheme,
    Point,
    ProcessingSettings,
    VectorPath,
)
from .processor import ImageProcessor
from .vectorization import VectorExtractor

__version__ = "1.0.0"

__all__ = [
    # Orchestration
    "ImageProcessor",
    "PixelPipeline",
    "VectorExtractor",
    "CancellationToken",
    # Data
    "PixelBuffer",
    "ProcessingSettings",
    "ExtractionLimits",
    "LineWeight",
    "ComplexityLevel",
    "PageSize",
    "PageTheme",
    "Point",
    "BoundingBox",
    "VectorPath",
    "ExtractionStats",
    "ImageResult",
    "ImageFailure",
    "BatchResult",
    # Errors
    "ColorPageError",
    "InvalidInputError",
    "InvalidSettingsError",
    "ExtractionError",
    "ResourceExhaustedError",
    "ProcessingCancelledError",
]
