"""Pixel pipeline for photo-to-line-art conversion.

AIDEV-NOTE: This package turns a decoded photograph into a binarized
line art buffer. Organized into modular components:
- buffer: PixelBuffer, the RGBA substrate every stage reads and writes
- filters: Pure filter stages (grayscale, contrast, blur, edges, morphology)
- pipeline: PixelPipeline running the stages in their fixed order
- svg_export: SVG preview of extracted paths
- utils: Scaling and point geometry helpers
"""

from .buffer import PixelBuffer
from .pipeline import STAGE_NAMES, CancellationToken, PixelPipeline
from .svg_export import paths_to_svg

__all__ = [
    "PixelBuffer",
    "PixelPipeline",
    "CancellationToken",
    "STAGE_NAMES",
    "paths_to_svg",
]
