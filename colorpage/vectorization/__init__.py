"""Vector path extraction from binarized line art.

AIDEV-NOTE: Components, in the order the extractor runs them:
- tracer: 8-connected ink regions as point clouds
- smoothing: circular moving average
- simplify: Douglas-Peucker reduction
- curves: quadratic curve commands, length and bounds
- extractor: VectorExtractor orchestrating the four steps
"""

from .curves import CurveBuilder
from .extractor import VectorExtractor
from .simplify import PathSimplifier
from .smoothing import ContourSmoother
from .tracer import RegionTracer

__all__ = [
    "CurveBuilder",
    "ContourSmoother",
    "PathSimplifier",
    "RegionTracer",
    "VectorExtractor",
]
