"""Pixel filter stages of the line art pipeline.

AIDEV-NOTE: Every stage is a pure function (PixelBuffer, ProcessingSettings)
-> PixelBuffer. Stages never touch their input array; each returns a fresh
buffer. Morphology is defined on ink coverage (ink is dark), so erosion
shrinks lines and dilation thickens them.
"""

from typing import TYPE_CHECKING

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from PIL import Image, ImageFilter

from .buffer import PixelBuffer

if TYPE_CHECKING:
    from colorpage.models import ProcessingSettings

# Luminance weights (ITU-R BT.601)
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

BINARIZE_THRESHOLD = 127  # Values above this become background

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]])
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]])


def grayscale(buffer: PixelBuffer, settings: "ProcessingSettings | None" = None) -> PixelBuffer:
    """Replace R, G and B with the rounded luminance; alpha is untouched."""
    rgb = buffer.data[..., :3].astype(np.float64)
    r_w, g_w, b_w = LUMA_WEIGHTS
    luma = r_w * rgb[..., 0] + g_w * rgb[..., 1] + b_w * rgb[..., 2]
    # Round half up; np.rint would round half to even
    gray = np.floor(luma + 0.5)
    return buffer.with_rgb(gray)


def adjust_contrast(buffer: PixelBuffer, settings: "ProcessingSettings") -> PixelBuffer:
    """Scale R, G and B around mid-gray, then shift by the brightness offset."""
    return apply_contrast_brightness(
        buffer, settings.contrast_factor, settings.brightness_offset
    )


def apply_contrast_brightness(
    buffer: PixelBuffer, contrast: float, brightness: int
) -> PixelBuffer:
    """Per-channel v' = clamp(0, 255, (v - 128) * contrast + 128 + brightness)."""
    rgb = buffer.data[..., :3].astype(np.float64)
    adjusted = (rgb - 128.0) * contrast + 128.0 + brightness
    return buffer.with_rgb(np.clip(np.rint(adjusted), 0, 255))


def gaussian_blur(buffer: PixelBuffer, settings: "ProcessingSettings") -> PixelBuffer:
    """Smooth RGB with a Gaussian of the configured radius."""
    return blur_rgb(buffer, settings.gaussian_radius)


def blur_rgb(buffer: PixelBuffer, radius: float) -> PixelBuffer:
    """Gaussian blur of the RGB channels using Pillow.

    AIDEV-NOTE: Pillow extends edge pixels outward, so border pixels are
    smoothed with the nearest valid neighborhood instead of being cropped.
    """
    if radius <= 0 or buffer.is_empty:
        return buffer.copy()
    rgb_image = Image.fromarray(np.ascontiguousarray(buffer.data[..., :3]))
    blurred = rgb_image.filter(ImageFilter.GaussianBlur(radius=radius))
    return buffer.with_rgb(np.asarray(blurred))


def detect_edges(buffer: PixelBuffer, settings: "ProcessingSettings") -> PixelBuffer:
    """Sobel gradient magnitude on the red channel, thresholded to ink/background."""
    return sobel_threshold(buffer, settings.edge_threshold)


def sobel_threshold(buffer: PixelBuffer, threshold: float) -> PixelBuffer:
    """Mark pixels whose gradient magnitude exceeds threshold as ink (0).

    The 1px border ring has no full 3x3 neighborhood and is always
    background (255).
    """
    height, width = buffer.height, buffer.width
    result = np.full((height, width), 255, dtype=np.uint8)

    if height >= 3 and width >= 3:
        windows = sliding_window_view(buffer.red.astype(np.int32), (3, 3))
        gx = np.einsum("ijkl,kl->ij", windows, SOBEL_X)
        gy = np.einsum("ijkl,kl->ij", windows, SOBEL_Y)
        magnitude = np.hypot(gx, gy)
        result[1:-1, 1:-1] = np.where(magnitude > threshold, 0, 255)

    return buffer.with_rgb(result, alpha=255)


def _window_extreme(rgb: np.ndarray, radius: int, reducer) -> np.ndarray:
    """Apply reducer (np.max or np.min) over a (2r+1)^2 window per pixel.

    The square window is separable, so rows and columns are reduced in two
    1D passes. Edge padding makes border windows use the nearest valid
    neighborhood.
    """
    size = 2 * radius + 1
    padded = np.pad(rgb, ((radius, radius), (0, 0), (0, 0)), mode="edge")
    rows = reducer(sliding_window_view(padded, size, axis=0), axis=-1)
    padded = np.pad(rows, ((0, 0), (radius, radius), (0, 0)), mode="edge")
    return reducer(sliding_window_view(padded, size, axis=1), axis=-1)


def erode(buffer: PixelBuffer, radius: int) -> PixelBuffer:
    """Shrink ink: a pixel stays ink only if its whole window is ink.

    On channel values this is the neighborhood maximum, since ink is dark.
    """
    if buffer.is_empty:
        return buffer.copy()
    return buffer.with_rgb(_window_extreme(buffer.data[..., :3], radius, np.max))


def dilate(buffer: PixelBuffer, radius: int) -> PixelBuffer:
    """Grow ink: a pixel becomes ink if any pixel in its window is ink.

    On channel values this is the neighborhood minimum.
    """
    if buffer.is_empty:
        return buffer.copy()
    return buffer.with_rgb(_window_extreme(buffer.data[..., :3], radius, np.min))


def morphological_opening(buffer: PixelBuffer, settings: "ProcessingSettings") -> PixelBuffer:
    """Erode then dilate, repeated per the complexity level.

    Removes isolated speckles narrower than the window while larger
    contours survive. COMPLEX runs zero iterations.
    """
    result = buffer
    for _ in range(settings.complexity_level.opening_iterations):
        result = erode(result, settings.morphology_radius)
        result = dilate(result, settings.morphology_radius)
    return result if result is not buffer else buffer.copy()


def thicken_lines(buffer: PixelBuffer, settings: "ProcessingSettings") -> PixelBuffer:
    """Extra dilation passes for medium and thick line weights."""
    result = buffer
    for _ in range(settings.line_weight.dilation_passes):
        result = dilate(result, settings.morphology_radius)
    return result if result is not buffer else buffer.copy()


def binarize(buffer: PixelBuffer, settings: "ProcessingSettings | None" = None) -> PixelBuffer:
    """Force every pixel to pure black or white, fully opaque.

    The red channel decides, matching how the tracer reads ink.
    """
    value = np.where(buffer.red > BINARIZE_THRESHOLD, 255, 0)
    return buffer.with_rgb(value, alpha=255)
