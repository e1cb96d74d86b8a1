"""RGBA pixel buffer shared by every filter stage.

AIDEV-NOTE: Pixels are stored as a (height, width, 4) uint8 numpy array,
which is the flat width*height*4 RGBA byte layout viewed row by row.
Filters may return a new buffer or a modified copy; they never mutate the
buffer they were given.
"""

from dataclasses import dataclass

import numpy as np
from PIL import Image

from colorpage.errors import InvalidInputError

INK_THRESHOLD = 128  # Channel values below this are ink


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Raw RGBA channel data plus dimensions."""

    width: int
    height: int
    data: np.ndarray  # Shape (height, width, 4), dtype uint8

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidInputError(
                f"Buffer dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if self.data.size != self.width * self.height * 4:
            raise InvalidInputError(
                f"Buffer holds {self.data.size} channel values, expected "
                f"{self.width * self.height * 4} for {self.width}x{self.height} RGBA"
            )
        if self.data.shape != (self.height, self.width, 4) or self.data.dtype != np.uint8:
            object.__setattr__(
                self,
                "data",
                np.ascontiguousarray(self.data, dtype=np.uint8).reshape(
                    self.height, self.width, 4
                ),
            )

    # --- Constructors ---

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Wrap an (H, W, 4) RGBA, (H, W, 3) RGB or (H, W) gray array."""
        array = np.asarray(array)
        if array.ndim == 2:
            gray = array.astype(np.uint8)
            alpha = np.full_like(gray, 255)
            array = np.stack([gray, gray, gray, alpha], axis=-1)
        elif array.ndim == 3 and array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array.astype(np.uint8), alpha], axis=-1)
        elif array.ndim != 3 or array.shape[2] != 4:
            raise InvalidInputError(f"Unsupported pixel array shape {array.shape}")
        height, width = array.shape[:2]
        return cls(width=width, height=height, data=array.astype(np.uint8, copy=True))

    @classmethod
    def from_rgba_bytes(cls, width: int, height: int, rgba: bytes) -> "PixelBuffer":
        """Build a buffer from flat RGBA bytes (row-major, 4 bytes per pixel)."""
        data = np.frombuffer(rgba, dtype=np.uint8).copy()
        return cls(width=width, height=height, data=data)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Build a buffer from a decoded PIL image."""
        # AIDEV-NOTE: Always convert to RGBA for consistent processing
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls.from_array(np.array(image))

    @classmethod
    def blank(cls, width: int, height: int, value: int = 255) -> "PixelBuffer":
        """Opaque buffer with every RGB channel set to value."""
        data = np.full((height, width, 4), value, dtype=np.uint8)
        data[..., 3] = 255
        return cls(width=width, height=height, data=data)

    # --- Accessors ---

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def red(self) -> np.ndarray:
        """Red channel view, used as the luminance proxy after grayscale."""
        return self.data[..., 0]

    def with_rgb(self, rgb: np.ndarray, alpha: "np.ndarray | int | None" = None) -> "PixelBuffer":
        """Return a new buffer with RGB replaced.

        Args:
            rgb: (H, W) gray plane written to all three channels, or (H, W, 3)
            alpha: New alpha plane or constant; keeps current alpha if None
        """
        data = self.data.copy()
        rgb = np.clip(np.asarray(rgb), 0, 255).astype(np.uint8)
        if rgb.ndim == 2:
            data[..., 0] = data[..., 1] = data[..., 2] = rgb
        else:
            data[..., :3] = rgb
        if alpha is not None:
            data[..., 3] = alpha
        return PixelBuffer(width=self.width, height=self.height, data=data)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(width=self.width, height=self.height, data=self.data.copy())

    def ink_mask(self) -> np.ndarray:
        """Boolean map of ink (dark) pixels, read from the red channel."""
        return self.red < INK_THRESHOLD

    def is_binarized(self) -> bool:
        """True if every RGB channel is exactly 0 or 255."""
        rgb = self.data[..., :3]
        return bool(np.all((rgb == 0) | (rgb == 255)))

    def to_image(self) -> Image.Image:
        """Convert to a PIL RGBA image for preview or saving."""
        return Image.fromarray(self.data)

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )

    def __repr__(self):
        return f"PixelBuffer(width={self.width}, height={self.height})"
