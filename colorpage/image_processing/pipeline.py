"""Fixed-order pixel pipeline from photograph to binarized line art.

AIDEV-NOTE: The pipeline is data, not a class hierarchy: STAGES is an
ordered tuple of (name, pure function). iter_stages() is a generator that
hands control back to the caller after every stage; that is the
cooperative yield point used for progress and cancellation.
"""

import threading
from typing import Callable, Iterable, Iterator

from colorpage.errors import (
    InvalidInputError,
    ProcessingCancelledError,
    ResourceExhaustedError,
)
from colorpage.models import ExtractionLimits, ProcessingSettings

from .buffer import PixelBuffer
from .filters import (
    adjust_contrast,
    binarize,
    detect_edges,
    gaussian_blur,
    grayscale,
    morphological_opening,
    thicken_lines,
)

FilterStage = Callable[[PixelBuffer, ProcessingSettings], PixelBuffer]

STAGES: "tuple[tuple[str, FilterStage], ...]" = (
    ("grayscale", grayscale),
    ("contrast", adjust_contrast),
    ("blur", gaussian_blur),
    ("edges", detect_edges),
    ("opening", morphological_opening),
    ("thicken", thicken_lines),
    ("binarize", binarize),
)

STAGE_NAMES = tuple(name for name, _ in STAGES)


class CancellationToken:
    """Shared cancel flag, checked between stages and between images.

    Safe to set from another thread (e.g. a UI thread); the running
    pipeline notices at its next yield point.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    def reset(self):
        self._event.clear()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, where: str = ""):
        if self._event.is_set():
            suffix = f" {where}" if where else ""
            raise ProcessingCancelledError(f"Processing cancelled{suffix}")


class PixelPipeline:
    """Runs the filter stages over one image with a fixed configuration."""

    def __init__(
        self,
        settings: ProcessingSettings | None = None,
        limits: ExtractionLimits | None = None,
    ):
        self.settings = settings or ProcessingSettings()
        self.limits = limits or ExtractionLimits()

    def validate(self, buffer: PixelBuffer):
        """Reject buffers no stage can process.

        Raises:
            InvalidInputError: If either dimension is zero
            ResourceExhaustedError: If the buffer exceeds the size cap
        """
        if buffer.is_empty:
            raise InvalidInputError(
                f"Image has zero area ({buffer.width}x{buffer.height})"
            )
        channel_values = buffer.pixel_count * 4
        if channel_values > self.limits.max_image_pixels:
            raise ResourceExhaustedError(
                f"Image {buffer.width}x{buffer.height} holds {channel_values} channel "
                f"values, cap is {self.limits.max_image_pixels}"
            )

    def iter_stages(
        self,
        buffer: PixelBuffer,
        stage_names: "Iterable[str] | None" = None,
    ) -> "Iterator[tuple[str, PixelBuffer]]":
        """Yield (stage_name, output) after each stage in pipeline order.

        Args:
            buffer: Decoded RGBA input
            stage_names: Subset of STAGE_NAMES to run (order is always the
                pipeline order); all stages if None

        Raises:
            InvalidInputError: Before any stage runs, for zero-area input
            ValueError: If an unknown stage name is requested
        """
        selected = set(STAGE_NAMES if stage_names is None else stage_names)
        unknown = selected - set(STAGE_NAMES)
        if unknown:
            raise ValueError(f"Unknown pipeline stages: {sorted(unknown)}")

        self.validate(buffer)

        current = buffer
        for name, stage in STAGES:
            if name not in selected:
                continue
            current = stage(current, self.settings)
            yield name, current

    def run(
        self,
        buffer: PixelBuffer,
        cancel_token: CancellationToken | None = None,
        on_stage: "Callable[[str], None] | None" = None,
    ) -> PixelBuffer:
        """Run every stage and return the binarized buffer.

        Args:
            buffer: Decoded RGBA input
            cancel_token: Checked before the first stage and after each one
            on_stage: Called with each finished stage name

        Raises:
            InvalidInputError: Zero-area input
            ResourceExhaustedError: Input above the size cap
            ProcessingCancelledError: Cancellation seen at a yield point;
                the partially processed buffer is discarded
        """
        return self.run_stages(buffer, None, cancel_token, on_stage)

    def run_stages(
        self,
        buffer: PixelBuffer,
        stage_names: "Iterable[str] | None",
        cancel_token: CancellationToken | None = None,
        on_stage: "Callable[[str], None] | None" = None,
    ) -> PixelBuffer:
        """Run a subset of stages (in pipeline order); handy for testing."""
        if cancel_token is not None:
            cancel_token.raise_if_cancelled("before pipeline start")

        result = buffer
        for name, result in self.iter_stages(buffer, stage_names):
            if on_stage is not None:
                on_stage(name)
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(f"after {name} stage")

        return result if result is not buffer else buffer.copy()
