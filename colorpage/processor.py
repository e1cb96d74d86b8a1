"""Main image processor orchestrating the complete pipeline.

AIDEV-NOTE: This module handles the complete pipeline from photograph to
coloring page paths: decode -> pixel pipeline -> vector extraction, one
image at a time. Batches never raise for a single bad image; failures are
recorded in the BatchResult instead.
"""

from pathlib import Path
from typing import Callable, Iterable

from PIL import Image, UnidentifiedImageError

from colorpage.errors import InvalidInputError, ProcessingCancelledError
from colorpage.image_processing.buffer import PixelBuffer
from colorpage.image_processing.pipeline import CancellationToken, PixelPipeline
from colorpage.image_processing.utils import scale_image_to_fit
from colorpage.models import (
    MAX_IMAGE_DIMENSION,
    BatchResult,
    ExtractionLimits,
    ImageFailure,
    ImageResult,
    ProcessingSettings,
)
from colorpage.vectorization.extractor import VectorExtractor

ProgressCallback = Callable[[int, int, str], None]

# A batch entry is a filename plus something that produces its pixels
BatchEntry = tuple[str, Callable[[], PixelBuffer]]


class ImageProcessor:
    """Processes photographs into binarized line art and vector paths."""

    def __init__(
        self,
        settings: ProcessingSettings | None = None,
        limits: ExtractionLimits | None = None,
        verbose: bool = False,
    ):
        self.settings = settings or ProcessingSettings()
        self.limits = limits or ExtractionLimits()
        self.verbose = verbose

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def load_image(
        self, file_path: str | Path, max_dimension: int = MAX_IMAGE_DIMENSION
    ) -> PixelBuffer:
        """Load, validate and downscale an image file.

        Args:
            file_path: Path to image file (PNG, JPG, etc.)
            max_dimension: Longest side after scaling, in pixels

        Returns:
            PixelBuffer in RGBA layout

        Raises:
            InvalidInputError: If file cannot be loaded or is invalid
        """
        try:
            with Image.open(file_path) as image:
                image.load()
                # AIDEV-NOTE: Always convert to RGBA for consistent processing
                rgba = image.convert("RGBA") if image.mode != "RGBA" else image.copy()
        except (OSError, UnidentifiedImageError, ValueError) as e:
            raise InvalidInputError(f"Failed to load image: {e}") from e

        scaled, scale = scale_image_to_fit(rgba, max_dimension)
        if scale < 1.0:
            self._log(
                f"Scaled {Path(file_path).name} to {scaled.size[0]}x{scaled.size[1]} pixels."
            )
        return PixelBuffer.from_image(scaled)

    def process_buffer(
        self,
        buffer: PixelBuffer,
        filename: str = "image",
        cancel_token: CancellationToken | None = None,
        settings: ProcessingSettings | None = None,
    ) -> ImageResult:
        """Execute the pixel pipeline and vector extraction on one image.

        Args:
            buffer: Decoded RGBA pixels
            filename: Name recorded in the result metadata
            cancel_token: Checked between stages and before extraction
            settings: Overrides the processor settings for this call

        Raises:
            InvalidInputError: Zero-area or malformed input
            ResourceExhaustedError: Input above the size cap
            ProcessingCancelledError: Cancellation seen between stages
        """
        pipeline = PixelPipeline(settings or self.settings, self.limits)
        extractor = VectorExtractor(self.limits)

        self._log(f"Processing {filename} ({buffer.width}x{buffer.height})...")
        processed = pipeline.run(
            buffer,
            cancel_token=cancel_token,
            on_stage=lambda name: self._log(f"  {name} done"),
        )

        if cancel_token is not None:
            cancel_token.raise_if_cancelled("before vector extraction")

        paths, stats = extractor.extract_with_stats(processed)
        self._log(
            f"  Extracted {len(paths)} paths from {stats.contours_traced} regions "
            f"({stats.contours_dropped} dropped)."
        )

        return ImageResult(
            filename=filename,
            width=processed.width,
            height=processed.height,
            processed=processed,
            paths=tuple(paths),
            stats=stats,
        )

    def process(self, file_path: str | Path) -> ImageResult:
        """Load one image file and process it."""
        buffer = self.load_image(file_path)
        return self.process_buffer(buffer, Path(file_path).name)

    def process_batch(
        self,
        images: "Iterable[tuple[str, PixelBuffer]]",
        cancel_token: CancellationToken | None = None,
        progress: ProgressCallback | None = None,
    ) -> BatchResult:
        """Process already-decoded images sequentially.

        Args:
            images: (filename, buffer) pairs
            cancel_token: Checked between stages and between images
            progress: Called as progress(index, total, message)

        Returns:
            BatchResult with successes, per-image failures and a cancelled flag
        """
        entries = [(name, _constant(buffer)) for name, buffer in images]
        return self._run_batch(entries, cancel_token, progress)

    def process_files(
        self,
        file_paths: "Iterable[str | Path]",
        cancel_token: CancellationToken | None = None,
        progress: ProgressCallback | None = None,
    ) -> BatchResult:
        """Decode and process image files one at a time.

        AIDEV-NOTE: Decoding is deferred until an image's turn, so only one
        image's buffers are alive at any point in the batch.
        """
        entries = [
            (Path(path).name, _loader(self, Path(path))) for path in file_paths
        ]
        return self._run_batch(entries, cancel_token, progress)

    def _run_batch(
        self,
        entries: "list[BatchEntry]",
        cancel_token: CancellationToken | None,
        progress: ProgressCallback | None,
    ) -> BatchResult:
        batch = BatchResult()
        # Captured once; later changes to self.settings wait for the next run
        settings = self.settings
        total = len(entries)
        self._log(f"Starting batch processing of {total} images")

        for index, (filename, produce) in enumerate(entries):
            if cancel_token is not None and cancel_token.cancelled:
                batch.cancelled = True
                break

            if progress is not None:
                progress(index, total, f"Processing {filename}...")

            try:
                buffer = produce()
                result = self.process_buffer(buffer, filename, cancel_token, settings)
            except ProcessingCancelledError:
                self._log(f"Cancelled while processing {filename}.")
                batch.cancelled = True
                break
            except Exception as e:  # One bad image never aborts the batch
                self._record_failure(batch, index, filename, e)
                continue

            batch.results.append(result)

        if progress is not None and not batch.cancelled:
            progress(total, total, "Batch complete")

        self._log(batch.summary())
        return batch

    def _record_failure(self, batch: BatchResult, index: int, filename: str, error: Exception):
        self._log(f"Failed {filename}: {error}")
        batch.failures.append(
            ImageFailure(
                index=index,
                filename=filename,
                error_kind=type(error).__name__,
                reason=str(error),
            )
        )


def _constant(buffer: PixelBuffer) -> "Callable[[], PixelBuffer]":
    return lambda: buffer


def _loader(processor: ImageProcessor, path: Path) -> "Callable[[], PixelBuffer]":
    return lambda: processor.load_image(path)
