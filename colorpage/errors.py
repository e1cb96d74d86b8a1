"""Exception types raised by the coloring page pipeline."""


class ColorPageError(Exception):
    """Base class for all pipeline errors."""


class InvalidInputError(ColorPageError):
    """Zero-area or malformed pixel data, or an unreadable image file."""


class InvalidSettingsError(ColorPageError, ValueError):
    """A processing setting is out of its allowed range."""


class ExtractionError(ColorPageError):
    """Vector extraction was given a buffer that is not binarized."""


class ResourceExhaustedError(ColorPageError):
    """An image, contour or path exceeded a configured size cap."""


class ProcessingCancelledError(ColorPageError):
    """A cancellation request was honored at a yield point."""
