"""
Error Types

Exceptions raised by the screenshot analysis pipeline.

Whole-image failures (ImageLoadError, ModelInitError) abort the analysis.
RecognitionError is local to a single region and is absorbed by the
pipeline, leaving that field absent.
"""


class HuntScanError(Exception):
    """Base class for all pipeline errors."""


class ImageLoadError(HuntScanError):
    """
    Raised when an image file cannot be opened or decoded.

    Args:
        path: Path of the file that failed to load
        reason: Underlying error message
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class ModelInitError(HuntScanError):
    """
    Raised when an OCR backend cannot be initialized.

    Covers a missing executable, missing language data or a backend
    library that is not installed.

    Args:
        backend: Engine name (e.g. "tesseract")
        reason: Human-readable explanation
    """

    def __init__(self, backend: str, reason: str) -> None:
        self.backend = backend
        self.reason = reason
        super().__init__(f"OCR backend '{backend}' unavailable: {reason}")


class RecognitionError(HuntScanError):
    """
    Raised when a single recognition call fails.

    Args:
        backend: Engine name
        reason: Underlying error message
    """

    def __init__(self, backend: str, reason: str) -> None:
        self.backend = backend
        self.reason = reason
        super().__init__(f"Recognition failed on '{backend}': {reason}")
