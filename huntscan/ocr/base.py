"""
OCR Engine Base Interface

Abstract base class defining the text recognition contract.
"""

from abc import ABC, abstractmethod
from PIL import Image


class OCREngine(ABC):
    """
    Abstract base class for OCR engines.

    Implementations must raise ModelInitError from their constructor when
    the backend cannot be used at all, and RecognitionError from
    recognize() when a single call fails.

    Attributes:
        thread_safe: Whether recognize() may be called from several threads
            at once on the same instance
    """
    thread_safe: bool = True

    @abstractmethod
    def recognize(self, image: Image.Image) -> str:
        """
        Recognize the text in a cropped region.

        Makes exactly one blocking backend call; no retries.

        Args:
            image: PIL Image of the region

        Returns:
            Recognized text (may be empty)

        Raises:
            RecognitionError: If the backend call fails
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Engine identifier.

        Returns:
            String name identifying this engine type (e.g., "tesseract", "paddle")
        """
        pass

    def configure(self, **kwargs) -> None:
        """
        Configure engine parameters.

        Override in subclasses to support runtime configuration.
        Default implementation does nothing.

        Args:
            **kwargs: Engine-specific configuration options
        """
        pass
