"""
Tesseract OCR Engine

Recognition through the Tesseract command-line engine via pytesseract.
Regions are passed as in-memory PIL images; pytesseract manages (and
removes) any temporary file the executable needs.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import pytesseract
from PIL import Image

from ..errors import ModelInitError, RecognitionError
from .base import OCREngine

logger = logging.getLogger(__name__)

# Korean + English for unit glyphs and "Lv" labels
DEFAULT_LANGUAGES = "kor+eng"
FALLBACK_LANGUAGES = "eng"

# Page segmentation mode 7: treat the region as a single text line
PSM_SINGLE_LINE = 7


class TesseractEngine(OCREngine):
    """
    OCR engine backed by Tesseract.

    Construction verifies the executable and the language data so that an
    unusable setup fails once, up front, with ModelInitError.
    """

    def __init__(
        self,
        tessdata_dir: Optional[Union[str, Path]] = None,
        languages: str = DEFAULT_LANGUAGES,
        psm: int = PSM_SINGLE_LINE,
    ):
        """
        Initialize the Tesseract engine.

        Args:
            tessdata_dir: Directory with *.traineddata files. Ignored if it
                does not exist (the system default is used instead).
            languages: Requested language string, e.g. "kor+eng"
            psm: Tesseract page segmentation mode

        Raises:
            ModelInitError: If Tesseract is not installed or neither the
                requested nor the fallback languages are available
        """
        self._tessdata_dir: Optional[Path] = None
        if tessdata_dir is not None and Path(tessdata_dir).is_dir():
            self._tessdata_dir = Path(tessdata_dir)
        elif tessdata_dir is not None:
            logger.info(f"tessdata dir {tessdata_dir} not found, using system default")
        self._psm = psm

        try:
            version = pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, OSError) as e:
            raise ModelInitError("tesseract", f"executable not found ({e})") from e

        self._languages = self._resolve_languages(languages)
        logger.debug(f"Tesseract {version}, languages={self._languages}")

    @property
    def name(self) -> str:
        return "tesseract"

    @property
    def languages(self) -> str:
        """Language string actually in use."""
        return self._languages

    def configure(self, **kwargs) -> None:
        """
        Configure engine parameters.

        Args:
            psm: Page segmentation mode
        """
        if 'psm' in kwargs:
            self._psm = int(kwargs['psm'])

    def recognize(self, image: Image.Image) -> str:
        try:
            text = pytesseract.image_to_string(
                image,
                lang=self._languages,
                config=self._build_config(),
            )
        except (pytesseract.TesseractError, RuntimeError, OSError) as e:
            raise RecognitionError(self.name, str(e)) from e
        return text.strip()

    def _build_config(self, with_psm: bool = True) -> str:
        parts = []
        if with_psm:
            parts.append(f"--psm {self._psm}")
        if self._tessdata_dir is not None:
            parts.append(f'--tessdata-dir "{self._tessdata_dir}"')
        return " ".join(parts)

    def _resolve_languages(self, requested: str) -> str:
        """Use the requested languages if installed, else fall back to English."""
        try:
            installed = set(pytesseract.get_languages(config=self._build_config(with_psm=False)))
        except (pytesseract.TesseractError, OSError) as e:
            raise ModelInitError("tesseract", f"cannot list languages ({e})") from e

        if all(lang in installed for lang in requested.split("+")):
            return requested

        if FALLBACK_LANGUAGES in installed:
            logger.warning(
                f"Tesseract languages '{requested}' not installed, falling back to '{FALLBACK_LANGUAGES}'"
            )
            return FALLBACK_LANGUAGES

        raise ModelInitError(
            "tesseract",
            f"language data missing: wanted '{requested}', installed {sorted(installed)}",
        )
