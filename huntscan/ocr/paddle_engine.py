"""
PaddleOCR Engine

Alternative local recognition backend. The paddleocr package is an
optional dependency (``pip install huntscan[paddle]``); it is imported when
the engine is constructed.
"""

import logging
from typing import Any, List

import numpy as np
from PIL import Image

from ..errors import ModelInitError, RecognitionError
from .base import OCREngine

logger = logging.getLogger(__name__)

DEFAULT_LANG = "korean"


class PaddleEngine(OCREngine):
    """OCR engine backed by PaddleOCR (CPU)."""

    # A PaddleOCR predictor must not be shared between threads
    thread_safe = False

    def __init__(self, lang: str = DEFAULT_LANG):
        """
        Initialize PaddleOCR.

        Args:
            lang: PaddleOCR language code

        Raises:
            ModelInitError: If paddleocr is not installed or its models
                cannot be loaded
        """
        try:
            from paddleocr import PaddleOCR
        except ImportError as e:
            raise ModelInitError("paddle", "paddleocr is not installed") from e

        try:
            self._ocr = PaddleOCR(lang=lang, use_textline_orientation=False)
        except Exception as e:  # noqa: BLE001 - paddle raises assorted types for missing models
            raise ModelInitError("paddle", str(e)) from e

        logger.debug(f"PaddleOCR ready (lang={lang})")

    @property
    def name(self) -> str:
        return "paddle"

    def recognize(self, image: Image.Image) -> str:
        img_array = np.array(image.convert("RGB"))
        try:
            results = self._ocr.ocr(img_array)
        except Exception as e:  # noqa: BLE001
            raise RecognitionError(self.name, str(e)) from e
        return " ".join(_extract_texts(results))


def _extract_texts(results: Any) -> List[str]:
    """
    Pull recognized strings out of a PaddleOCR result.

    Handles both the dict/object format (rec_texts) and the older nested
    [[box, (text, score)], ...] list format.
    """
    if not isinstance(results, list) or not results:
        return []

    page = results[0]
    if isinstance(page, dict):
        return [t for t in page.get("rec_texts", []) if t.strip()]
    if hasattr(page, "rec_texts"):
        return [t for t in page.rec_texts if t.strip()]

    texts = []
    for line in page or []:
        try:
            text = line[1][0]
        except (IndexError, TypeError):
            continue
        if isinstance(text, str) and text.strip():
            texts.append(text)
    return texts
