"""
OCR Module

Pluggable text recognition for cropped screenshot regions.

Usage:
    from huntscan.ocr import create_engine

    # Create an OCR engine (Tesseract)
    engine = create_engine()

    # Recognize a cropped region
    text = engine.recognize(region)

Example with custom language data:
    engine = create_engine("tesseract", tessdata_dir="./resources/tessdata")
"""

# Public API - Base class for custom engines
from .base import OCREngine

# Public API - Factory functions
from .factory import (
    create_engine,
    register_engine,
    available_engines,
)

__all__ = [
    # Base class
    "OCREngine",
    # Factory
    "create_engine",
    "register_engine",
    "available_engines",
]
