"""
OCR Engine Factory

Factory for creating OCR engine instances.
"""

import importlib
import logging
from typing import Dict, Type, Union

from .base import OCREngine

logger = logging.getLogger(__name__)


# Registry of available engines: lazily imported "module.Class" paths or classes
_ENGINE_REGISTRY: Dict[str, Union[str, Type[OCREngine]]] = {
    "tesseract": "tesseract_engine.TesseractEngine",
    "paddle": "paddle_engine.PaddleEngine",
}

# Cache for loaded engine classes
_ENGINE_CACHE: Dict[str, Type[OCREngine]] = {}


def _load_engine_class(engine_type: str) -> Type[OCREngine]:
    """Lazily load an engine class by type."""
    if engine_type in _ENGINE_CACHE:
        return _ENGINE_CACHE[engine_type]

    entry = _ENGINE_REGISTRY[engine_type]
    if isinstance(entry, str):
        module_name, class_name = entry.rsplit(".", 1)
        module = importlib.import_module(f".{module_name}", package=__package__)
        engine_class = getattr(module, class_name)
    else:
        engine_class = entry

    _ENGINE_CACHE[engine_type] = engine_class
    return engine_class


def create_engine(engine_type: str = "tesseract", **config) -> OCREngine:
    """
    Create an OCR engine by type.

    Args:
        engine_type: Engine type identifier. Available types:
            - "tesseract" (default): Tesseract via pytesseract
            - "paddle": PaddleOCR (optional dependency)
        **config: Engine constructor options:
            For "tesseract":
                - tessdata_dir: Directory holding traineddata files
                - languages: Tesseract language string (default "kor+eng")
            For "paddle":
                - lang: PaddleOCR language (default "korean")

    Returns:
        Initialized OCREngine instance

    Raises:
        ValueError: If engine_type is not recognized
        ModelInitError: If the backend cannot be initialized

    Example:
        engine = create_engine("tesseract", tessdata_dir="./resources/tessdata")
        text = engine.recognize(region)
    """
    if engine_type not in _ENGINE_REGISTRY:
        available = ", ".join(_ENGINE_REGISTRY.keys())
        raise ValueError(f"Unknown engine type: {engine_type}. Available: {available}")

    engine_class = _load_engine_class(engine_type)
    engine = engine_class(**config)
    logger.info(f"OCR engine ready: {engine.name}")
    return engine


def register_engine(name: str, engine_class: type) -> None:
    """
    Register a custom OCR engine type.

    Args:
        name: Engine type identifier
        engine_class: OCREngine subclass

    Example:
        from huntscan.ocr import register_engine, OCREngine

        class MyCustomEngine(OCREngine):
            ...

        register_engine("custom", MyCustomEngine)
    """
    if not isinstance(engine_class, type) or not issubclass(engine_class, OCREngine):
        raise TypeError(f"{engine_class} must be a subclass of OCREngine")
    _ENGINE_REGISTRY[name] = engine_class
    _ENGINE_CACHE.pop(name, None)


def available_engines() -> list[str]:
    """
    List available engine types.

    Returns:
        List of registered engine type names
    """
    return list(_ENGINE_REGISTRY.keys())
