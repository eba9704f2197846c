"""
huntscan - hunting session screenshot analysis.

Reads level, experience, currency, counter/gauge and fragment values from
game screenshots and computes the gain between a start and end capture.

Public API:
    - ScreenshotAnalyzer: Per-image and two-image analysis
    - FieldSet: Values read from one screenshot
    - SessionDelta: Start/end difference
    - reconcile(): FieldSet pair -> SessionDelta
    - RegionLayout: Region placement table
    - IconTemplates: Reference icons for anchoring
    - create_engine(): OCR engine factory

Usage:
    from huntscan import ScreenshotAnalyzer, IconTemplates
    from huntscan.ocr import create_engine

    analyzer = ScreenshotAnalyzer(create_engine(), IconTemplates.load("assets/templates"))
    delta = analyzer.analyze_session("start.png", "end.png")
    print(delta.exp_gained, delta.currency_gained)
"""

from .errors import HuntScanError, ImageLoadError, ModelInitError, RecognitionError
from .models import FieldSet, IconAnchors, Rect, RegionSet, SessionDelta
from .layout import DEFAULT_LAYOUT, RegionLayout, select_regions
from .locator import IconTemplates, find_icons, locate
from .reconcile import reconcile
from .pipeline import ScreenshotAnalyzer
from .ocr import OCREngine, create_engine, register_engine, available_engines

__all__ = [
    # Errors
    "HuntScanError",
    "ImageLoadError",
    "ModelInitError",
    "RecognitionError",
    # Data structures
    "FieldSet",
    "IconAnchors",
    "Rect",
    "RegionSet",
    "SessionDelta",
    # Stages
    "DEFAULT_LAYOUT",
    "RegionLayout",
    "select_regions",
    "IconTemplates",
    "find_icons",
    "locate",
    "reconcile",
    "ScreenshotAnalyzer",
    # OCR
    "OCREngine",
    "create_engine",
    "register_engine",
    "available_engines",
]
