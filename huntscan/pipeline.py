"""
Screenshot Analysis Pipeline

Runs Locate -> Select -> Recognize -> Parse on a screenshot, and the
two-screenshot session analysis that joins both results in the
reconciler.
"""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from PIL import Image

from .debug import DEBUG_DIR, save_debug_image
from .errors import RecognitionError
from .imaging import crop_rect, load_image, upscale
from .layout import DEFAULT_LAYOUT, RegionLayout, select_regions
from .locator import IconTemplates, find_icons
from .models import FieldSet, Rect, SessionDelta
from .ocr import OCREngine, create_engine
from .parsers import (
    DEFAULT_MAX_LEVEL,
    DEFAULT_MIN_LEVEL,
    parse_counter_gauge,
    parse_currency,
    parse_exp_percent,
    parse_fragments,
    parse_level,
)
from .reconcile import reconcile

logger = logging.getLogger(__name__)

# Text regions are enlarged before recognition
DEFAULT_UPSCALE_FACTOR = 3.0

PathLike = Union[str, Path]


class ScreenshotAnalyzer:
    """
    Extracts a FieldSet from screenshots and a SessionDelta from pairs.

    The analyzer holds only read-only state (engine, icons, layout), so the
    start and end screenshots can be processed concurrently.

    Example:
        analyzer = ScreenshotAnalyzer(create_engine(), IconTemplates.load(icon_dir))
        fields = analyzer.analyze("start.png")
        delta = analyzer.analyze_session("start.png", "end.png")
    """

    def __init__(
        self,
        engine: OCREngine,
        templates: Optional[IconTemplates] = None,
        layout: RegionLayout = DEFAULT_LAYOUT,
        upscale_factor: float = DEFAULT_UPSCALE_FACTOR,
        level_range: Tuple[int, int] = (DEFAULT_MIN_LEVEL, DEFAULT_MAX_LEVEL),
        debug: bool = False,
        debug_dir: Path = DEBUG_DIR,
    ):
        """
        Initialize the analyzer.

        Args:
            engine: Initialized OCR engine
            templates: Reference icons; None disables anchor-relative fields
            layout: Region table
            upscale_factor: Enlargement applied to regions before recognition
            level_range: (min, max) accepted level
            debug: Save an annotated image for every analyzed screenshot
            debug_dir: Where debug images go
        """
        self._engine = engine
        self._templates = templates or IconTemplates()
        self._layout = layout
        self._upscale_factor = upscale_factor
        self._level_range = level_range
        self._debug = debug
        self._debug_dir = Path(debug_dir)

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'ScreenshotAnalyzer':
        """
        Build an analyzer from a settings dictionary (see settings.py).

        Raises:
            ModelInitError: If the configured OCR engine cannot start
            ValueError: If the engine name or layout data is invalid
        """
        engine = create_engine(settings["engine"], **settings.get("engine_options", {}))
        template_dir = settings.get("template_dir")
        return cls(
            engine=engine,
            templates=IconTemplates.load(Path(template_dir) if template_dir else None),
            layout=RegionLayout.from_dict(settings.get("layout")),
            upscale_factor=float(settings.get("upscale_factor", DEFAULT_UPSCALE_FACTOR)),
            level_range=(int(settings.get("level_min", DEFAULT_MIN_LEVEL)),
                         int(settings.get("level_max", DEFAULT_MAX_LEVEL))),
            debug=bool(settings.get("debug_enabled", False)),
        )

    @property
    def engine(self) -> OCREngine:
        return self._engine

    def analyze(self, image_path: PathLike) -> FieldSet:
        """
        Analyze a screenshot file.

        Raises:
            ImageLoadError: If the file cannot be decoded
        """
        image = load_image(image_path)
        return self.analyze_image(image, label=Path(image_path).stem)

    def analyze_image(self, image: Image.Image, label: str = "image") -> FieldSet:
        """
        Analyze an already-loaded screenshot.

        Missing icons, failed recognition and unparseable text only leave
        the affected field empty.

        Args:
            image: RGB screenshot
            label: Name used in log lines and debug file names

        Returns:
            FieldSet for this screenshot
        """
        anchors = find_icons(image, self._templates, self._layout)
        regions = select_regions(image.size, anchors, self._layout)

        texts = {name: self._read_region(image, name, rect) for name, rect in regions.items()}

        counter, gauge = parse_counter_gauge(texts["counter"])
        fields = FieldSet(
            level=parse_level(texts["level"], *self._level_range),
            exp_percent=parse_exp_percent(texts["exp"]),
            currency=parse_currency(texts["currency"]),
            counter=counter,
            gauge=gauge,
            fragments=parse_fragments(texts["fragment"]),
        )
        logger.info(f"[{label}] {fields.recognized_count()}/6 fields recognized: {fields}")

        if self._debug:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            path = self._debug_dir / f"debug_{label}_{timestamp}.png"
            try:
                save_debug_image(image, anchors, regions, fields, path)
            except OSError as e:
                logger.warning(f"[{label}] Debug image not saved: {e}")

        return fields

    def analyze_session(self, start_path: PathLike, end_path: PathLike) -> SessionDelta:
        """
        Analyze start and end screenshots and reconcile them.

        Both images are processed concurrently (sequentially if the engine
        is not thread safe). If either image fails to load the whole
        operation fails and the other result is discarded.

        Args:
            start_path: Screenshot taken at the start of the session
            end_path: Screenshot taken at the end of the session

        Returns:
            SessionDelta for the session

        Raises:
            ImageLoadError: If either file cannot be decoded
        """
        workers = 2 if self._engine.thread_safe else 1
        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="huntscan")
        try:
            start_future = pool.submit(self.analyze, start_path)
            end_future = pool.submit(self.analyze, end_path)
            done, _ = wait([start_future, end_future], return_when=FIRST_EXCEPTION)
            for future in (start_future, end_future):
                if future in done and future.exception() is not None:
                    raise future.exception()
            start_fields = start_future.result()
            end_fields = end_future.result()
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        return reconcile(start_fields, end_fields)

    def _read_region(self, image: Image.Image, name: str, rect: Optional[Rect]) -> Optional[str]:
        """Crop, enlarge and recognize one region; None if anything fails."""
        if rect is None:
            return None

        region = crop_rect(image, rect)
        if region is None:
            return None

        region = upscale(region, self._upscale_factor)
        try:
            text = self._engine.recognize(region)
        except RecognitionError as e:
            logger.warning(f"Region '{name}' skipped: {e}")
            return None

        logger.debug(f"Region '{name}' {rect}: {text!r}")
        return text
