"""
Region Layout

Resolution-relative placement of the text regions read from a screenshot.

All rectangles are measured on a 1920x1080 baseline and scaled by
(width / 1920, height / 1080) for the actual image. Level and experience
bar regions are fixed; currency, counter/gauge and fragment regions are
offsets from the icon anchor located upstream.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .models import Anchor, IconAnchors, Rect, RegionSet

logger = logging.getLogger(__name__)

BASELINE_WIDTH = 1920
BASELINE_HEIGHT = 1080

# (x, y, width, height) as fractions of the image size
FractionArea = Tuple[float, float, float, float]


@dataclass(frozen=True)
class RegionLayout:
    """
    Data table describing where each field lives on screen.

    Attributes:
        baseline_width: Width the rectangles were measured at
        baseline_height: Height the rectangles were measured at
        level: Level text (bottom-left)
        exp_bar: Experience bar text (bottom center)
        currency_offset: Currency text relative to the currency icon
        counter_offset: Counter/gauge text relative to the counter icon
        fragment_offset: Fragment text relative to the fragment icon
        currency_search: Area searched for the currency icon
        counter_search: Area searched for the counter icon (None = whole image)
        fragment_search_offset: Area searched for the fragment icon, relative
            to the counter anchor; whole image if the counter was not found
    """
    baseline_width: int = BASELINE_WIDTH
    baseline_height: int = BASELINE_HEIGHT
    level: Rect = field(default_factory=lambda: Rect(10, 1030, 150, 40))
    exp_bar: Rect = field(default_factory=lambda: Rect(480, 1050, 960, 25))
    currency_offset: Rect = field(default_factory=lambda: Rect(60, -5, 250, 35))
    counter_offset: Rect = field(default_factory=lambda: Rect(0, 60, 80, 30))
    fragment_offset: Rect = field(default_factory=lambda: Rect(0, 60, 100, 30))
    currency_search: Optional[FractionArea] = (0.5, 0.0, 0.5, 2 / 3)
    counter_search: Optional[FractionArea] = None
    fragment_search_offset: Rect = field(default_factory=lambda: Rect(0, -50, 400, 200))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RegionLayout':
        """
        Build a layout from settings data, keeping defaults for missing keys.

        Rectangles are given as [x, y, width, height] lists, search areas as
        four fractions or null. An optional "baseline" key holds
        [width, height].

        Args:
            data: Mapping loaded from the settings file, or None

        Returns:
            RegionLayout instance

        Raises:
            ValueError: If a rectangle or area does not have four numbers
        """
        layout = cls()
        if not data:
            return layout

        changes: Dict[str, Any] = {}
        if "baseline" in data:
            width, height = data["baseline"]
            changes["baseline_width"] = int(width)
            changes["baseline_height"] = int(height)

        for name in ("level", "exp_bar", "currency_offset", "counter_offset",
                     "fragment_offset", "fragment_search_offset"):
            if name in data:
                changes[name] = _rect_from_list(name, data[name])

        for name in ("currency_search", "counter_search"):
            if name in data:
                value = data[name]
                if value is not None:
                    if len(value) != 4:
                        raise ValueError(f"Layout area '{name}' needs 4 values, got {value}")
                    value = tuple(float(v) for v in value)
                changes[name] = value

        return replace(layout, **changes)

    def scale_factors(self, width: int, height: int) -> Tuple[float, float]:
        """Return (scale_x, scale_y) for an image of the given size."""
        return width / self.baseline_width, height / self.baseline_height

    def currency_search_area(self, width: int, height: int) -> Optional[Rect]:
        return _fraction_to_rect(self.currency_search, width, height)

    def counter_search_area(self, width: int, height: int) -> Optional[Rect]:
        return _fraction_to_rect(self.counter_search, width, height)

    def fragment_search_area(self, width: int, height: int,
                             counter_anchor: Optional[Anchor]) -> Optional[Rect]:
        """
        Search area for the fragment icon, next to the counter icon.

        The top edge is clamped at 0.
        """
        if counter_anchor is None:
            return None
        scale_x, scale_y = self.scale_factors(width, height)
        area = self.fragment_search_offset.scaled(scale_x, scale_y)
        ax, ay = counter_anchor
        return Rect(ax + area.x, max(0, ay + area.y), area.width, area.height)


DEFAULT_LAYOUT = RegionLayout()


def _rect_from_list(name: str, values: Any) -> Rect:
    if len(values) != 4:
        raise ValueError(f"Layout rect '{name}' needs 4 values, got {values}")
    return Rect(*(int(v) for v in values))


def _fraction_to_rect(area: Optional[FractionArea], width: int, height: int) -> Optional[Rect]:
    if area is None:
        return None
    fx, fy, fw, fh = area
    return Rect(int(width * fx), int(height * fy), int(width * fw), int(height * fh))


def _validated(name: str, rect: Rect, width: int, height: int) -> Optional[Rect]:
    if rect.fits_within(width, height):
        return rect
    logger.debug(f"Region '{name}' {rect} outside {width}x{height}, skipped")
    return None


def select_regions(
    image_size: Tuple[int, int],
    anchors: IconAnchors,
    layout: RegionLayout = DEFAULT_LAYOUT,
) -> RegionSet:
    """
    Compute the text regions for an image.

    Fixed regions are always produced (if they fit). Anchor-relative
    regions are produced only when their icon was located. A rectangle
    that does not fit inside the image yields no region for that field.

    Args:
        image_size: (width, height) of the screenshot
        anchors: Icon positions found by the locator
        layout: Region table to use

    Returns:
        RegionSet with one optional Rect per field
    """
    width, height = image_size
    scale_x, scale_y = layout.scale_factors(width, height)

    def relative(name: str, anchor: Optional[Anchor], offset: Rect) -> Optional[Rect]:
        if anchor is None:
            return None
        scaled = offset.scaled(scale_x, scale_y)
        return _validated(name, scaled.translated(anchor[0], anchor[1]), width, height)

    return RegionSet(
        level=_validated("level", layout.level.scaled(scale_x, scale_y), width, height),
        exp=_validated("exp", layout.exp_bar.scaled(scale_x, scale_y), width, height),
        currency=relative("currency", anchors.currency, layout.currency_offset),
        counter=relative("counter", anchors.counter, layout.counter_offset),
        fragment=relative("fragment", anchors.fragment, layout.fragment_offset),
    )
