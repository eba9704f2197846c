"""
Icon Locator

Finds reference icons in a screenshot with normalized cross-correlation.

Both the search area and the icon are converted to grayscale and shrunk by
SEARCH_SCALE before matching, so the returned position is only accurate to
a few pixels. That is enough for placing the text regions next to it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import cv2
import numpy as np
from PIL import Image

from .errors import ImageLoadError
from .imaging import load_image, shrink_gray, to_gray_array
from .layout import DEFAULT_LAYOUT, RegionLayout
from .models import Anchor, IconAnchors, Rect

logger = logging.getLogger(__name__)

# Minimum correlation score; anything at or below is treated as "not found"
MATCH_THRESHOLD = 0.5

# Search downscale factor (4 = 1/4 size)
SEARCH_SCALE = 4

ICON_FILES: Dict[str, str] = {
    "currency": "currency_icon.png",
    "counter": "counter_icon.png",
    "fragment": "fragment_icon.png",
}


@dataclass(frozen=True)
class IconTemplates:
    """Reference icons; a missing icon is simply never located."""
    currency: Optional[Image.Image] = None
    counter: Optional[Image.Image] = None
    fragment: Optional[Image.Image] = None

    @classmethod
    def load(cls, template_dir: Optional[Path]) -> 'IconTemplates':
        """
        Load icon images from a directory.

        Expected files: currency_icon.png, counter_icon.png, fragment_icon.png.
        Missing or unreadable files are logged and skipped.

        Args:
            template_dir: Directory containing the icons, or None

        Returns:
            IconTemplates with whatever icons could be loaded
        """
        if template_dir is None:
            return cls()

        template_dir = Path(template_dir)
        loaded: Dict[str, Image.Image] = {}
        for name, filename in ICON_FILES.items():
            path = template_dir / filename
            if not path.exists():
                logger.warning(f"Icon template missing: {path}")
                continue
            try:
                loaded[name] = load_image(path)
            except ImageLoadError as e:
                logger.warning(f"Icon template unreadable: {e}")

        return cls(**loaded)

    def available(self) -> list[str]:
        """Names of the icons that were loaded."""
        return [name for name in ICON_FILES if getattr(self, name) is not None]


def locate(
    haystack: Image.Image,
    needle: Image.Image,
    search_rect: Optional[Rect] = None,
    threshold: float = MATCH_THRESHOLD,
    search_scale: int = SEARCH_SCALE,
) -> Optional[Anchor]:
    """
    Find the best match of an icon inside an image.

    Args:
        haystack: Screenshot to search
        needle: Icon to look for
        search_rect: Optional area to restrict the search to; clipped to
            the image bounds
        threshold: Minimum score for a match to count
        search_scale: Integer downscale factor applied before matching

    Returns:
        (x, y) of the icon's top-left corner in full-resolution screenshot
        coordinates, or None if the icon does not fit or the best score is
        not above the threshold
    """
    offset_x, offset_y = 0, 0
    area = haystack
    if search_rect is not None:
        x = max(0, search_rect.x)
        y = max(0, search_rect.y)
        right = min(haystack.width, search_rect.right)
        bottom = min(haystack.height, search_rect.bottom)
        if right <= x or bottom <= y:
            return None
        area = haystack.crop((x, y, right, bottom))
        offset_x, offset_y = x, y

    gray_area = shrink_gray(to_gray_array(area), search_scale)
    gray_needle = shrink_gray(to_gray_array(needle), search_scale)
    if gray_area is None or gray_needle is None:
        return None

    if gray_needle.shape[0] > gray_area.shape[0] or gray_needle.shape[1] > gray_area.shape[1]:
        return None

    scores = cv2.matchTemplate(gray_area, gray_needle, cv2.TM_CCOEFF_NORMED)
    scores = np.nan_to_num(scores, nan=0.0, posinf=0.0, neginf=0.0)
    _, max_score, _, max_loc = cv2.minMaxLoc(scores)

    if max_score <= threshold:
        logger.debug(f"No match: best score {max_score:.3f} <= {threshold}")
        return None

    match_x, match_y = max_loc
    anchor = (match_x * search_scale + offset_x, match_y * search_scale + offset_y)
    logger.debug(f"Match at {anchor} (score {max_score:.3f})")
    return anchor


def find_icons(
    image: Image.Image,
    templates: IconTemplates,
    layout: RegionLayout = DEFAULT_LAYOUT,
) -> IconAnchors:
    """
    Locate every available icon in a screenshot.

    The currency icon is searched in its configured area, the counter icon
    in its area (whole image by default) and the fragment icon next to the
    counter icon when that was found, otherwise in the whole image.

    Args:
        image: Screenshot
        templates: Loaded reference icons
        layout: Layout providing the search areas

    Returns:
        IconAnchors with one optional position per icon
    """
    width, height = image.size

    currency = None
    if templates.currency is not None:
        currency = locate(image, templates.currency, layout.currency_search_area(width, height))

    counter = None
    if templates.counter is not None:
        counter = locate(image, templates.counter, layout.counter_search_area(width, height))

    fragment = None
    if templates.fragment is not None:
        area = layout.fragment_search_area(width, height, counter)
        fragment = locate(image, templates.fragment, area)

    anchors = IconAnchors(currency=currency, counter=counter, fragment=fragment)
    logger.debug(f"Icon anchors: {anchors}")
    return anchors
