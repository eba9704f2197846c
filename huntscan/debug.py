"""
Debug Utilities

Functions for saving annotated debug images and managing debug output.
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from .models import FieldSet, IconAnchors, RegionSet

logger = logging.getLogger(__name__)

# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

REGION_COLORS = {
    "level": "yellow",
    "exp": "cyan",
    "currency": "orange",
    "counter": "magenta",
    "fragment": "lime",
}
ANCHOR_COLOR = "red"
ANCHOR_SIZE = 12


def save_debug_image(
    image: Image.Image,
    anchors: IconAnchors,
    regions: RegionSet,
    fields: Optional[FieldSet],
    path: Path,
) -> None:
    """
    Save an annotated copy of a screenshot.

    Annotations include:
    - Icon anchors as red crosses
    - Each text region outlined and labelled
    - A summary line with the parsed fields

    Args:
        image: Original screenshot
        anchors: Located icon positions
        regions: Regions that were recognized
        fields: Parsed result (can be None)
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    debug_img = image.copy()
    draw = ImageDraw.Draw(debug_img)
    font = ImageFont.load_default()

    for name in ("currency", "counter", "fragment"):
        anchor = getattr(anchors, name)
        if anchor is None:
            continue
        ax, ay = anchor
        draw.line([ax - ANCHOR_SIZE, ay, ax + ANCHOR_SIZE, ay], fill=ANCHOR_COLOR, width=2)
        draw.line([ax, ay - ANCHOR_SIZE, ax, ay + ANCHOR_SIZE], fill=ANCHOR_COLOR, width=2)

    for name, rect in regions.items():
        if rect is None:
            continue
        color = REGION_COLORS.get(name, "white")
        draw.rectangle([rect.x, rect.y, rect.right, rect.bottom], outline=color, width=2)
        draw.text((rect.x, max(0, rect.y - 12)), name, fill=color, font=font)

    if fields is not None:
        summary = ", ".join(f"{k}={v}" for k, v in fields.to_dict().items())
        draw.text((10, 10), summary, fill="white", font=font)

    debug_img.save(path, "PNG")
    logger.debug(f"Debug image saved: {path}")

    _cleanup_debug_images(path.parent)


def _cleanup_debug_images(directory: Path) -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not directory.exists():
        return

    debug_files = sorted(
        directory.glob("debug_*.png"),
        key=_modified_time,
        reverse=True
    )

    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.debug(f"Could not remove {old_file}: {e}")


def _modified_time(path: Path) -> float:
    """File mtime; 0 if the file vanished (another analysis pruned it)."""
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0
