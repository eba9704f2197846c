"""
Image Loading and Geometry

Decodes screenshots into PIL images and provides bounds-checked cropping
and resampling. Every function returns a new image; the source is never
modified.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ImageLoadError
from .models import Rect

logger = logging.getLogger(__name__)


def load_image(path: Union[str, Path]) -> Image.Image:
    """
    Load an image file as an RGB raster.

    Args:
        path: Path to a PNG/JPEG/BMP screenshot

    Returns:
        Fully decoded RGB PIL Image

    Raises:
        ImageLoadError: If the file is missing, unreadable or not an image
    """
    try:
        with Image.open(path) as img:
            img.load()
            rgb = img.convert("RGB")
    except FileNotFoundError:
        raise ImageLoadError(str(path), "file not found") from None
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageLoadError(str(path), str(e)) from e

    logger.debug(f"Loaded {path}: {rgb.width}x{rgb.height}")
    return rgb


def crop(image: Image.Image, x: int, y: int, width: int, height: int) -> Optional[Image.Image]:
    """
    Crop a rectangle, refusing anything that leaves the image.

    Args:
        image: Source image
        x: Left edge
        y: Top edge
        width: Region width
        height: Region height

    Returns:
        Independent copy of the region, or None if the rectangle is empty
        or not fully inside the image
    """
    rect = Rect(x, y, width, height)
    if not rect.fits_within(image.width, image.height):
        return None
    return image.crop(rect.as_box())


def crop_rect(image: Image.Image, rect: Rect) -> Optional[Image.Image]:
    """Rect-based wrapper around crop()."""
    return crop(image, rect.x, rect.y, rect.width, rect.height)


def scale(
    image: Image.Image,
    width: int,
    height: int,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
) -> Image.Image:
    """
    Resize an image to an exact size.

    The default Lanczos filter favors quality and is meant for text
    regions that are about to be recognized.

    Args:
        image: Source image
        width: Target width (at least 1)
        height: Target height (at least 1)
        resample: PIL resampling filter

    Returns:
        New resized image
    """
    return image.resize((max(1, width), max(1, height)), resample)


def upscale(image: Image.Image, factor: float) -> Image.Image:
    """Enlarge a region by a uniform factor; factor 1.0 returns a copy."""
    if abs(factor - 1.0) < 0.01:
        return image.copy()
    return scale(image, int(image.width * factor), int(image.height * factor))


def to_gray_array(image: Image.Image) -> np.ndarray:
    """Convert to a single-channel uint8 intensity array."""
    return np.array(image.convert("L"), dtype=np.uint8)


def shrink_gray(gray: np.ndarray, factor: int) -> Optional[np.ndarray]:
    """
    Downscale an intensity array by an integer factor.

    Uses INTER_AREA (box averaging) for speed; only used for template
    search where sub-pixel precision is irrelevant.

    Returns:
        Downscaled array, or None if either side would collapse to zero
    """
    height, width = gray.shape[:2]
    new_w = width // factor
    new_h = height // factor
    if new_w <= 0 or new_h <= 0:
        return None
    return cv2.resize(gray, (new_w, new_h), interpolation=cv2.INTER_AREA)
