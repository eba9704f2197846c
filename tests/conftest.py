"""
Shared test configuration and fixtures.

Adds the project root to sys.path and provides a canned-text OCR engine
plus helpers for building synthetic screenshots.
"""

import sys
import threading
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from huntscan.errors import RecognitionError
from huntscan.ocr import OCREngine

ICON_SIZE = 48
BACKGROUND = 30

# 1920x1080 icon placements, aligned to the search downscale factor
CURRENCY_AT = (1500, 200)
COUNTER_AT = (800, 400)
FRAGMENT_AT = (1000, 398)

# Region sizes at 1920x1080 with upscale factor 1.0
LEVEL_SIZE = (150, 40)
EXP_SIZE = (960, 25)
CURRENCY_SIZE = (250, 35)
COUNTER_SIZE = (80, 30)
FRAGMENT_SIZE = (100, 30)


class CannedEngine(OCREngine):
    """
    Test engine returning preset text.

    Texts are looked up by (shade, size) first, then by size alone, where
    shade is the red value of the region's top-left pixel and size is the
    region's (width, height).
    """

    def __init__(self, texts: Optional[Dict] = None, failures: Iterable[Tuple[int, int]] = (),
                 thread_safe: bool = True):
        self.texts = dict(texts or {})
        self.failures = set(failures)
        self.thread_safe = thread_safe
        self.calls = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "canned"

    def recognize(self, image: Image.Image) -> str:
        with self._lock:
            self.calls.append(image.size)
        if image.size in self.failures:
            raise RecognitionError(self.name, "simulated failure")
        shade = image.convert("RGB").getpixel((0, 0))[0]
        if (shade, image.size) in self.texts:
            return self.texts[(shade, image.size)]
        return self.texts.get(image.size, "")


def noise_icon(seed: int, size: int = ICON_SIZE) -> Image.Image:
    """Random RGB pattern, distinct per seed."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(size, size, 3), dtype=np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def icons() -> Dict[str, Image.Image]:
    return {
        "currency": noise_icon(1),
        "counter": noise_icon(2),
        "fragment": noise_icon(3),
    }


def build_screenshot(
    width: int = 1920,
    height: int = 1080,
    shade: int = BACKGROUND,
    placements: Optional[Dict[Tuple[int, int], Image.Image]] = None,
) -> Image.Image:
    """Solid background with icons pasted at the given top-left positions."""
    image = Image.new("RGB", (width, height), (shade, shade, shade))
    for position, icon in (placements or {}).items():
        image.paste(icon, position)
    return image


@pytest.fixture
def full_screenshot(icons) -> Image.Image:
    """1920x1080 screenshot with all three icons placed."""
    return build_screenshot(placements={
        CURRENCY_AT: icons["currency"],
        COUNTER_AT: icons["counter"],
        FRAGMENT_AT: icons["fragment"],
    })


@pytest.fixture
def template_dir(tmp_path, icons) -> Path:
    """Directory holding the three icon templates."""
    directory = tmp_path / "templates"
    directory.mkdir()
    icons["currency"].save(directory / "currency_icon.png")
    icons["counter"].save(directory / "counter_icon.png")
    icons["fragment"].save(directory / "fragment_icon.png")
    return directory
