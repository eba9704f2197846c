"""
Tests for image loading and geometry helpers.

Usage:
    pytest tests/test_imaging.py
"""

import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from huntscan.errors import ImageLoadError
from huntscan.imaging import crop, crop_rect, load_image, scale, shrink_gray, to_gray_array, upscale
from huntscan.models import Rect


@pytest.fixture
def gradient() -> Image.Image:
    pixels = np.zeros((60, 80, 3), dtype=np.uint8)
    pixels[:, :, 0] = np.arange(80, dtype=np.uint8)[None, :]
    pixels[:, :, 1] = np.arange(60, dtype=np.uint8)[:, None]
    return Image.fromarray(pixels)


def test_load_image_converts_to_rgb(tmp_path):
    path = tmp_path / "shot.png"
    Image.new("RGBA", (32, 16), (10, 20, 30, 128)).save(path)

    image = load_image(path)

    assert image.mode == "RGB"
    assert image.size == (32, 16)


def test_load_image_missing_file(tmp_path):
    with pytest.raises(ImageLoadError) as exc_info:
        load_image(tmp_path / "missing.png")
    assert "file not found" in str(exc_info.value)


def test_load_image_not_an_image(tmp_path):
    path = tmp_path / "garbage.png"
    path.write_bytes(b"definitely not a png")

    with pytest.raises(ImageLoadError) as exc_info:
        load_image(path)
    assert exc_info.value.path == str(path)


def test_crop_inside(gradient):
    region = crop(gradient, 10, 20, 30, 15)
    assert region.size == (30, 15)
    assert region.getpixel((0, 0)) == (10, 20, 0)


@pytest.mark.parametrize("box", [
    (-1, 0, 10, 10),
    (0, -1, 10, 10),
    (75, 0, 10, 10),
    (0, 55, 10, 10),
    (0, 0, 0, 10),
    (0, 0, 10, 0),
])
def test_crop_outside_returns_none(gradient, box):
    assert crop(gradient, *box) is None


def test_crop_whole_image(gradient):
    assert crop_rect(gradient, Rect(0, 0, 80, 60)).size == (80, 60)


def test_crop_is_independent(gradient):
    region = crop(gradient, 0, 0, 10, 10)
    region.putpixel((0, 0), (255, 255, 255))
    assert gradient.getpixel((0, 0)) == (0, 0, 0)


def test_scale_and_upscale(gradient):
    assert scale(gradient, 40, 30).size == (40, 30)
    assert scale(gradient, 0, 0).size == (1, 1)
    assert upscale(gradient, 3.0).size == (240, 180)

    same = upscale(gradient, 1.0)
    assert same.size == gradient.size
    assert same is not gradient


def test_shrink_gray(gradient):
    gray = to_gray_array(gradient)
    assert gray.shape == (60, 80)
    assert gray.dtype == np.uint8

    small = shrink_gray(gray, 4)
    assert small.shape == (15, 20)

    assert shrink_gray(np.zeros((3, 3), dtype=np.uint8), 4) is None
