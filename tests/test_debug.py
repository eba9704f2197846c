"""
Tests for debug image output and pruning.

Usage:
    pytest tests/test_debug.py
"""

import os
import sys
from pathlib import Path

from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from huntscan.debug import MAX_DEBUG_IMAGES, _cleanup_debug_images, _modified_time, save_debug_image
from huntscan.models import FieldSet, IconAnchors, Rect, RegionSet


def test_save_debug_image(tmp_path):
    path = tmp_path / "debug" / "debug_shot.png"
    image = Image.new("RGB", (200, 100), (30, 30, 30))
    regions = RegionSet(level=Rect(10, 60, 50, 20))

    save_debug_image(image, IconAnchors(counter=(100, 20)), regions, FieldSet(level=12), path)

    assert path.exists()
    assert Image.open(path).size == (200, 100)


def test_cleanup_keeps_newest(tmp_path):
    for i in range(MAX_DEBUG_IMAGES + 3):
        path = tmp_path / f"debug_{i:02d}.png"
        path.write_bytes(b"")
        os.utime(path, (1000 + i, 1000 + i))

    _cleanup_debug_images(tmp_path)

    remaining = sorted(p.name for p in tmp_path.glob("debug_*.png"))
    assert len(remaining) == MAX_DEBUG_IMAGES
    assert "debug_00.png" not in remaining
    assert f"debug_{MAX_DEBUG_IMAGES + 2:02d}.png" in remaining


def test_vanished_file_sorts_last(tmp_path):
    # Another analysis may prune a file between listing and sorting
    assert _modified_time(tmp_path / "debug_gone.png") == 0.0
