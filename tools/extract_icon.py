#!/usr/bin/env python3
"""
Icon extraction tool for anchor calibration.

Crops a reference icon out of a screenshot and saves it to the template
directory under the name the locator expects.

Usage:
    python extract_icon.py <image_path> <icon> <x> <y> <width> <height>

    icon is one of: currency, counter, fragment

Examples:
    python extract_icon.py shots/inventory.png currency 1412 388 24 24
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from huntscan.errors import ImageLoadError
from huntscan.imaging import crop, load_image
from huntscan.locator import ICON_FILES, locate


TEMPLATE_DIR = Path("./assets/templates")


def extract_icon(image_path: str, icon: str, x: int, y: int, width: int, height: int) -> int:
    """
    Crop and save one icon, then check the locator finds it again.

    Returns:
        Process exit code
    """
    if icon not in ICON_FILES:
        print(f"ERROR: unknown icon '{icon}'. Choose from: {', '.join(ICON_FILES)}")
        return 1

    try:
        image = load_image(image_path)
    except ImageLoadError as e:
        print(f"ERROR: {e}")
        return 1

    region = crop(image, x, y, width, height)
    if region is None:
        print(f"ERROR: ({x}, {y}, {width}, {height}) is outside the {image.width}x{image.height} image")
        return 1

    TEMPLATE_DIR.mkdir(parents=True, exist_ok=True)
    path = TEMPLATE_DIR / ICON_FILES[icon]
    region.save(path, "PNG")
    print(f"Saved: {path}")

    found = locate(image, region)
    if found is None:
        print("WARNING: locator could not find the saved icon again; try a larger crop")
    else:
        print(f"Locator check: found at {found} (requested {x}, {y})")
    return 0


def main():
    if len(sys.argv) != 7:
        print(__doc__)
        return 1
    image_path, icon = sys.argv[1], sys.argv[2]
    x, y, width, height = (int(v) for v in sys.argv[3:7])
    return extract_icon(image_path, icon, x, y, width, height)


if __name__ == "__main__":
    sys.exit(main())
