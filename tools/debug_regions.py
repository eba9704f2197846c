#!/usr/bin/env python3
"""
Diagnostic script for region placement and recognition.

For each screenshot: prints the located anchors, the computed regions, the
raw text recognized in every region and the parsed value, and saves an
annotated image to ./debug/.

Usage:
    python debug_regions.py <image_path> [image_path ...]
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from huntscan import ImageLoadError, ModelInitError, RecognitionError
from huntscan.debug import DEBUG_DIR, save_debug_image
from huntscan.imaging import crop_rect, load_image, upscale
from huntscan.layout import RegionLayout, select_regions
from huntscan.locator import IconTemplates, find_icons
from huntscan.ocr import create_engine
from huntscan.parsers import (
    parse_counter_gauge,
    parse_currency,
    parse_exp_percent,
    parse_fragments,
    parse_level,
)
from huntscan.settings import load_settings

PARSERS = {
    "level": parse_level,
    "exp": parse_exp_percent,
    "currency": parse_currency,
    "counter": parse_counter_gauge,
    "fragment": parse_fragments,
}


def analyze_image(image_path: str, engine, templates: IconTemplates, layout: RegionLayout,
                  upscale_factor: float):
    """Print every stage of the pipeline for one screenshot."""
    print(f"\n{'='*60}")
    print(f"Analyzing: {image_path}")
    print(f"{'='*60}")

    image = load_image(image_path)
    scale_x, scale_y = layout.scale_factors(image.width, image.height)
    print(f"Size: {image.width}x{image.height} (scale {scale_x:.3f} x {scale_y:.3f})")

    anchors = find_icons(image, templates, layout)
    print(f"Anchors: currency={anchors.currency} counter={anchors.counter} fragment={anchors.fragment}")

    regions = select_regions(image.size, anchors, layout)
    print(f"\n{'Region':>10} {'Rect':>28}  Text -> Value")
    for name, rect in regions.items():
        if rect is None:
            print(f"{name:>10} {'-':>28}")
            continue
        region = crop_rect(image, rect)
        try:
            text = engine.recognize(upscale(region, upscale_factor)) if region is not None else ""
        except RecognitionError as e:
            print(f"{name:>10} recognition failed: {e}")
            continue
        value = PARSERS[name](text)
        rect_str = f"({rect.x}, {rect.y}, {rect.width}, {rect.height})"
        print(f"{name:>10} {rect_str:>28}  {text!r} -> {value}")

    output_path = DEBUG_DIR / f"debug_regions_{Path(image_path).stem}.png"
    save_debug_image(image, anchors, regions, None, output_path)
    print(f"\nDebug image saved: {output_path}")


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        return 1

    settings = load_settings()
    try:
        engine = create_engine(settings["engine"], **settings.get("engine_options", {}))
    except ModelInitError as e:
        print(f"ERROR: {e}")
        return 1

    template_dir = settings.get("template_dir")
    templates = IconTemplates.load(Path(template_dir) if template_dir else None)
    print(f"Icons loaded: {', '.join(templates.available()) or 'none'}")
    layout = RegionLayout.from_dict(settings.get("layout"))

    for image_path in sys.argv[1:]:
        try:
            analyze_image(image_path, engine, templates, layout, float(settings["upscale_factor"]))
        except ImageLoadError as e:
            print(f"ERROR: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
