"""
huntscan - Entry Point

Analyzes hunting screenshots and prints the result as JSON.

Example:
    python main.py analyze start.png
    python main.py session start.png end.png
    python main.py session start.png end.png --engine paddle --debug
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from huntscan import ImageLoadError, ModelInitError, ScreenshotAnalyzer
from huntscan.settings import load_settings


logger = logging.getLogger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_BAD_IMAGE = 2
EXIT_BAD_ENVIRONMENT = 3


def _configure_logging(verbose: bool) -> None:
    """Log to both console (stderr) and huntscan.log."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("huntscan.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hunting screenshot analyzer")
    parser.add_argument("--settings", type=Path, default=None,
                        help="Settings file (default: config.json)")
    parser.add_argument("--engine", default=None,
                        help="OCR engine override (tesseract, paddle)")
    parser.add_argument("--templates", type=Path, default=None,
                        help="Icon template directory override")
    parser.add_argument("--debug", action="store_true",
                        help="Save annotated debug images")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug-level logging")

    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Read fields from one screenshot")
    analyze.add_argument("image", type=Path)

    session = commands.add_parser("session", help="Compute the gain between two screenshots")
    session.add_argument("start", type=Path)
    session.add_argument("end", type=Path)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface and return the process exit code."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    settings = load_settings(args.settings)
    if args.engine:
        settings["engine"] = args.engine
        if args.engine != "tesseract":
            settings["engine_options"] = {}
    if args.templates:
        settings["template_dir"] = str(args.templates)
    if args.debug:
        settings["debug_enabled"] = True

    try:
        analyzer = ScreenshotAnalyzer.from_settings(settings)
    except ModelInitError as e:
        logger.error(f"OCR setup problem: {e}")
        return EXIT_BAD_ENVIRONMENT
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_BAD_ENVIRONMENT

    try:
        if args.command == "analyze":
            result = analyzer.analyze(args.image).to_dict()
        else:
            delta = analyzer.analyze_session(args.start, args.end)
            result = delta.to_dict()
            result["counter_rollover_suspected"] = delta.counter_rollover_suspected
    except ImageLoadError as e:
        logger.error(f"Bad image file: {e}")
        return EXIT_BAD_IMAGE

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
