#!/usr/bin/env python3
"""
Add the PaddleOCR engine to the Runner Xcode project.

Injects the PaddleOCR sources, the PaddleLite static library and the
OpenCV framework, then updates search paths and linker flags on every
build configuration of the Runner target. Safe to run repeatedly.

Usage:
    ocr-xcode
    ocr-xcode ios/Runner.xcodeproj
    ocr-xcode ios/Runner.xcodeproj --dry-run --verbose
"""

import argparse
import logging
import sys

from .exceptions import OcrXcodeError
from .pipeline import run

logger = logging.getLogger(__name__)

DEFAULT_PROJECT = "ios/Runner.xcodeproj"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Add PaddleOCR files to the Runner Xcode project")
    parser.add_argument("project", nargs="?", default=DEFAULT_PROJECT,
                        help=".xcodeproj bundle or project.pbxproj to edit")
    parser.add_argument("--dry-run", action="store_true",
                        help="Apply every change in memory without saving")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        summary = run(args.project, dry_run=args.dry_run)
    except OcrXcodeError as e:
        logger.error(f"Project not modified: {e}")
        return 1
    except Exception as e:
        logger.error(f"Project not modified, unexpected failure: {e}", exc_info=True)
        return 1

    if summary.saved:
        print("✅ Xcode project updated successfully!")
    else:
        print("ℹ️  Dry run, nothing written. Planned changes:")
    for line in summary.lines():
        print(f"   {line}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
