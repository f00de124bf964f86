#!/usr/bin/env python3
"""
Debug script to see what the reader sees on a card.
Draws the header/body crop bands, runs OCR on each and prints the text
alongside the decoded record.
"""

import sys
import json
import argparse
import logging
from pathlib import Path
import cv2

# Add project root
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cardreader.config import HEADER_HEIGHT_FRACTION, HEADER_MAX_HEIGHT_PX, BODY_HEIGHT_FRACTION
from cardreader.extraction.assembler import assemble_record
from cardreader.extraction.pipeline import CardExtractor
from cardreader.ocr.base_ocr import RecognitionError
from cardreader.utils.image_io import ImageLoadError, load_image


def debug_card_regions(image_path: Path, output_path: Path = None, timeout: float = None):
    """
    Draw the configured crop bands and dump per-region OCR text.
    """
    print(f"\n{'='*60}")
    print(f"Debug regions: {image_path.name}")
    print(f"{'='*60}")

    try:
        img = load_image(image_path)
    except ImageLoadError as e:
        print(f"ERROR: {e}")
        return None

    h, w = img.shape[:2]
    print(f"Image size: {w}x{h}")

    output = img.copy()

    # Header band (blue)
    header_y2 = int(min(HEADER_MAX_HEIGHT_PX, HEADER_HEIGHT_FRACTION * h))
    cv2.rectangle(output, (0, 0), (w - 1, header_y2), (255, 0, 0), 2)
    cv2.putText(output, "HEADER CROP", (5, max(15, header_y2 - 5)),
               cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 0, 0), 2)

    # Body band (green)
    body_y1 = int(HEADER_HEIGHT_FRACTION * h)
    body_y2 = min(h - 1, int(HEADER_HEIGHT_FRACTION * h + BODY_HEIGHT_FRACTION * h))
    cv2.rectangle(output, (0, body_y1), (w - 1, body_y2), (0, 255, 0), 2)
    cv2.putText(output, "BODY CROP", (5, body_y1 + 20),
               cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 255, 0), 2)

    print(f"Header band: y=[0:{header_y2}]")
    print(f"Body band:   y=[{body_y1}:{body_y2}]")

    if output_path is None:
        output_path = image_path.parent / f"{image_path.stem}_regions_debug.jpg"

    cv2.imwrite(str(output_path), output)
    print(f"\nSaved debug image: {output_path}")

    extractor = CardExtractor(timeout=timeout)
    try:
        header_text, body_text = extractor.recognize_regions(img)
    except RecognitionError as e:
        print(f"ERROR: OCR failed - {e}")
        return None

    print("\nHeader text:")
    print("-" * 60)
    print(header_text.rstrip())

    print("\nBody text:")
    print("-" * 60)
    print(body_text.rstrip())

    record = assemble_record(header_text, body_text)
    print("\nDecoded record:")
    print("-" * 60)
    print(json.dumps(record.to_dict(), indent=2))

    return record


def main():
    parser = argparse.ArgumentParser(description="Debug header/body OCR regions on a card")
    parser.add_argument('path', type=Path, help="Image file path")
    parser.add_argument('--output', '-o', type=Path, help="Output path for debug image")
    parser.add_argument('--timeout', type=float, default=None, help="Per-region OCR deadline in seconds")
    parser.add_argument('--debug', action='store_true', help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    debug_card_regions(args.path, args.output, args.timeout)


if __name__ == "__main__":
    main()
