"""
cardreader/cli/main.py: CLI entry point using Click

Commands:
- extract IMAGE [--timeout 20] [--concurrent] - Extract one card, print JSON
- batch --dir /path/to/cards --out records.jsonl - Extract every card in a directory
- roster-ocr east.png west.png --out roster.json - Roster screenshots to assignments
- diagnose-roster --roster roster.json --players players.json - Roster reconciliation
"""

import click
from pathlib import Path
from datetime import datetime
import asyncio
import json
import logging

from cardreader.config import LOG_LEVEL

# Setup logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.webp', '.bmp', '.tif', '.tiff'}


def _build_extractor(timeout, tesseract_cmd=None):
    from cardreader.extraction.pipeline import CardExtractor
    from cardreader.ocr.tesseract_service import TesseractOCRService

    if tesseract_cmd:
        ocr = TesseractOCRService(tesseract_cmd=tesseract_cmd)
    else:
        ocr = TesseractOCRService()
    return CardExtractor(ocr_service=ocr, timeout=timeout)


@click.group()
def cli():
    """Tabletop Baseball Card Reader CLI"""
    pass


@cli.command()
@click.argument('image')
@click.option('--timeout', type=float, default=None, help='Per-region OCR deadline in seconds')
@click.option('--concurrent', is_flag=True, help='Recognize header and body at the same time')
@click.option('--tesseract-cmd', default=None, help='Path to the tesseract executable')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def extract(image, timeout, concurrent, tesseract_cmd, debug):
    """
    Extract one card and print the record as JSON

    IMAGE may be a file path, a data: URL or an http(s) URL.

    Example: extract cards/ruth_1927.jpg --timeout 20
    """
    from cardreader.ocr.base_ocr import RecognitionError
    from cardreader.ocr.region_crops import SegmentationError
    from cardreader.utils.image_io import ImageLoadError, is_remote_url

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    extractor = _build_extractor(timeout, tesseract_cmd)

    try:
        if concurrent or is_remote_url(image):
            record = asyncio.run(extractor.extract_async(image))
        else:
            record = extractor.extract(image)
    except (ImageLoadError, SegmentationError, RecognitionError) as e:
        logger.error(f"Extraction failed for {image}: {e}")
        raise click.ClickException(str(e))

    click.echo(json.dumps(record.to_dict(), indent=2))


@cli.command()
@click.option('--dir', 'card_dir', required=True, type=click.Path(exists=True, file_okay=False), help='Directory containing card images')
@click.option('--out', 'output_path', required=True, type=click.Path(), help='Output JSON Lines path')
@click.option('--timeout', type=float, default=None, help='Per-region OCR deadline in seconds')
@click.option('--tesseract-cmd', default=None, help='Path to the tesseract executable')
def batch(card_dir, output_path, timeout, tesseract_cmd):
    """
    Extract every card image in a directory

    Example: batch --dir scans/ --out records.jsonl

    Writes one JSON line per image and a metrics.json summary next to the
    output file. A failed image is recorded and the batch continues.
    """
    from tqdm import tqdm

    card_dir_path = Path(card_dir)
    image_paths = sorted(
        p for p in card_dir_path.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )

    if not image_paths:
        logger.error(f"No images found in {card_dir}")
        return

    logger.info(f"Found {len(image_paths)} images to process")

    extractor = _build_extractor(timeout, tesseract_cmd)

    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    num_ok = 0
    failures = []
    start_time = datetime.now()

    with open(out_path, 'w', encoding='utf-8') as f:
        for img_path in tqdm(image_paths, desc="Extracting cards"):
            try:
                record = extractor.extract(img_path)
                line = {'image': str(img_path), 'status': 'ok', 'record': record.to_dict()}
                num_ok += 1
            except Exception as e:
                logger.error(f"Error processing {img_path}: {e}")
                line = {'image': str(img_path), 'status': 'failed', 'error': str(e)}
                failures.append(line)

            f.write(json.dumps(line) + '\n')

    duration = (datetime.now() - start_time).total_seconds()

    metrics = {
        'total_images': len(image_paths),
        'num_extracted': num_ok,
        'num_failures': len(failures),
        'avg_time_per_image': duration / len(image_paths),
        'total_duration_seconds': duration,
        'timestamp': start_time.strftime("%Y%m%d_%H%M%S"),
        'output': str(out_path)
    }

    metrics_path = out_path.parent / "metrics.json"
    with open(metrics_path, 'w') as f:
        json.dump(metrics, f, indent=2)

    logger.info(f"Extraction completed: {num_ok}/{len(image_paths)} cards")
    logger.info(f"Results: {out_path}")


def _build_roster_reader(timeout, tesseract_cmd=None):
    from cardreader.config import ROSTER_OCR_PSM_MODE
    from cardreader.ocr.tesseract_service import TesseractOCRService
    from cardreader.roster.roster_ocr import RosterReader

    if tesseract_cmd:
        ocr = TesseractOCRService(tesseract_cmd=tesseract_cmd, psm=ROSTER_OCR_PSM_MODE)
    else:
        ocr = TesseractOCRService(psm=ROSTER_OCR_PSM_MODE)
    return RosterReader(ocr_service=ocr, timeout=timeout)


@cli.command('roster-ocr')
@click.argument('images', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--out', 'output_path', required=True, type=click.Path(), help='Roster assignment JSON to write')
@click.option('--timeout', type=float, default=None, help='OCR deadline per image in seconds')
@click.option('--tesseract-cmd', default=None, help='Path to the tesseract executable')
def roster_ocr(images, output_path, timeout, tesseract_cmd):
    """
    Read roster screenshots into a roster assignment file

    Each screenshot holds one division. Teams from every image are merged
    into a single {"rosters": {...}} document.

    Example: roster-ocr east.png west.png --out roster-assignments.json
    """
    from cardreader.ocr.base_ocr import RecognitionError
    from cardreader.roster.roster_ocr import RosterParseError, to_roster_assignments
    from cardreader.utils.image_io import ImageLoadError

    reader = _build_roster_reader(timeout, tesseract_cmd)

    try:
        teams = reader.read_images(Path(image) for image in images)
    except (ImageLoadError, RecognitionError, RosterParseError) as e:
        logger.error(f"Roster OCR failed: {e}")
        raise click.ClickException(str(e))

    assignments = to_roster_assignments(teams)

    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, 'w', encoding='utf-8') as f:
        json.dump(assignments, f, indent=2)

    num_players = sum(len(team['hitters']) + len(team['pitchers']) for team in assignments['rosters'].values())
    logger.info(f"Wrote {len(assignments['rosters'])} team(s), {num_players} player(s) to {out_path}")
    click.echo(f"{len(assignments['rosters'])} teams, {num_players} players -> {out_path}")


@cli.command('diagnose-roster')
@click.option('--roster', 'roster_path', required=True, type=click.Path(exists=True, dir_okay=False), help='Roster assignment JSON file')
@click.option('--players', 'players_path', required=True, type=click.Path(exists=True, dir_okay=False), help='Player records JSON (list of {name, season, roster})')
def diagnose_roster(roster_path, players_path):
    """
    Compare roster assignments against stored player records

    Example: diagnose-roster --roster roster-assignments.json --players players.json
    """
    from cardreader.roster.diagnostic import diagnose_roster_mismatches, load_json

    try:
        roster_data = load_json(Path(roster_path))
        players = load_json(Path(players_path))
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Could not read input: {e}")

    if isinstance(players, dict):
        players = players.get('players', [])

    result = diagnose_roster_mismatches(roster_data, players)
    click.echo(json.dumps(result.to_dict(), indent=2))


if __name__ == '__main__':
    cli()
