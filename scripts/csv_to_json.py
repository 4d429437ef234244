"""Convert a GIS CSV export into the JSON record list the pipeline reads.

Every row becomes an object keyed by the header row; values stay strings.
Rows with the wrong number of columns are skipped.

Usage:
    python scripts/csv_to_json.py data/raw/mvum-roads.csv data/mvum-roads.json
    python scripts/csv_to_json.py input.csv output.json --verbose
"""

import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path for forest_routes imports
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from forest_routes._io_common import atomic_write_json
from forest_routes.cli import build_parser, run_stage
from forest_routes.csv_convert import csv_to_records

logger = logging.getLogger(__name__)


def convert(args) -> None:
    csv_path = args.input_csv.resolve()
    json_path = args.output_json.resolve()

    conversion = csv_to_records(csv_path)
    atomic_write_json(json_path, conversion.records)

    input_mb = csv_path.stat().st_size / 1024 / 1024
    output_mb = json_path.stat().st_size / 1024 / 1024
    logger.info("Input:  %s (%.2f MB)", csv_path, input_mb)
    logger.info("Output: %s (%.2f MB)", json_path, output_mb)
    logger.info("Records: %d", len(conversion.records))


def main() -> None:
    """Entry point for the CSV conversion script."""
    parser = build_parser("Convert a CSV export to a JSON record list.", epilog=__doc__)
    parser.add_argument("input_csv", type=Path, help="CSV file to convert")
    parser.add_argument("output_json", type=Path, help="JSON file to write")
    run_stage(convert, parser)


if __name__ == "__main__":
    main()
