"""Create forests-with-districts.json from the forest and district lists.

Reads data/national-forests.json and data/ranger-districts.json, nests each
ranger district under the forest with the same FORESTNAME, and writes the
initial artifact with all-zero statistics.  Run this first; every other
stage rewrites the artifact it produces.

Usage:
    python scripts/merge_forests.py              # Default
    python scripts/merge_forests.py --verbose    # Debug logging
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path for forest_routes imports
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from forest_routes._io_common import load_json_list, save_forests
from forest_routes.cli import build_parser, load_settings, run_stage
from forest_routes.merge import merge_forests_with_districts
from forest_routes.paths import (
    FORESTS_WITH_DISTRICTS_FILENAME,
    NATIONAL_FORESTS_FILENAME,
    RANGER_DISTRICTS_FILENAME,
    dataset_path,
)


def merge(args) -> None:
    _config, data_dir = load_settings(args)
    forest_rows = load_json_list(dataset_path(data_dir, NATIONAL_FORESTS_FILENAME))
    district_rows = load_json_list(dataset_path(data_dir, RANGER_DISTRICTS_FILENAME))
    forests = merge_forests_with_districts(forest_rows, district_rows)
    save_forests(dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME), forests)


def main() -> None:
    """Entry point for the merge script."""
    parser = build_parser(
        "Merge national forests with their ranger districts.", epilog=__doc__,
    )
    run_stage(merge, parser)


if __name__ == "__main__":
    main()
