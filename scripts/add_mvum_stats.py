"""Add MVUM road statistics to every forest and ranger district.

Matches data/mvum-roads.json segments by FORESTNAME (and DISTRICTNAME for
districts) and sets MVUM_ROADS: road count, total and seasonal mileage,
mileage per maintenance level and per vehicle class.

Prerequisites:
  - Run scripts/merge_forests.py first

Usage:
    python scripts/add_mvum_stats.py
    python scripts/add_mvum_stats.py --verbose    # Per-forest debug lines
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path for forest_routes imports
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from forest_routes._io_common import load_forests, load_json_records, save_forests
from forest_routes.cli import build_parser, load_settings, run_stage
from forest_routes.paths import FORESTS_WITH_DISTRICTS_FILENAME, MVUM_ROADS_FILENAME, dataset_path
from forest_routes.route_stats import add_mvum_road_stats
from forest_routes.schemas.models import MvumRoadRecord


def add_stats(args) -> None:
    _config, data_dir = load_settings(args)
    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    forests = load_forests(artifact)
    roads = load_json_records(dataset_path(data_dir, MVUM_ROADS_FILENAME), MvumRoadRecord)
    save_forests(artifact, add_mvum_road_stats(forests, roads))


def main() -> None:
    """Entry point for the MVUM road stats script."""
    parser = build_parser("Add MVUM road statistics.", epilog=__doc__)
    run_stage(add_stats, parser)


if __name__ == "__main__":
    main()
