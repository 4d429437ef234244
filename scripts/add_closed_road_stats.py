"""Add closed road statistics to every forest and ranger district.

Closed roads carry an unpadded ADMIN_ORG code instead of names.  Forests
match when the first three ADMIN_ORG characters equal FORESTORGCODE;
districts match when ADMIN_ORG equals DISTRICTORGCODE.  Sets CLOSED_ROADS:
count, total, admin-only and trail-conversion mileage, and mileage per
maintenance level (including DECOMMISSIONED).

Prerequisites:
  - Run scripts/merge_forests.py first

Usage:
    python scripts/add_closed_road_stats.py
    python scripts/add_closed_road_stats.py --verbose
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
from forest_routes.paths import CLOSED_ROADS_FILENAME, FORESTS_WITH_DISTRICTS_FILENAME, dataset_path
from forest_routes.route_stats import add_closed_road_stats
from forest_routes.schemas.models import ClosedRoadRecord


def add_stats(args) -> None:
    _config, data_dir = load_settings(args)
    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    forests = load_forests(artifact)
    roads = load_json_records(dataset_path(data_dir, CLOSED_ROADS_FILENAME), ClosedRoadRecord)
    save_forests(artifact, add_closed_road_stats(forests, roads))


def main() -> None:
    """Entry point for the closed road stats script."""
    parser = build_parser("Add closed road statistics.", epilog=__doc__)
    run_stage(add_stats, parser)


if __name__ == "__main__":
    main()
