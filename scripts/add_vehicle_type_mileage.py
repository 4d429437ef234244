"""Set vehicle-class mileage on MVUM_ROADS for every forest and district.

Recomputes ALL_VEHICLES_MILEAGE and HIGHWAY_VEHICLES_ONLY_MILEAGE from
data/mvum-roads.json (case-insensitive match on the MVUM symbol name),
rounded to 3 decimals.  All other MVUM_ROADS fields are left as they are.

Prerequisites:
  - Run scripts/add_mvum_stats.py first

Usage:
    python scripts/add_vehicle_type_mileage.py
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
from forest_routes.route_stats import add_vehicle_class_mileage
from forest_routes.schemas.models import MvumRoadRecord


def add_mileage(args) -> None:
    _config, data_dir = load_settings(args)
    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    forests = load_forests(artifact)
    roads = load_json_records(dataset_path(data_dir, MVUM_ROADS_FILENAME), MvumRoadRecord)
    save_forests(artifact, add_vehicle_class_mileage(forests, roads))


def main() -> None:
    """Entry point for the vehicle-class mileage script."""
    parser = build_parser("Add vehicle-class mileage to MVUM road stats.", epilog=__doc__)
    run_stage(add_mileage, parser)


if __name__ == "__main__":
    main()
