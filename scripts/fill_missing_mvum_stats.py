"""Fill empty MVUM road stats from the generic NFS roads dataset.

Forests and districts with NUM_ROADS == 0 get MVUM_ROADS rebuilt from
data/nfs-roads.json roads open to ALL, matched on the zero-padded org code
("0" + FORESTORGCODE as a prefix, "0" + DISTRICTORGCODE exactly).

Prerequisites:
  - Run scripts/add_mvum_stats.py first

Usage:
    python scripts/fill_missing_mvum_stats.py
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
from forest_routes.gap_fill import fill_missing_mvum_stats
from forest_routes.paths import FORESTS_WITH_DISTRICTS_FILENAME, NFS_ROADS_FILENAME, dataset_path
from forest_routes.schemas.models import NfsRoadRecord


def fill(args) -> None:
    _config, data_dir = load_settings(args)
    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    forests = load_forests(artifact)
    roads = load_json_records(dataset_path(data_dir, NFS_ROADS_FILENAME), NfsRoadRecord)
    forests, summary = fill_missing_mvum_stats(forests, roads)
    save_forests(artifact, forests)

    print()
    print(f"  Forests filled from NFS roads:   {len(summary.forests_updated)}")
    print(f"  Districts filled from NFS roads: {len(summary.districts_updated)}")
    print()


def main() -> None:
    """Entry point for the gap-fill script."""
    parser = build_parser("Fill missing MVUM road stats from NFS roads.", epilog=__doc__)
    run_stage(fill, parser)


if __name__ == "__main__":
    main()
