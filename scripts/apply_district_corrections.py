"""Apply the district correction table from config/pipeline_config.json.

For each configured forest, rebuilds forest-level CLOSED_ROADS and/or
MVUM_ROADS from records whose ADMIN_ORG belongs to a defined ranger
district, and warns about orphaned org codes that share the forest prefix.

Prerequisites:
  - Run scripts/add_closed_road_stats.py and scripts/fill_missing_mvum_stats.py first

Usage:
    python scripts/apply_district_corrections.py
"""

import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path for forest_routes imports
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from forest_routes._io_common import load_forests, load_json_records, save_forests
from forest_routes.cli import build_parser, load_settings, run_stage
from forest_routes.corrections import (
    CLOSED_ROADS_DATASET,
    NFS_ROADS_DATASET,
    apply_district_corrections,
    load_corrections,
)
from forest_routes.paths import (
    CLOSED_ROADS_FILENAME,
    FORESTS_WITH_DISTRICTS_FILENAME,
    NFS_ROADS_FILENAME,
    dataset_path,
)
from forest_routes.schemas.models import ClosedRoadRecord, NfsRoadRecord

logger = logging.getLogger(__name__)


def correct(args) -> None:
    config, data_dir = load_settings(args)
    corrections = load_corrections(config)
    if not corrections:
        logger.info("No district corrections configured -- nothing to do")
        return

    datasets = {name for c in corrections for name in c.datasets}
    closed_roads = None
    nfs_roads = None
    if CLOSED_ROADS_DATASET in datasets:
        closed_roads = load_json_records(
            dataset_path(data_dir, CLOSED_ROADS_FILENAME), ClosedRoadRecord,
        )
    if NFS_ROADS_DATASET in datasets:
        nfs_roads = load_json_records(dataset_path(data_dir, NFS_ROADS_FILENAME), NfsRoadRecord)

    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    forests = load_forests(artifact)
    forests, orphans = apply_district_corrections(
        forests, corrections, closed_roads=closed_roads, nfs_roads=nfs_roads,
    )
    save_forests(artifact, forests)

    if orphans:
        print()
        print("  Orphaned ADMIN_ORG codes (NOT included in forest stats):")
        for group in orphans:
            print(
                f"    {group.forest_name} [{group.dataset}] {group.admin_org}: "
                f"{group.count} roads, {group.mileage:.2f} miles"
            )
        print()


def main() -> None:
    """Entry point for the district correction script."""
    parser = build_parser("Apply manual district corrections.", epilog=__doc__)
    run_stage(correct, parser)


if __name__ == "__main__":
    main()
