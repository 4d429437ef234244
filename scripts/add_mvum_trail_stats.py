"""Add MVUM trail statistics to every forest and ranger district.

Matches data/mvum-trails.json segments by FORESTNAME (and DISTRICTNAME for
districts) and sets MVUM_TRAILS: trail count, total and seasonal mileage,
and mileage per trail type (FULL_SIZE, ATV, MOTORCYCLE, SPECIAL, OTHER).

Prerequisites:
  - Run scripts/merge_forests.py first

Usage:
    python scripts/add_mvum_trail_stats.py
    python scripts/add_mvum_trail_stats.py --verbose
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
from forest_routes.paths import FORESTS_WITH_DISTRICTS_FILENAME, MVUM_TRAILS_FILENAME, dataset_path
from forest_routes.route_stats import add_mvum_trail_stats
from forest_routes.schemas.models import MvumTrailRecord


def add_stats(args) -> None:
    _config, data_dir = load_settings(args)
    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    forests = load_forests(artifact)
    trails = load_json_records(dataset_path(data_dir, MVUM_TRAILS_FILENAME), MvumTrailRecord)
    save_forests(artifact, add_mvum_trail_stats(forests, trails))


def main() -> None:
    """Entry point for the MVUM trail stats script."""
    parser = build_parser("Add MVUM trail statistics.", epilog=__doc__)
    run_stage(add_stats, parser)


if __name__ == "__main__":
    main()
