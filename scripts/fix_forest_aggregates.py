"""Recompute forest-level stats as the sum of their ranger districts.

Overwrites MVUM_ROADS, MVUM_TRAILS and CLOSED_ROADS on every forest that has
districts.  Forests without districts are skipped.  Safe to run repeatedly.

Usage:
    python scripts/fix_forest_aggregates.py
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path for forest_routes imports
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from forest_routes._io_common import load_forests, save_forests
from forest_routes.cli import build_parser, load_settings, run_stage
from forest_routes.paths import FORESTS_WITH_DISTRICTS_FILENAME, dataset_path
from forest_routes.reconcile import reconcile_forest_aggregates


def fix(args) -> None:
    _config, data_dir = load_settings(args)
    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    forests, summary = reconcile_forest_aggregates(load_forests(artifact))
    save_forests(artifact, forests)

    print()
    print("=" * 60)
    print("  FOREST AGGREGATE CORRECTION COMPLETE")
    print("=" * 60)
    print(f"  Forests updated:                     {len(summary.forests_updated)}")
    print(f"  Forests already correct:             {summary.forests_already_correct}")
    print(f"  Forests without districts (skipped): {summary.forests_without_districts}")
    print(f"  Total forests:                       {len(forests)}")
    print()


def main() -> None:
    """Entry point for the forest aggregate correction script."""
    parser = build_parser("Recompute forest stats from district stats.", epilog=__doc__)
    run_stage(fix, parser)


if __name__ == "__main__":
    main()
