"""Attach a motorized access SCORECARD to every forest and ranger district.

Grades by the share of mileage open to full-size vehicles:
A >= 80%, B >= 70%, C >= 60%, D >= 50%, F otherwise.

Prerequisites:
  - Run scripts/fix_forest_aggregates.py first so forest grades use district sums

Usage:
    python scripts/add_scorecards.py
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
from forest_routes.scorecard import add_scorecards


def score(args) -> None:
    _config, data_dir = load_settings(args)
    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    save_forests(artifact, add_scorecards(load_forests(artifact)))


def main() -> None:
    """Entry point for the scorecard script."""
    parser = build_parser("Add motorized access scorecards.", epilog=__doc__)
    run_stage(score, parser)


if __name__ == "__main__":
    main()
