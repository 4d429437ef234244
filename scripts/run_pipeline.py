"""Rebuild forests-with-districts.json from the source datasets in one run.

Runs every stage in order:
  1. Merge forests with ranger districts
  2. MVUM road, MVUM trail and closed road statistics
  3. Vehicle-class mileage
  4. Gap fill from NFS roads
  5. District corrections from config/pipeline_config.json
  6. Forest = sum of districts reconciliation
  7. Scorecards
  8. Integrity report (outputs/integrity_report.json)

The artifact is only written once every stage has succeeded.

Usage:
    python scripts/run_pipeline.py                 # Default
    python scripts/run_pipeline.py --verbose       # Debug logging
    python scripts/run_pipeline.py --dry-run       # Run without writing
"""

import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path for forest_routes imports
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from forest_routes._io_common import atomic_write_json, save_forests
from forest_routes.cli import build_parser, load_settings, run_stage
from forest_routes.corrections import load_corrections
from forest_routes.paths import FORESTS_WITH_DISTRICTS_FILENAME, INTEGRITY_REPORT_PATH, dataset_path
from forest_routes.pipeline import load_pipeline_inputs, run_pipeline

logger = logging.getLogger(__name__)


def run(args) -> None:
    config, data_dir = load_settings(args)
    corrections = load_corrections(config)
    inputs = load_pipeline_inputs(data_dir)
    forests, report = run_pipeline(inputs, corrections)

    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)
    if args.dry_run:
        logger.info("Dry run complete -- no files written.")
    else:
        save_forests(artifact, forests)
        atomic_write_json(INTEGRITY_REPORT_PATH, report.integrity.to_dict())

    integrity = report.integrity
    print()
    print("=" * 60)
    print("  FOREST ROUTE PIPELINE COMPLETE")
    print("=" * 60)
    print(f"  Forests:                 {len(forests)}")
    print(f"  Ranger districts:        {sum(len(f.RANGER_DISTRICTS) for f in forests)}")
    print(f"  Gap-filled entities:     {report.gap_fill.total_updated}")
    print(f"  Orphaned org codes:      {len(report.orphans)}")
    print(f"  Forests reconciled:      {len(report.reconcile.forests_updated)}")
    print(f"  Exact aggregation:       {len(integrity.strict_valid)}/{integrity.forests_with_districts}")
    print(f"  Category-sum errors:     {len(integrity.category_errors)}")
    print(f"  Duration:                {report.elapsed_seconds:.1f} seconds")
    if not args.dry_run:
        print(f"  Output:                  {artifact}")
    print()

    if not integrity.passed:
        logger.error("Integrity check failed -- see %s", INTEGRITY_REPORT_PATH)
        sys.exit(1)


def main() -> None:
    """Entry point for the full pipeline."""
    parser = build_parser("Run the full forest route statistics pipeline.", epilog=__doc__)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run every stage but write nothing",
    )
    run_stage(run, parser)


if __name__ == "__main__":
    main()
