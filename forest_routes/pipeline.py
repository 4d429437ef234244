"""Full pipeline orchestration.

Runs every stage in dependency order over explicit inputs:

    merge -> MVUM roads -> MVUM trails -> closed roads -> vehicle-class
    mileage -> gap fill -> district corrections -> reconcile -> scorecards
    -> integrity report

Each stage receives the previous stage's forest list and returns a new one,
so a failed stage leaves earlier results (and the artifact on disk) intact.

Usage:
    inputs = load_pipeline_inputs(data_dir)
    forests, report = run_pipeline(inputs, load_corrections(config))
    save_forests(data_dir / FORESTS_WITH_DISTRICTS_FILENAME, forests)
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from forest_routes._io_common import load_json_list, load_json_records
from forest_routes.corrections import DistrictCorrection, OrphanGroup, apply_district_corrections
from forest_routes.gap_fill import GapFillSummary, fill_missing_mvum_stats
from forest_routes.integrity import IntegrityReport, build_integrity_report
from forest_routes.merge import merge_forests_with_districts
from forest_routes.paths import (
    CLOSED_ROADS_FILENAME,
    MVUM_ROADS_FILENAME,
    MVUM_TRAILS_FILENAME,
    NATIONAL_FORESTS_FILENAME,
    NFS_ROADS_FILENAME,
    RANGER_DISTRICTS_FILENAME,
    dataset_path,
)
from forest_routes.reconcile import ReconcileSummary, reconcile_forest_aggregates
from forest_routes.route_stats import (
    add_closed_road_stats,
    add_mvum_road_stats,
    add_mvum_trail_stats,
    add_vehicle_class_mileage,
)
from forest_routes.schemas.models import (
    ClosedRoadRecord,
    MvumRoadRecord,
    MvumTrailRecord,
    NationalForest,
    NfsRoadRecord,
)
from forest_routes.scorecard import add_scorecards

logger = logging.getLogger(__name__)


@dataclass
class PipelineInputs:
    """Every source dataset, fully loaded before any stage runs."""

    forest_rows: list[dict]
    district_rows: list[dict]
    mvum_roads: list[MvumRoadRecord] = field(default_factory=list)
    mvum_trails: list[MvumTrailRecord] = field(default_factory=list)
    closed_roads: list[ClosedRoadRecord] = field(default_factory=list)
    nfs_roads: list[NfsRoadRecord] = field(default_factory=list)


@dataclass
class PipelineReport:
    """What each stage changed, for the run summary."""

    gap_fill: Optional[GapFillSummary] = None
    orphans: list[OrphanGroup] = field(default_factory=list)
    reconcile: Optional[ReconcileSummary] = None
    integrity: Optional[IntegrityReport] = None
    elapsed_seconds: float = 0.0


def load_pipeline_inputs(data_dir: Path) -> PipelineInputs:
    """Load all six source datasets from ``data_dir``.

    Raises:
        InputFileError: If any dataset is missing or malformed.
    """
    return PipelineInputs(
        forest_rows=load_json_list(dataset_path(data_dir, NATIONAL_FORESTS_FILENAME)),
        district_rows=load_json_list(dataset_path(data_dir, RANGER_DISTRICTS_FILENAME)),
        mvum_roads=load_json_records(dataset_path(data_dir, MVUM_ROADS_FILENAME), MvumRoadRecord),
        mvum_trails=load_json_records(dataset_path(data_dir, MVUM_TRAILS_FILENAME), MvumTrailRecord),
        closed_roads=load_json_records(dataset_path(data_dir, CLOSED_ROADS_FILENAME), ClosedRoadRecord),
        nfs_roads=load_json_records(dataset_path(data_dir, NFS_ROADS_FILENAME), NfsRoadRecord),
    )


def run_pipeline(
    inputs: PipelineInputs,
    corrections: Sequence[DistrictCorrection] = (),
) -> tuple[list[NationalForest], PipelineReport]:
    """Run every stage in order and return the final forests plus a report."""
    start = time.monotonic()
    report = PipelineReport()

    logger.info("=== Merge ===")
    forests = merge_forests_with_districts(inputs.forest_rows, inputs.district_rows)

    logger.info("=== Route statistics ===")
    forests = add_mvum_road_stats(forests, inputs.mvum_roads)
    forests = add_mvum_trail_stats(forests, inputs.mvum_trails)
    forests = add_closed_road_stats(forests, inputs.closed_roads)
    forests = add_vehicle_class_mileage(forests, inputs.mvum_roads)

    logger.info("=== Gap fill ===")
    forests, report.gap_fill = fill_missing_mvum_stats(forests, inputs.nfs_roads)

    if corrections:
        logger.info("=== District corrections ===")
        forests, report.orphans = apply_district_corrections(
            forests, corrections,
            closed_roads=inputs.closed_roads, nfs_roads=inputs.nfs_roads,
        )

    logger.info("=== Reconcile ===")
    forests, report.reconcile = reconcile_forest_aggregates(forests)

    logger.info("=== Scorecards ===")
    forests = add_scorecards(forests)

    logger.info("=== Integrity ===")
    report.integrity = build_integrity_report(forests)

    report.elapsed_seconds = time.monotonic() - start
    logger.info("Pipeline finished in %.1f seconds", report.elapsed_seconds)
    return forests, report
