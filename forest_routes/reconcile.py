"""Forest aggregate reconciliation.

Forest-level stats computed straight from raw records drift from the sum of
their districts (org-code prefixes pull in undefined districts, names are
spelled differently across exports).  The dashboard presents forest totals
as district roll-ups, so this stage overwrites every forest's MVUM_ROADS,
MVUM_TRAILS and CLOSED_ROADS with field-wise district sums.

Forests without districts keep their directly computed stats.  Running the
stage twice produces the same artifact.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from forest_routes.aggregator import (
    sum_closed_road_stats,
    sum_mvum_road_stats,
    sum_mvum_trail_stats,
)
from forest_routes.config import CHANGE_THRESHOLD
from forest_routes.schemas.models import NationalForest

logger = logging.getLogger(__name__)


@dataclass
class ReconcileSummary:
    """Outcome counts of one reconciliation run."""

    forests_updated: list[str] = field(default_factory=list)
    forests_already_correct: int = 0
    forests_without_districts: int = 0


def _differs(old: float, new: float) -> bool:
    return abs(old - new) >= CHANGE_THRESHOLD


def _describe_change(label: str, unit: str, old_count: int, new_count: int,
                     old_miles: float, new_miles: float) -> str:
    return (
        f"{label}: {old_count} -> {new_count} {unit}, "
        f"{old_miles:.2f} -> {new_miles:.2f} miles"
    )


def reconcile_forest_aggregates(
    forests: Sequence[NationalForest],
) -> tuple[list[NationalForest], ReconcileSummary]:
    """Replace forest stats with the sum of their districts' stats.

    Returns:
        (new forest list, summary).  A forest counts as updated when any
        family's count or total mileage moved by at least CHANGE_THRESHOLD.
    """
    updated = [forest.model_copy(deep=True) for forest in forests]
    summary = ReconcileSummary()

    for forest in updated:
        if not forest.has_districts:
            summary.forests_without_districts += 1
            continue

        districts = forest.RANGER_DISTRICTS
        roads = sum_mvum_road_stats(d.MVUM_ROADS for d in districts)
        trails = sum_mvum_trail_stats(d.MVUM_TRAILS for d in districts)
        closed = sum_closed_road_stats(d.CLOSED_ROADS for d in districts)

        changes = []
        if (_differs(forest.MVUM_ROADS.NUM_ROADS, roads.NUM_ROADS)
                or _differs(forest.MVUM_ROADS.TOTAL_MILEAGE, roads.TOTAL_MILEAGE)):
            changes.append(_describe_change(
                "MVUM Roads", "roads",
                forest.MVUM_ROADS.NUM_ROADS, roads.NUM_ROADS,
                forest.MVUM_ROADS.TOTAL_MILEAGE, roads.TOTAL_MILEAGE,
            ))
        if (_differs(forest.MVUM_TRAILS.NUM_TRAILS, trails.NUM_TRAILS)
                or _differs(forest.MVUM_TRAILS.TOTAL_MILEAGE, trails.TOTAL_MILEAGE)):
            changes.append(_describe_change(
                "MVUM Trails", "trails",
                forest.MVUM_TRAILS.NUM_TRAILS, trails.NUM_TRAILS,
                forest.MVUM_TRAILS.TOTAL_MILEAGE, trails.TOTAL_MILEAGE,
            ))
        if (_differs(forest.CLOSED_ROADS.NUM_ROADS, closed.NUM_ROADS)
                or _differs(forest.CLOSED_ROADS.TOTAL_MILEAGE, closed.TOTAL_MILEAGE)):
            changes.append(_describe_change(
                "Closed Roads", "roads",
                forest.CLOSED_ROADS.NUM_ROADS, closed.NUM_ROADS,
                forest.CLOSED_ROADS.TOTAL_MILEAGE, closed.TOTAL_MILEAGE,
            ))

        forest.MVUM_ROADS = roads
        forest.MVUM_TRAILS = trails
        forest.CLOSED_ROADS = closed

        if changes:
            summary.forests_updated.append(forest.FORESTNAME)
            logger.info("%s (%d districts)", forest.FORESTNAME, len(districts))
            for change in changes:
                logger.info("  %s", change)
        else:
            summary.forests_already_correct += 1

    logger.info(
        "Reconciled %d forests: %d updated, %d already correct, %d without districts",
        len(updated), len(summary.forests_updated),
        summary.forests_already_correct, summary.forests_without_districts,
    )
    return updated, summary
