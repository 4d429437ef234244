"""Fill empty MVUM road stats from the generic NFS roads dataset.

Some forests and districts publish no MVUM roads.  For those entities
(MVUM_ROADS.NUM_ROADS == 0) the road stats are rebuilt from NFS roads open
to all users, matched on the zero-padded org code.  An entity with at least
one MVUM road is never touched, and an entity with no NFS candidates keeps
its empty stats.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from forest_routes.aggregator import calculate_mvum_road_stats
from forest_routes.matching import (
    RecordIndex,
    nfs_strategy_for_district,
    nfs_strategy_for_forest,
)
from forest_routes.schemas.models import NationalForest, NfsRoadRecord
from forest_routes.utils import format_miles

logger = logging.getLogger(__name__)


@dataclass
class GapFillSummary:
    """Entities whose MVUM_ROADS were replaced from NFS roads."""

    forests_updated: list[str] = field(default_factory=list)
    districts_updated: list[str] = field(default_factory=list)

    @property
    def total_updated(self) -> int:
        return len(self.forests_updated) + len(self.districts_updated)


def fill_missing_mvum_stats(
    forests: Sequence[NationalForest],
    nfs_roads: Sequence[NfsRoadRecord],
) -> tuple[list[NationalForest], GapFillSummary]:
    """Replace empty MVUM_ROADS with stats computed from NFS roads.

    Args:
        forests: Current entity tree (not mutated).
        nfs_roads: Rows of nfs-roads.json.

    Returns:
        (new forest list, summary of updated entities)

    Raises:
        OrgCodeFormatError: If an entity that needs filling has an org code
            of the wrong width for the padded convention.
    """
    index = RecordIndex(nfs_roads)
    updated = [forest.model_copy(deep=True) for forest in forests]
    summary = GapFillSummary()

    for forest in updated:
        if forest.MVUM_ROADS.NUM_ROADS == 0:
            roads = index.select(nfs_strategy_for_forest(forest))
            if roads:
                forest.MVUM_ROADS = calculate_mvum_road_stats(roads)
                summary.forests_updated.append(forest.FORESTNAME)
                logger.info(
                    "FOREST %s: filled from %d NFS roads (%s)",
                    forest.FORESTNAME, len(roads),
                    format_miles(forest.MVUM_ROADS.TOTAL_MILEAGE),
                )

        for district in forest.RANGER_DISTRICTS:
            if district.MVUM_ROADS.NUM_ROADS != 0:
                continue
            roads = index.select(nfs_strategy_for_district(district))
            if not roads:
                continue
            district.MVUM_ROADS = calculate_mvum_road_stats(roads)
            summary.districts_updated.append(district.DISTRICTNAME)
            logger.info(
                "  District %s: filled from %d NFS roads (%s)",
                district.DISTRICTNAME, len(roads),
                format_miles(district.MVUM_ROADS.TOTAL_MILEAGE),
            )

    logger.info(
        "Gap fill: %d forests and %d ranger districts updated from NFS roads",
        len(summary.forests_updated), len(summary.districts_updated),
    )
    return updated, summary
