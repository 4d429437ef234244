"""Per-entity route statistics stages.

Each stage recomputes one stats family for every forest and every ranger
district from a raw dataset:

  add_mvum_road_stats        MVUM roads    -> MVUM_ROADS   (by name)
  add_mvum_trail_stats       MVUM trails   -> MVUM_TRAILS  (by name)
  add_closed_road_stats      closed roads  -> CLOSED_ROADS (by org code)
  add_vehicle_class_mileage  MVUM roads    -> MVUM_ROADS vehicle-class fields

Forest-level stats are computed directly from the forest's matched records,
not from its districts; the reconciler later replaces them with district
sums.  Stages never mutate their input: they return new forest lists.
"""

import logging
from typing import Sequence

from forest_routes.aggregator import (
    calculate_closed_road_stats,
    calculate_mvum_road_stats,
    calculate_mvum_trail_stats,
    calculate_vehicle_class_mileage,
)
from forest_routes.matching import (
    RecordIndex,
    closed_road_strategy_for_district,
    closed_road_strategy_for_forest,
    mvum_strategy_for_district,
    mvum_strategy_for_forest,
)
from forest_routes.schemas.models import (
    ClosedRoadRecord,
    MvumRoadRecord,
    MvumTrailRecord,
    NationalForest,
)
from forest_routes.utils import format_miles

logger = logging.getLogger(__name__)


def _copy_forests(forests: Sequence[NationalForest]) -> list[NationalForest]:
    return [forest.model_copy(deep=True) for forest in forests]


def add_mvum_road_stats(
    forests: Sequence[NationalForest],
    mvum_roads: Sequence[MvumRoadRecord],
) -> list[NationalForest]:
    """Set MVUM_ROADS on every forest and district from the MVUM roads export."""
    index = RecordIndex(mvum_roads)
    updated = _copy_forests(forests)
    district_count = 0

    for forest in updated:
        roads = index.select(mvum_strategy_for_forest(forest))
        forest.MVUM_ROADS = calculate_mvum_road_stats(roads)
        logger.debug(
            "%s: %d MVUM roads, %s",
            forest.FORESTNAME, forest.MVUM_ROADS.NUM_ROADS,
            format_miles(forest.MVUM_ROADS.TOTAL_MILEAGE),
        )
        for district in forest.RANGER_DISTRICTS:
            district_roads = index.select(mvum_strategy_for_district(forest, district))
            district.MVUM_ROADS = calculate_mvum_road_stats(district_roads)
            district_count += 1

    logger.info(
        "MVUM road stats: %d forests, %d districts from %d records",
        len(updated), district_count, len(index),
    )
    return updated


def add_mvum_trail_stats(
    forests: Sequence[NationalForest],
    mvum_trails: Sequence[MvumTrailRecord],
) -> list[NationalForest]:
    """Set MVUM_TRAILS on every forest and district from the MVUM trails export."""
    index = RecordIndex(mvum_trails)
    updated = _copy_forests(forests)
    district_count = 0

    for forest in updated:
        trails = index.select(mvum_strategy_for_forest(forest))
        forest.MVUM_TRAILS = calculate_mvum_trail_stats(trails)
        logger.debug(
            "%s: %d MVUM trails, %s",
            forest.FORESTNAME, forest.MVUM_TRAILS.NUM_TRAILS,
            format_miles(forest.MVUM_TRAILS.TOTAL_MILEAGE),
        )
        for district in forest.RANGER_DISTRICTS:
            district_trails = index.select(mvum_strategy_for_district(forest, district))
            district.MVUM_TRAILS = calculate_mvum_trail_stats(district_trails)
            district_count += 1

    logger.info(
        "MVUM trail stats: %d forests, %d districts from %d records",
        len(updated), district_count, len(index),
    )
    return updated


def add_closed_road_stats(
    forests: Sequence[NationalForest],
    closed_roads: Sequence[ClosedRoadRecord],
) -> list[NationalForest]:
    """Set CLOSED_ROADS on every forest and district from the closed roads export.

    Forests match on the integer value of the first three ADMIN_ORG
    characters; districts match on the full unpadded ADMIN_ORG.
    """
    index = RecordIndex(closed_roads)
    updated = _copy_forests(forests)
    district_count = 0

    for forest in updated:
        roads = index.select(closed_road_strategy_for_forest(forest))
        forest.CLOSED_ROADS = calculate_closed_road_stats(roads)
        logger.debug(
            "%s: %d closed roads, %s",
            forest.FORESTNAME, forest.CLOSED_ROADS.NUM_ROADS,
            format_miles(forest.CLOSED_ROADS.TOTAL_MILEAGE),
        )
        for district in forest.RANGER_DISTRICTS:
            district_roads = index.select(closed_road_strategy_for_district(district))
            district.CLOSED_ROADS = calculate_closed_road_stats(district_roads)
            district_count += 1

    logger.info(
        "Closed road stats: %d forests, %d districts from %d records",
        len(updated), district_count, len(index),
    )
    return updated


def add_vehicle_class_mileage(
    forests: Sequence[NationalForest],
    mvum_roads: Sequence[MvumRoadRecord],
) -> list[NationalForest]:
    """Overwrite the two vehicle-class mileage fields of MVUM_ROADS.

    Only ALL_VEHICLES_MILEAGE and HIGHWAY_VEHICLES_ONLY_MILEAGE change; every
    other MVUM_ROADS field is left as the road stage set it.  Values are
    rounded to 3 decimals.
    """
    index = RecordIndex(mvum_roads)
    updated = _copy_forests(forests)
    district_count = 0

    for forest in updated:
        mileage = calculate_vehicle_class_mileage(index.select(mvum_strategy_for_forest(forest)))
        forest.MVUM_ROADS.ALL_VEHICLES_MILEAGE = mileage.all_vehicles
        forest.MVUM_ROADS.HIGHWAY_VEHICLES_ONLY_MILEAGE = mileage.highway_vehicles_only
        for district in forest.RANGER_DISTRICTS:
            mileage = calculate_vehicle_class_mileage(
                index.select(mvum_strategy_for_district(forest, district))
            )
            district.MVUM_ROADS.ALL_VEHICLES_MILEAGE = mileage.all_vehicles
            district.MVUM_ROADS.HIGHWAY_VEHICLES_ONLY_MILEAGE = mileage.highway_vehicles_only
            district_count += 1

    logger.info(
        "Vehicle-class mileage: %d forests, %d districts updated",
        len(updated), district_count,
    )
    return updated
