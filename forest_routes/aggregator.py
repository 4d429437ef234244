"""Route statistics aggregation.

Turns an entity's matched raw records into a stats object, and sums
district stats into forest stats for the reconciler.

Per-record rules:
  1. Parse SEG_LENGTH leniently (unparseable -> 0.0).  The record is still
     counted.
  2. Add the length to the total and to every bucket the classifier assigns.
     Bucket families are independent: one road can add to a maintenance
     level, the seasonal total and a vehicle class at the same time.
  3. Round every mileage field once, after all records are summed.

Empty input yields an all-zero stats object, never None.

Usage:
    stats = calculate_mvum_road_stats(select_records(roads, strategy))
"""

from __future__ import annotations

from typing import Iterable, NamedTuple, Optional

from forest_routes.classifier import (
    classify_closed_road_maintenance_level,
    classify_maintenance_level,
    classify_trail_type,
    is_admin_closed,
    is_all_vehicles,
    is_highway_vehicles_only,
    is_seasonal,
    is_trail_conversion_suitable,
)
from forest_routes.config import MILEAGE_DECIMALS, VEHICLE_CLASS_MILEAGE_DECIMALS
from forest_routes.schemas.models import (
    CLOSED_ROAD_MAINTENANCE_LEVEL_KEYS,
    MAINTENANCE_LEVEL_KEYS,
    TRAIL_TYPE_KEYS,
    ClosedRoadMaintenanceLevels,
    ClosedRoadRecord,
    ClosedRoadStats,
    MaintenanceLevels,
    MvumRoadStats,
    MvumTrailRecord,
    MvumTrailStats,
    TrailType,
)
from forest_routes.utils import round_mileage


def _round_all(buckets: dict[str, float], decimals: int = MILEAGE_DECIMALS) -> dict[str, float]:
    return {key: round_mileage(value, decimals) for key, value in buckets.items()}


# ---------------------------------------------------------------------------
# Raw records -> stats
# ---------------------------------------------------------------------------


def calculate_mvum_road_stats(records: Iterable) -> MvumRoadStats:
    """Aggregate road records (MVUM or NFS) into MvumRoadStats.

    Accepts any record exposing ``segment_length``, ``maintenance_level``,
    ``seasonal`` and ``symbol_name``.  NFS road records report no seasonal
    flag and no symbol, so their seasonal and vehicle-class mileage stays 0.
    """
    count = 0
    totals = {
        "TOTAL_MILEAGE": 0.0,
        "TOTAL_SEASONAL_MILEAGE": 0.0,
        "ALL_VEHICLES_MILEAGE": 0.0,
        "HIGHWAY_VEHICLES_ONLY_MILEAGE": 0.0,
    }
    levels = dict.fromkeys(MAINTENANCE_LEVEL_KEYS, 0.0)

    for record in records:
        length = record.segment_length
        count += 1
        totals["TOTAL_MILEAGE"] += length
        if is_seasonal(record.seasonal):
            totals["TOTAL_SEASONAL_MILEAGE"] += length
        levels[classify_maintenance_level(record.maintenance_level)] += length
        if is_all_vehicles(record.symbol_name):
            totals["ALL_VEHICLES_MILEAGE"] += length
        if is_highway_vehicles_only(record.symbol_name):
            totals["HIGHWAY_VEHICLES_ONLY_MILEAGE"] += length

    return MvumRoadStats(
        NUM_ROADS=count,
        MAINTENANCE_LEVELS=MaintenanceLevels(**_round_all(levels)),
        **_round_all(totals),
    )


def calculate_mvum_trail_stats(records: Iterable[MvumTrailRecord]) -> MvumTrailStats:
    """Aggregate MVUM trail records into MvumTrailStats."""
    count = 0
    totals = {"TOTAL_MILEAGE": 0.0, "TOTAL_SEASONAL_MILEAGE": 0.0}
    trail_types = dict.fromkeys(TRAIL_TYPE_KEYS, 0.0)

    for record in records:
        length = record.segment_length
        count += 1
        totals["TOTAL_MILEAGE"] += length
        if is_seasonal(record.seasonal):
            totals["TOTAL_SEASONAL_MILEAGE"] += length
        trail_types[classify_trail_type(record.symbol_name)] += length

    return MvumTrailStats(
        NUM_TRAILS=count,
        TRAIL_TYPE=TrailType(**_round_all(trail_types)),
        **_round_all(totals),
    )


def calculate_closed_road_stats(records: Iterable[ClosedRoadRecord]) -> ClosedRoadStats:
    """Aggregate closed road records into ClosedRoadStats."""
    count = 0
    totals = {
        "TOTAL_MILEAGE": 0.0,
        "ADMIN_MILEAGE": 0.0,
        "MILEAGE_SUITABLE_FOR_TRAIL_CONVERSION": 0.0,
    }
    levels = dict.fromkeys(CLOSED_ROAD_MAINTENANCE_LEVEL_KEYS, 0.0)

    for record in records:
        length = record.segment_length
        count += 1
        totals["TOTAL_MILEAGE"] += length
        if is_admin_closed(record.OPENFORUSETO):
            totals["ADMIN_MILEAGE"] += length
        if is_trail_conversion_suitable(record.symbol_name):
            totals["MILEAGE_SUITABLE_FOR_TRAIL_CONVERSION"] += length
        levels[classify_closed_road_maintenance_level(record.maintenance_level)] += length

    return ClosedRoadStats(
        NUM_ROADS=count,
        MAINTENANCE_LEVELS=ClosedRoadMaintenanceLevels(**_round_all(levels)),
        **_round_all(totals),
    )


class VehicleClassMileage(NamedTuple):
    """All-vehicles and highway-only mileage for one entity."""

    all_vehicles: float
    highway_vehicles_only: float


def calculate_vehicle_class_mileage(records: Iterable) -> VehicleClassMileage:
    """Sum vehicle-class mileage for the standalone vehicle-class stage.

    Rounded to VEHICLE_CLASS_MILEAGE_DECIMALS (3), unlike every other
    aggregate.  The reconciler later re-rounds forest sums to 2 decimals.
    """
    all_vehicles = 0.0
    highway_only = 0.0
    for record in records:
        length = record.segment_length
        if is_all_vehicles(record.symbol_name):
            all_vehicles += length
        if is_highway_vehicles_only(record.symbol_name):
            highway_only += length
    return VehicleClassMileage(
        all_vehicles=round_mileage(all_vehicles, VEHICLE_CLASS_MILEAGE_DECIMALS),
        highway_vehicles_only=round_mileage(highway_only, VEHICLE_CLASS_MILEAGE_DECIMALS),
    )


# ---------------------------------------------------------------------------
# Stats -> summed stats (reconciler)
# ---------------------------------------------------------------------------


def sum_mvum_road_stats(stats: Iterable[Optional[MvumRoadStats]]) -> MvumRoadStats:
    """Field-wise sum of road stats; None entries count as all-zero."""
    count = 0
    totals = dict.fromkeys(
        ("TOTAL_MILEAGE", "TOTAL_SEASONAL_MILEAGE",
         "ALL_VEHICLES_MILEAGE", "HIGHWAY_VEHICLES_ONLY_MILEAGE"),
        0.0,
    )
    levels = dict.fromkeys(MAINTENANCE_LEVEL_KEYS, 0.0)

    for item in stats:
        if item is None:
            continue
        count += item.NUM_ROADS
        for key in totals:
            totals[key] += getattr(item, key)
        for key in levels:
            levels[key] += getattr(item.MAINTENANCE_LEVELS, key)

    return MvumRoadStats(
        NUM_ROADS=count,
        MAINTENANCE_LEVELS=MaintenanceLevels(**_round_all(levels)),
        **_round_all(totals),
    )


def sum_mvum_trail_stats(stats: Iterable[Optional[MvumTrailStats]]) -> MvumTrailStats:
    """Field-wise sum of trail stats; None entries count as all-zero."""
    count = 0
    totals = dict.fromkeys(("TOTAL_MILEAGE", "TOTAL_SEASONAL_MILEAGE"), 0.0)
    trail_types = dict.fromkeys(TRAIL_TYPE_KEYS, 0.0)

    for item in stats:
        if item is None:
            continue
        count += item.NUM_TRAILS
        for key in totals:
            totals[key] += getattr(item, key)
        for key in trail_types:
            trail_types[key] += getattr(item.TRAIL_TYPE, key)

    return MvumTrailStats(
        NUM_TRAILS=count,
        TRAIL_TYPE=TrailType(**_round_all(trail_types)),
        **_round_all(totals),
    )


def sum_closed_road_stats(stats: Iterable[Optional[ClosedRoadStats]]) -> ClosedRoadStats:
    """Field-wise sum of closed road stats; None entries count as all-zero."""
    count = 0
    totals = dict.fromkeys(
        ("TOTAL_MILEAGE", "ADMIN_MILEAGE", "MILEAGE_SUITABLE_FOR_TRAIL_CONVERSION"),
        0.0,
    )
    levels = dict.fromkeys(CLOSED_ROAD_MAINTENANCE_LEVEL_KEYS, 0.0)

    for item in stats:
        if item is None:
            continue
        count += item.NUM_ROADS
        for key in totals:
            totals[key] += getattr(item, key)
        for key in levels:
            levels[key] += getattr(item.MAINTENANCE_LEVELS, key)

    return ClosedRoadStats(
        NUM_ROADS=count,
        MAINTENANCE_LEVELS=ClosedRoadMaintenanceLevels(**_round_all(levels)),
        **_round_all(totals),
    )
