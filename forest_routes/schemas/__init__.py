"""Pydantic v2 schema models for the forest route statistics pipeline.

Provides validation models for all core data structures:
- MvumRoadRecord / MvumTrailRecord / ClosedRoadRecord / NfsRoadRecord:
  raw GIS route segments
- MvumRoadStats / MvumTrailStats / ClosedRoadStats: per-entity aggregates
- Scorecard: derived motorized access grade
- RangerDistrict / NationalForest: the persisted entity tree

Schema violations in entity files are fatal input errors, not warnings.
"""

from forest_routes.schemas.models import (
    CLOSED_ROAD_MAINTENANCE_LEVEL_KEYS,
    GRADES,
    MAINTENANCE_LEVEL_KEYS,
    TRAIL_TYPE_KEYS,
    ClosedRoadMaintenanceLevels,
    ClosedRoadRecord,
    ClosedRoadStats,
    MaintenanceLevels,
    MvumRoadRecord,
    MvumRoadStats,
    MvumTrailRecord,
    MvumTrailStats,
    NationalForest,
    NfsRoadRecord,
    RangerDistrict,
    Scorecard,
    TrailType,
)

__all__ = [
    # Vocabularies
    "CLOSED_ROAD_MAINTENANCE_LEVEL_KEYS",
    "GRADES",
    "MAINTENANCE_LEVEL_KEYS",
    "TRAIL_TYPE_KEYS",
    # Raw records
    "ClosedRoadRecord",
    "MvumRoadRecord",
    "MvumTrailRecord",
    "NfsRoadRecord",
    # Stats
    "ClosedRoadMaintenanceLevels",
    "ClosedRoadStats",
    "MaintenanceLevels",
    "MvumRoadStats",
    "MvumTrailStats",
    "TrailType",
    # Entities
    "NationalForest",
    "RangerDistrict",
    "Scorecard",
]
