"""Tests for filling empty MVUM road stats from NFS roads.

Tests forest_routes/gap_fill.py:
  - Trigger is NUM_ROADS == 0, at forest and district level independently
  - No NFS candidates leaves stats all-zero without raising
  - Entities with MVUM roads are never touched
  - Input forests are not mutated
"""

import pytest

from forest_routes.aggregator import calculate_mvum_road_stats
from forest_routes.errors import OrgCodeFormatError
from forest_routes.gap_fill import fill_missing_mvum_stats
from forest_routes.schemas.models import (
    MvumRoadRecord,
    MvumRoadStats,
    NationalForest,
    NfsRoadRecord,
    RangerDistrict,
)

ML2 = "2 - HIGH CLEARANCE VEHICLES"


def _forest(code=502, name="Beta National Forest", districts=(), mvum_roads=None):
    return NationalForest(
        FORESTNAME=name,
        FORESTORGCODE=code,
        MVUM_ROADS=mvum_roads or MvumRoadStats(),
        RANGER_DISTRICTS=[
            RangerDistrict(DISTRICTNAME=d_name, DISTRICTORGCODE=d_code, FORESTNAME=name)
            for d_name, d_code in districts
        ],
    )


NFS_ROADS = [
    NfsRoadRecord(ADMIN_ORG="050201", OPENFORUSETO="ALL", SEG_LENGTH=6.0, OPER_MAINT_LEVEL=ML2),
    NfsRoadRecord(ADMIN_ORG="050201", OPENFORUSETO="ADMIN", SEG_LENGTH=1.0),
    NfsRoadRecord(ADMIN_ORG="050202", OPENFORUSETO="ALL", SEG_LENGTH=2.5),
]


class TestFillMissingMvumStats:

    def test_no_candidates_keeps_zero_stats(self):
        """Zero MVUM roads and zero NFS matches: stats stay all-zero."""
        forest = _forest(code=509, districts=[("Lonely RD", 50901)])
        updated, summary = fill_missing_mvum_stats([forest], NFS_ROADS)
        assert updated[0].MVUM_ROADS == MvumRoadStats()
        assert updated[0].RANGER_DISTRICTS[0].MVUM_ROADS == MvumRoadStats()
        assert summary.total_updated == 0

    def test_forest_filled_from_prefix(self):
        updated, summary = fill_missing_mvum_stats([_forest()], NFS_ROADS)
        stats = updated[0].MVUM_ROADS
        assert stats.NUM_ROADS == 2
        assert stats.TOTAL_MILEAGE == 8.5
        assert stats.MAINTENANCE_LEVELS.ML2 == 6.0
        assert stats.MAINTENANCE_LEVELS.NONE == 2.5
        assert summary.forests_updated == ["Beta National Forest"]

    def test_district_filled_from_exact_code(self):
        forest = _forest(districts=[("East RD", 50201), ("West RD", 50202)])
        updated, summary = fill_missing_mvum_stats([forest], NFS_ROADS)
        east, west = updated[0].RANGER_DISTRICTS
        assert east.MVUM_ROADS.NUM_ROADS == 1
        assert east.MVUM_ROADS.TOTAL_MILEAGE == 6.0
        assert west.MVUM_ROADS.TOTAL_MILEAGE == 2.5
        assert summary.districts_updated == ["East RD", "West RD"]

    def test_entities_with_mvum_roads_untouched(self):
        existing = calculate_mvum_road_stats([MvumRoadRecord(SEG_LENGTH=1.0)])
        forest = _forest(mvum_roads=existing, districts=[("East RD", 50201)])
        forest.RANGER_DISTRICTS[0].MVUM_ROADS = existing.model_copy()

        updated, summary = fill_missing_mvum_stats([forest], NFS_ROADS)
        assert updated[0].MVUM_ROADS == existing
        assert updated[0].RANGER_DISTRICTS[0].MVUM_ROADS == existing
        assert summary.total_updated == 0

    def test_district_filled_even_when_forest_has_roads(self):
        existing = calculate_mvum_road_stats([MvumRoadRecord(SEG_LENGTH=1.0)])
        forest = _forest(mvum_roads=existing, districts=[("East RD", 50201)])
        updated, summary = fill_missing_mvum_stats([forest], NFS_ROADS)
        assert updated[0].MVUM_ROADS == existing
        assert updated[0].RANGER_DISTRICTS[0].MVUM_ROADS.TOTAL_MILEAGE == 6.0
        assert summary.forests_updated == []

    def test_input_not_mutated(self):
        forest = _forest()
        fill_missing_mvum_stats([forest], NFS_ROADS)
        assert forest.MVUM_ROADS.NUM_ROADS == 0

    def test_wrong_width_code_is_fatal(self):
        with pytest.raises(OrgCodeFormatError, match="Beta National Forest"):
            fill_missing_mvum_stats([_forest(code=5021)], NFS_ROADS)
