"""Tests for the motorized access scorecard.

Tests forest_routes/scorecard.py:
  - Open percentage formula and zero-mileage case
  - Grade threshold boundaries
  - Scorecards attached to every forest and district
"""

import pytest

from forest_routes.schemas.models import (
    ClosedRoadStats,
    MvumRoadStats,
    MvumTrailStats,
    NationalForest,
    RangerDistrict,
    TrailType,
)
from forest_routes.scorecard import (
    add_scorecards,
    build_scorecard,
    compute_open_percentage,
    grade_for_percentage,
)


def _district(road_miles, full_size_miles, closed_miles, name="North RD", code=50101):
    return RangerDistrict(
        DISTRICTNAME=name,
        DISTRICTORGCODE=code,
        MVUM_ROADS=MvumRoadStats(NUM_ROADS=1, TOTAL_MILEAGE=road_miles),
        MVUM_TRAILS=MvumTrailStats(
            NUM_TRAILS=1,
            TOTAL_MILEAGE=full_size_miles + 5.0,
            TRAIL_TYPE=TrailType(FULL_SIZE=full_size_miles, MOTORCYCLE=5.0),
        ),
        CLOSED_ROADS=ClosedRoadStats(NUM_ROADS=1, TOTAL_MILEAGE=closed_miles),
    )


class TestComputeOpenPercentage:

    def test_formula(self):
        """40 road + 10 full-size trail vs 12.5 closed -> 80%."""
        assert compute_open_percentage(40.0, 10.0, 12.5) == 80.0

    def test_no_mileage_scores_zero(self):
        assert compute_open_percentage(0.0, 0.0, 0.0) == 0.0

    def test_all_closed(self):
        assert compute_open_percentage(0.0, 0.0, 3.0) == 0.0

    def test_all_open(self):
        assert compute_open_percentage(5.0, 0.0, 0.0) == 100.0

    def test_not_rounded(self):
        assert compute_open_percentage(1.0, 0.0, 2.0) == pytest.approx(33.3333333, rel=1e-6)


class TestGradeForPercentage:

    @pytest.mark.parametrize("percentage,grade", [
        (100.0, "A"),
        (80.0, "A"),
        (79.99, "B"),
        (70.0, "B"),
        (69.99, "C"),
        (60.0, "C"),
        (50.0, "D"),
        (49.99, "F"),
        (0.0, "F"),
    ])
    def test_boundaries(self, percentage, grade):
        assert grade_for_percentage(percentage) == grade


class TestScorecards:

    def test_build_scorecard_uses_full_size_trails_only(self):
        """Motorcycle trail miles do not count toward open mileage."""
        scorecard = build_scorecard(_district(40.0, 10.0, 12.5))
        assert scorecard.OPEN_ROADS_PERCENTAGE == 80.0
        assert scorecard.GRADE == "A"

    def test_empty_entity_grades_f(self):
        scorecard = build_scorecard(RangerDistrict(DISTRICTNAME="Empty RD", DISTRICTORGCODE=50199))
        assert scorecard.OPEN_ROADS_PERCENTAGE == 0.0
        assert scorecard.GRADE == "F"

    def test_every_forest_and_district_scored(self):
        forest = NationalForest(
            FORESTNAME="Alpha National Forest",
            FORESTORGCODE=501,
            MVUM_ROADS=MvumRoadStats(NUM_ROADS=2, TOTAL_MILEAGE=6.0),
            CLOSED_ROADS=ClosedRoadStats(NUM_ROADS=1, TOTAL_MILEAGE=4.0),
            RANGER_DISTRICTS=[
                _district(3.0, 0.0, 1.0),
                _district(3.0, 0.0, 3.0, name="South RD", code=50102),
            ],
        )
        updated = add_scorecards([forest])
        assert updated[0].SCORECARD.OPEN_ROADS_PERCENTAGE == 60.0
        assert updated[0].SCORECARD.GRADE == "C"
        assert [d.SCORECARD.GRADE for d in updated[0].RANGER_DISTRICTS] == ["B", "D"]
        assert forest.SCORECARD is None
