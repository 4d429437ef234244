"""Unit tests for route statistics aggregation.

Tests forest_routes/aggregator.py and the numeric helpers it relies on:
  - Lenient SEG_LENGTH parsing (bad values count as a record with 0 miles)
  - Half-up rounding at the 0.01 boundary
  - Independent bucket families (level, seasonal, vehicle class)
  - 3-decimal vehicle-class stage
  - District stat summation for the reconciler
"""

import pytest

from forest_routes.aggregator import (
    calculate_closed_road_stats,
    calculate_mvum_road_stats,
    calculate_mvum_trail_stats,
    calculate_vehicle_class_mileage,
    sum_closed_road_stats,
    sum_mvum_road_stats,
    sum_mvum_trail_stats,
)
from forest_routes.schemas.models import (
    ClosedRoadRecord,
    MvumRoadRecord,
    MvumRoadStats,
    MvumTrailRecord,
    NfsRoadRecord,
)
from forest_routes.utils import format_miles, round_mileage, safe_float

ML2 = "2 - HIGH CLEARANCE VEHICLES"
ML3 = "3 - SUITABLE FOR PASSENGER CARS"


# ============================================================================
# Numeric helpers
# ============================================================================


class TestSafeFloat:

    def test_numbers_and_numeric_strings(self):
        assert safe_float(1.25) == 1.25
        assert safe_float(3) == 3.0
        assert safe_float(" 0.4 ") == 0.4

    def test_unparseable_returns_default(self):
        assert safe_float("bad") == 0.0
        assert safe_float("") == 0.0
        assert safe_float(None) == 0.0
        assert safe_float("bad", default=-1.0) == -1.0

    def test_nan_inf_and_bool_return_default(self):
        assert safe_float("nan") == 0.0
        assert safe_float(float("inf")) == 0.0
        assert safe_float(True) == 0.0

    def test_negative_lengths_return_default(self):
        assert safe_float("-0.5") == 0.0
        assert safe_float(-2) == 0.0
        assert safe_float(-0.0) == 0.0

    def test_non_scalar_values_return_default(self):
        assert safe_float([1]) == 0.0
        assert safe_float({}) == 0.0
        assert safe_float({"miles": 1.0}) == 0.0
        assert safe_float(10 ** 400) == 0.0


class TestRoundMileage:

    def test_half_rounds_up_at_hundredths(self):
        assert round_mileage(3.005, 2) == 3.01
        assert round_mileage(2.675, 2) == 2.68

    def test_thousandths(self):
        assert round_mileage(1.2345, 3) == 1.235
        assert round_mileage(0.0005, 3) == 0.001

    def test_plain_values(self):
        assert round_mileage(10.0, 2) == 10.0
        assert round_mileage(0.0, 2) == 0.0

    def test_format_miles(self):
        assert format_miles(1234.5) == "1,234.50 mi"


# ============================================================================
# MVUM roads
# ============================================================================


class TestMvumRoadStats:

    def test_bad_length_and_empty_level(self):
        """1.005 + 2.0 + "bad" -> 3 roads, 3.01 miles, all in ML2."""
        records = [
            MvumRoadRecord(SEG_LENGTH=1.005, OPERATIONALMAINTLEVEL=ML2),
            MvumRoadRecord(SEG_LENGTH=2.0, OPERATIONALMAINTLEVEL=ML2),
            MvumRoadRecord(SEG_LENGTH="bad", OPERATIONALMAINTLEVEL=""),
        ]
        stats = calculate_mvum_road_stats(records)
        assert stats.NUM_ROADS == 3
        assert stats.TOTAL_MILEAGE == 3.01
        assert stats.MAINTENANCE_LEVELS.ML2 == 3.01
        assert stats.MAINTENANCE_LEVELS.NONE == 0.0

    def test_negative_length_counts_with_zero_miles(self):
        records = [
            MvumRoadRecord(SEG_LENGTH="-0.5", OPERATIONALMAINTLEVEL=""),
            MvumRoadRecord(SEG_LENGTH=1.5, OPERATIONALMAINTLEVEL=ML2),
        ]
        stats = calculate_mvum_road_stats(records)
        assert stats.NUM_ROADS == 2
        assert stats.TOTAL_MILEAGE == 1.5
        assert stats.MAINTENANCE_LEVELS.NONE == 0.0

    def test_non_scalar_and_bool_lengths_count_with_zero_miles(self):
        records = [
            MvumTrailRecord(SEG_LENGTH=[1]),
            MvumTrailRecord(SEG_LENGTH={}),
            MvumTrailRecord(SEG_LENGTH=True),
            MvumTrailRecord(SEG_LENGTH="2"),
        ]
        stats = calculate_mvum_trail_stats(records)
        assert stats.NUM_TRAILS == 4
        assert stats.TOTAL_MILEAGE == 2.0

    def test_empty_input_is_all_zero(self):
        stats = calculate_mvum_road_stats([])
        assert stats == MvumRoadStats()
        assert stats.NUM_ROADS == 0
        assert stats.MAINTENANCE_LEVELS.ML1 == 0.0

    def test_bucket_families_are_independent(self):
        records = [
            MvumRoadRecord(
                SEG_LENGTH="1.5",
                OPERATIONALMAINTLEVEL=ML3,
                SEASONAL="Seasonal",
                MVUM_SYMBOL_NAME="Roads open to all vehicles, seasonal",
            ),
            MvumRoadRecord(
                SEG_LENGTH=2.25,
                OPERATIONALMAINTLEVEL=ML2,
                SEASONAL="yearlong",
                MVUM_SYMBOL_NAME="Roads open to highway legal vehicles only, yearlong",
            ),
        ]
        stats = calculate_mvum_road_stats(records)
        assert stats.TOTAL_MILEAGE == 3.75
        assert stats.TOTAL_SEASONAL_MILEAGE == 1.5
        assert stats.MAINTENANCE_LEVELS.ML3 == 1.5
        assert stats.MAINTENANCE_LEVELS.ML2 == 2.25
        assert stats.ALL_VEHICLES_MILEAGE == 1.5
        assert stats.HIGHWAY_VEHICLES_ONLY_MILEAGE == 2.25

    def test_nfs_records_have_no_seasonal_or_vehicle_mileage(self):
        records = [NfsRoadRecord(SEG_LENGTH=4.0, OPER_MAINT_LEVEL=ML2, ADMIN_ORG="050101")]
        stats = calculate_mvum_road_stats(records)
        assert stats.NUM_ROADS == 1
        assert stats.MAINTENANCE_LEVELS.ML2 == 4.0
        assert stats.TOTAL_SEASONAL_MILEAGE == 0.0
        assert stats.ALL_VEHICLES_MILEAGE == 0.0

    def test_category_breakdown_sums_to_total(self):
        records = [
            MvumRoadRecord(SEG_LENGTH=0.33, OPERATIONALMAINTLEVEL=ML2),
            MvumRoadRecord(SEG_LENGTH=0.33, OPERATIONALMAINTLEVEL=ML3),
            MvumRoadRecord(SEG_LENGTH=0.34, OPERATIONALMAINTLEVEL=None),
        ]
        stats = calculate_mvum_road_stats(records)
        levels = stats.MAINTENANCE_LEVELS
        level_sum = levels.ML1 + levels.ML2 + levels.ML3 + levels.ML4 + levels.ML5 + levels.NONE
        assert level_sum == pytest.approx(stats.TOTAL_MILEAGE, abs=0.01)


# ============================================================================
# MVUM trails / closed roads
# ============================================================================


class TestMvumTrailStats:

    def test_trail_types_and_seasonal(self):
        records = [
            MvumTrailRecord(SEG_LENGTH=1.0, MVUM_SYMBOL_NAME="Trails open to all vehicles", SEASONAL="seasonal"),
            MvumTrailRecord(SEG_LENGTH=2.0, MVUM_SYMBOL_NAME='Trails open to vehicles 50" or less'),
            MvumTrailRecord(SEG_LENGTH=3.0, MVUM_SYMBOL_NAME="Trails open to motorcycles only"),
            MvumTrailRecord(SEG_LENGTH=0.5, MVUM_SYMBOL_NAME="Special Designation"),
            MvumTrailRecord(SEG_LENGTH=0.25),
        ]
        stats = calculate_mvum_trail_stats(records)
        assert stats.NUM_TRAILS == 5
        assert stats.TOTAL_MILEAGE == 6.75
        assert stats.TOTAL_SEASONAL_MILEAGE == 1.0
        assert stats.TRAIL_TYPE.FULL_SIZE == 1.0
        assert stats.TRAIL_TYPE.ATV == 2.0
        assert stats.TRAIL_TYPE.MOTORCYCLE == 3.0
        assert stats.TRAIL_TYPE.SPECIAL == 0.5
        assert stats.TRAIL_TYPE.OTHER == 0.25


class TestClosedRoadStats:

    def test_admin_conversion_and_levels(self):
        records = [
            ClosedRoadRecord(
                SEG_LENGTH=1.0, OPENFORUSETO="ADMIN",
                SYMBOL_NAME="Road, Not Maintained for Passenger Car",
                OPER_MAINT_LEVEL="D - DECOMMISSION",
            ),
            ClosedRoadRecord(SEG_LENGTH="2.5", OPER_MAINT_LEVEL="1 - BASIC CUSTODIAL CARE (CLOSED)"),
            ClosedRoadRecord(SEG_LENGTH=None),
        ]
        stats = calculate_closed_road_stats(records)
        assert stats.NUM_ROADS == 3
        assert stats.TOTAL_MILEAGE == 3.5
        assert stats.ADMIN_MILEAGE == 1.0
        assert stats.MILEAGE_SUITABLE_FOR_TRAIL_CONVERSION == 1.0
        assert stats.MAINTENANCE_LEVELS.DECOMMISSIONED == 1.0
        assert stats.MAINTENANCE_LEVELS.ML1 == 2.5
        assert stats.MAINTENANCE_LEVELS.NONE == 0.0


# ============================================================================
# Vehicle-class stage
# ============================================================================


class TestVehicleClassMileage:

    def test_three_decimal_rounding(self):
        records = [
            MvumRoadRecord(SEG_LENGTH=1.2345, MVUM_SYMBOL_NAME="Roads open to all vehicles"),
            MvumRoadRecord(SEG_LENGTH=0.0015, MVUM_SYMBOL_NAME="highway legal vehicles only"),
        ]
        mileage = calculate_vehicle_class_mileage(records)
        assert mileage.all_vehicles == 1.235
        assert mileage.highway_vehicles_only == 0.002

    def test_no_matches(self):
        mileage = calculate_vehicle_class_mileage([MvumRoadRecord(SEG_LENGTH=5.0)])
        assert mileage.all_vehicles == 0.0
        assert mileage.highway_vehicles_only == 0.0


# ============================================================================
# Summation
# ============================================================================


class TestSumStats:

    def test_sum_road_stats(self):
        a = calculate_mvum_road_stats([MvumRoadRecord(SEG_LENGTH=10.5, OPERATIONALMAINTLEVEL=ML2)])
        b = calculate_mvum_road_stats([MvumRoadRecord(SEG_LENGTH=20.3, OPERATIONALMAINTLEVEL=ML3)])
        total = sum_mvum_road_stats([a, b])
        assert total.NUM_ROADS == 2
        assert total.TOTAL_MILEAGE == pytest.approx(30.8)
        assert total.MAINTENANCE_LEVELS.ML2 == 10.5
        assert total.MAINTENANCE_LEVELS.ML3 == pytest.approx(20.3)

    def test_none_entries_skipped(self):
        a = calculate_mvum_trail_stats([MvumTrailRecord(SEG_LENGTH=1.0)])
        total = sum_mvum_trail_stats([None, a, None])
        assert total.NUM_TRAILS == 1
        assert total.TRAIL_TYPE.OTHER == 1.0

    def test_sum_of_nothing_is_zero(self):
        total = sum_closed_road_stats([])
        assert total.NUM_ROADS == 0
        assert total.MAINTENANCE_LEVELS.DECOMMISSIONED == 0.0

    def test_sum_rounds_to_two_decimals(self):
        a = MvumRoadStats(NUM_ROADS=1, TOTAL_MILEAGE=0.1234)
        b = MvumRoadStats(NUM_ROADS=1, TOTAL_MILEAGE=0.1111)
        assert sum_mvum_road_stats([a, b]).TOTAL_MILEAGE == 0.23
