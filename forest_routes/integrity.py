"""Read-only integrity checks on the forests-with-districts artifact.

Two invariants are checked:
  1. Parent equals sum of children: for every forest with districts, each
     numeric field of MVUM_ROADS, MVUM_TRAILS and CLOSED_ROADS equals the sum
     over its districts (counts within ``count_tolerance``, mileages strictly
     within ``mileage_tolerance``).
  2. Category sums: maintenance-level and trail-type breakdowns add up to
     their TOTAL_MILEAGE within rounding.

Aggregation is checked twice, strict (0 roads / 0.1 mi) and lenient
(10 roads / 5 mi).  Forests failing only the strict check have minor
discrepancies; forests failing the lenient check have major issues.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence, Union

from forest_routes.config import (
    CATEGORY_SUM_TOLERANCE,
    COUNT_TOLERANCE,
    LENIENT_COUNT_TOLERANCE,
    LENIENT_MILEAGE_TOLERANCE,
    MILEAGE_TOLERANCE,
)
from forest_routes.schemas.models import (
    CLOSED_ROAD_MAINTENANCE_LEVEL_KEYS,
    MAINTENANCE_LEVEL_KEYS,
    TRAIL_TYPE_KEYS,
    NationalForest,
    RangerDistrict,
)

logger = logging.getLogger(__name__)

_FLOAT_EPSILON = 1e-9

# (stats attribute, label, count field, flat mileage fields, nested breakdown, breakdown keys)
_FAMILIES = (
    (
        "MVUM_ROADS", "MVUM Roads", "NUM_ROADS",
        ("TOTAL_MILEAGE", "TOTAL_SEASONAL_MILEAGE",
         "ALL_VEHICLES_MILEAGE", "HIGHWAY_VEHICLES_ONLY_MILEAGE"),
        "MAINTENANCE_LEVELS", MAINTENANCE_LEVEL_KEYS,
    ),
    (
        "MVUM_TRAILS", "MVUM Trails", "NUM_TRAILS",
        ("TOTAL_MILEAGE", "TOTAL_SEASONAL_MILEAGE"),
        "TRAIL_TYPE", TRAIL_TYPE_KEYS,
    ),
    (
        "CLOSED_ROADS", "Closed Roads", "NUM_ROADS",
        ("TOTAL_MILEAGE", "ADMIN_MILEAGE", "MILEAGE_SUITABLE_FOR_TRAIL_CONVERSION"),
        "MAINTENANCE_LEVELS", CLOSED_ROAD_MAINTENANCE_LEVEL_KEYS,
    ),
)


@dataclass
class AggregationResult:
    """Per-forest outcome of the parent-equals-sum-of-children check."""

    forest_name: str
    mvum_roads_valid: bool = True
    mvum_trails_valid: bool = True
    closed_roads_valid: bool = True
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.mvum_roads_valid and self.mvum_trails_valid and self.closed_roads_valid


def check_forest_aggregation(
    forest: NationalForest,
    count_tolerance: int = COUNT_TOLERANCE,
    mileage_tolerance: float = MILEAGE_TOLERANCE,
) -> AggregationResult:
    """Compare every forest stats field with the sum over its districts."""
    result = AggregationResult(forest.FORESTNAME)
    districts = forest.RANGER_DISTRICTS
    flags = {"MVUM_ROADS": True, "MVUM_TRAILS": True, "CLOSED_ROADS": True}

    for attr, label, count_field, mileage_fields, nested, keys in _FAMILIES:
        forest_stats = getattr(forest, attr)
        district_stats = [getattr(d, attr) for d in districts]

        district_count = sum(getattr(s, count_field) for s in district_stats)
        forest_count = getattr(forest_stats, count_field)
        if abs(district_count - forest_count) > count_tolerance:
            flags[attr] = False
            result.errors.append(
                f"{label}: {count_field} district sum={district_count}, forest={forest_count}"
            )

        pairs = [
            (name, sum(getattr(s, name) for s in district_stats), getattr(forest_stats, name))
            for name in mileage_fields
        ]
        pairs += [
            (f"{nested}.{key}",
             sum(getattr(getattr(s, nested), key) for s in district_stats),
             getattr(getattr(forest_stats, nested), key))
            for key in keys
        ]
        for name, district_sum, forest_value in pairs:
            if not abs(district_sum - forest_value) < mileage_tolerance:
                flags[attr] = False
                result.errors.append(
                    f"{label}: {name} district sum={district_sum:.2f} mi, "
                    f"forest={forest_value:.2f} mi"
                )

    result.mvum_roads_valid = flags["MVUM_ROADS"]
    result.mvum_trails_valid = flags["MVUM_TRAILS"]
    result.closed_roads_valid = flags["CLOSED_ROADS"]
    return result


def check_category_sums(entity: Union[NationalForest, RangerDistrict]) -> list[str]:
    """Return one error per breakdown whose categories do not sum to the total.

    Each category and the total are rounded independently, so the allowed
    gap grows by half a hundredth per rounded field, never below
    CATEGORY_SUM_TOLERANCE.
    """
    name = getattr(entity, "DISTRICTNAME", None) or entity.FORESTNAME
    errors = []
    for attr, label, _count, _fields, nested, keys in _FAMILIES:
        stats = getattr(entity, attr)
        breakdown = getattr(stats, nested)
        category_sum = sum(getattr(breakdown, key) for key in keys)
        tolerance = max(CATEGORY_SUM_TOLERANCE, 0.005 * (len(keys) + 1)) + _FLOAT_EPSILON
        if abs(category_sum - stats.TOTAL_MILEAGE) > tolerance:
            errors.append(
                f"{name}: {label} {nested} sum={category_sum:.2f} mi, "
                f"TOTAL_MILEAGE={stats.TOTAL_MILEAGE:.2f} mi"
            )
    return errors


@dataclass
class IntegrityReport:
    """Summary of an integrity run over the whole artifact."""

    total_forests: int = 0
    forests_without_districts: int = 0
    strict_valid: list[str] = field(default_factory=list)
    lenient_valid: list[str] = field(default_factory=list)
    strict_failures: list[AggregationResult] = field(default_factory=list)
    major_issues: list[AggregationResult] = field(default_factory=list)
    category_errors: list[str] = field(default_factory=list)

    @property
    def forests_with_districts(self) -> int:
        return self.total_forests - self.forests_without_districts

    @property
    def minor_discrepancies(self) -> int:
        return len(self.lenient_valid) - len(self.strict_valid)

    @property
    def passed(self) -> bool:
        return not self.strict_failures and not self.category_errors

    def to_dict(self) -> dict:
        return {
            "summary": {
                "total_forests": self.total_forests,
                "forests_with_districts": self.forests_with_districts,
                "forests_without_districts": self.forests_without_districts,
                "perfect_aggregation": len(self.strict_valid),
                "minor_discrepancies": self.minor_discrepancies,
                "major_issues": len(self.major_issues),
                "category_sum_errors": len(self.category_errors),
                "passed": self.passed,
            },
            "strict_failures": {r.forest_name: r.errors for r in self.strict_failures},
            "major_issues": {r.forest_name: r.errors for r in self.major_issues},
            "category_errors": list(self.category_errors),
        }


def build_integrity_report(forests: Sequence[NationalForest]) -> IntegrityReport:
    """Run both invariants over every forest and district."""
    report = IntegrityReport(total_forests=len(forests))

    for forest in forests:
        report.category_errors.extend(check_category_sums(forest))
        for district in forest.RANGER_DISTRICTS:
            report.category_errors.extend(check_category_sums(district))

        if not forest.has_districts:
            report.forests_without_districts += 1
            continue

        strict = check_forest_aggregation(forest, COUNT_TOLERANCE, MILEAGE_TOLERANCE)
        lenient = check_forest_aggregation(
            forest, LENIENT_COUNT_TOLERANCE, LENIENT_MILEAGE_TOLERANCE,
        )
        if strict.valid:
            report.strict_valid.append(forest.FORESTNAME)
        else:
            report.strict_failures.append(strict)
        if lenient.valid:
            report.lenient_valid.append(forest.FORESTNAME)
        else:
            report.major_issues.append(lenient)

    logger.info(
        "Integrity: %d/%d forests exact, %d minor, %d major, %d category-sum errors",
        len(report.strict_valid), report.forests_with_districts,
        report.minor_discrepancies, len(report.major_issues), len(report.category_errors),
    )
    return report
