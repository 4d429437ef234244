"""Motorized access scorecard.

Grades each forest and district by the share of its mileage that is open to
full-size vehicles:

    open % = 100 * (MVUM road miles + full-size trail miles)
                 / (MVUM road miles + full-size trail miles + closed road miles)

An entity with no mileage at all scores 0 (grade F).  The percentage is
stored unrounded; the dashboard formats it for display.
"""

import logging
from typing import Sequence, Union

from forest_routes.config import FAILING_GRADE, GRADE_THRESHOLDS
from forest_routes.schemas.models import NationalForest, RangerDistrict, Scorecard

logger = logging.getLogger(__name__)


def compute_open_percentage(
    mvum_road_miles: float,
    full_size_trail_miles: float,
    closed_road_miles: float,
) -> float:
    """Percentage of mileage open to full-size vehicles (0 when there is none)."""
    open_miles = mvum_road_miles + full_size_trail_miles
    total = open_miles + closed_road_miles
    if total <= 0:
        return 0.0
    return min(100.0, 100.0 * open_miles / total)


def grade_for_percentage(percentage: float) -> str:
    """Letter grade: >=80 A, >=70 B, >=60 C, >=50 D, otherwise F."""
    for minimum, grade in GRADE_THRESHOLDS:
        if percentage >= minimum:
            return grade
    return FAILING_GRADE


def build_scorecard(entity: Union[NationalForest, RangerDistrict]) -> Scorecard:
    """Score one forest or district from its own (not its children's) stats."""
    percentage = compute_open_percentage(
        entity.MVUM_ROADS.TOTAL_MILEAGE,
        entity.MVUM_TRAILS.TRAIL_TYPE.FULL_SIZE,
        entity.CLOSED_ROADS.TOTAL_MILEAGE,
    )
    return Scorecard(OPEN_ROADS_PERCENTAGE=percentage, GRADE=grade_for_percentage(percentage))


def add_scorecards(forests: Sequence[NationalForest]) -> list[NationalForest]:
    """Attach a SCORECARD to every forest and ranger district."""
    updated = [forest.model_copy(deep=True) for forest in forests]
    grade_counts: dict[str, int] = {}

    for forest in updated:
        forest.SCORECARD = build_scorecard(forest)
        grade_counts[forest.SCORECARD.GRADE] = grade_counts.get(forest.SCORECARD.GRADE, 0) + 1
        for district in forest.RANGER_DISTRICTS:
            district.SCORECARD = build_scorecard(district)

    logger.info(
        "Scored %d forests: %s",
        len(updated),
        ", ".join(f"{grade}={grade_counts[grade]}" for grade in sorted(grade_counts)),
    )
    return updated
