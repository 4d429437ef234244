"""Forest / ranger district merge.

Builds the initial entity tree for forests-with-districts.json by attaching
each ranger district to the national forest with the same FORESTNAME.
Statistics are not computed here; every stats object starts all-zero.
"""

import logging
from collections import defaultdict
from typing import Iterable, Mapping

from pydantic import ValidationError

from forest_routes.errors import InputFileError
from forest_routes.paths import NATIONAL_FORESTS_FILENAME, RANGER_DISTRICTS_FILENAME
from forest_routes.schemas.models import NationalForest, RangerDistrict

logger = logging.getLogger(__name__)


def merge_forests_with_districts(
    forest_rows: Iterable[Mapping],
    district_rows: Iterable[Mapping],
) -> list[NationalForest]:
    """Group districts by forest name and nest them under their forest.

    Args:
        forest_rows: Rows of national-forests.json.
        district_rows: Rows of ranger-districts.json.

    Returns:
        One NationalForest per forest row, in input order.  Forests with no
        districts get an empty RANGER_DISTRICTS list.

    Raises:
        InputFileError: If a row is missing a required identity field.
    """
    districts_by_forest: dict[str, list[RangerDistrict]] = defaultdict(list)
    district_count = 0
    for i, row in enumerate(district_rows):
        try:
            district = RangerDistrict.model_validate(row)
        except ValidationError as exc:
            raise InputFileError(RANGER_DISTRICTS_FILENAME, f"row {i}: {exc}") from exc
        districts_by_forest[district.FORESTNAME].append(district)
        district_count += 1

    forests: list[NationalForest] = []
    for i, row in enumerate(forest_rows):
        data = dict(row)
        data["RANGER_DISTRICTS"] = list(districts_by_forest.get(data.get("FORESTNAME"), []))
        try:
            forests.append(NationalForest.model_validate(data))
        except ValidationError as exc:
            raise InputFileError(NATIONAL_FORESTS_FILENAME, f"row {i}: {exc}") from exc

    forest_names = {forest.FORESTNAME for forest in forests}
    for name in sorted(set(districts_by_forest) - forest_names, key=str):
        logger.warning(
            "%d ranger district(s) name forest %r, which is not in the forest list",
            len(districts_by_forest[name]), name,
        )

    with_districts = sum(1 for forest in forests if forest.has_districts)
    logger.info(
        "Merged %d national forests with %d ranger districts",
        len(forests), district_count,
    )
    logger.info("  %d forests have ranger districts", with_districts)
    logger.info("  %d forests have no ranger districts", len(forests) - with_districts)
    return forests
