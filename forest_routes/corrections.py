"""Manual district correction overlay.

Some forests share an org-code prefix with administrative units that are
not defined as ranger districts (Angeles National Forest, org code 501, is
the known case).  Prefix matching then pulls those units' roads into the
forest totals.  A correction restricts a forest's stats to records whose
ADMIN_ORG is on an allow-list, by default the forest's own district codes.

Corrections are declared in ``config/pipeline_config.json``:

    "district_corrections": [
        {"forest_name": "Angeles National Forest",
         "datasets": ["closed_roads", "nfs_roads"]}
    ]

Datasets:
  closed_roads  forest CLOSED_ROADS rebuilt from closed roads whose ADMIN_ORG
                equals an allowed code.
  nfs_roads     forest MVUM_ROADS rebuilt from NFS roads open to all whose
                ADMIN_ORG equals "0" + an allowed code.

Records that carry the forest prefix but fall outside the allow-list are
orphans.  They are excluded from the stats and reported per ADMIN_ORG.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from forest_routes.aggregator import calculate_closed_road_stats, calculate_mvum_road_stats
from forest_routes.config import MILEAGE_DECIMALS
from forest_routes.errors import EntityNotFoundError, PipelineError
from forest_routes.matching import (
    OPEN_TO_ALL,
    OrgCodeExact,
    PaddedOrgCode,
    pad_org_code,
    parse_leading_int,
)
from forest_routes.schemas.models import ClosedRoadRecord, NationalForest, NfsRoadRecord
from forest_routes.utils import format_miles, round_mileage

logger = logging.getLogger(__name__)

CLOSED_ROADS_DATASET = "closed_roads"
NFS_ROADS_DATASET = "nfs_roads"
CORRECTION_DATASETS = frozenset({CLOSED_ROADS_DATASET, NFS_ROADS_DATASET})


class DistrictCorrection(BaseModel):
    """One row of the declarative correction table."""

    forest_name: str = Field(..., description="Exact FORESTNAME to correct", examples=["Angeles National Forest"])
    datasets: list[str] = Field(
        ...,
        min_length=1,
        description="Datasets whose forest stats are rebuilt from the allow-list",
        examples=[["closed_roads", "nfs_roads"]],
    )
    allowed_codes: Optional[list[int]] = Field(
        default=None,
        description="District org codes to keep; defaults to the forest's defined districts",
        examples=[[50101, 50102]],
    )

    @field_validator("datasets")
    @classmethod
    def validate_datasets(cls, v: list[str]) -> list[str]:
        unknown = sorted(set(v) - CORRECTION_DATASETS)
        if unknown:
            raise ValueError(
                f"Unknown correction dataset(s) {unknown}. "
                f"Must be one of: {sorted(CORRECTION_DATASETS)}"
            )
        return v


@dataclass(frozen=True)
class OrphanGroup:
    """Records sharing a corrected forest's prefix but no allowed district."""

    forest_name: str
    dataset: str
    admin_org: str
    count: int
    mileage: float


def load_corrections(config: dict) -> list[DistrictCorrection]:
    """Parse ``district_corrections`` from the pipeline config.

    Raises:
        PipelineError: If an entry does not match the correction schema.
    """
    rows = config.get("district_corrections", [])
    corrections = []
    for i, row in enumerate(rows):
        try:
            corrections.append(DistrictCorrection.model_validate(row))
        except ValidationError as exc:
            raise PipelineError(f"district_corrections[{i}] is invalid: {exc}") from exc
    logger.debug("Loaded %d district corrections", len(corrections))
    return corrections


def _org_sort_key(admin_org: str):
    number = parse_leading_int(admin_org)
    return (number is None, number or 0, admin_org)


def _collect_orphans(
    forest_name: str,
    dataset: str,
    records: Iterable,
) -> list[OrphanGroup]:
    by_org: dict[str, list] = defaultdict(list)
    for record in records:
        by_org[record.ADMIN_ORG].append(record)

    groups = []
    for admin_org in sorted(by_org, key=_org_sort_key):
        members = by_org[admin_org]
        mileage = round_mileage(sum(r.segment_length for r in members), MILEAGE_DECIMALS)
        groups.append(OrphanGroup(forest_name, dataset, admin_org, len(members), mileage))
        logger.warning(
            "%s %s: ADMIN_ORG %s has %d roads, %s not included in forest stats",
            forest_name, dataset, admin_org, len(members), format_miles(mileage),
        )
    return groups


def _correct_closed_roads(
    forest: NationalForest,
    codes: Sequence[int],
    closed_roads: Sequence[ClosedRoadRecord],
) -> list[OrphanGroup]:
    strategies = [OrgCodeExact(code) for code in codes]
    allowed = {strategy.key for strategy in strategies}
    prefix = str(forest.FORESTORGCODE)

    kept = []
    orphans = []
    for road in closed_roads:
        if not road.ADMIN_ORG:
            continue
        if road.ADMIN_ORG in allowed:
            kept.append(road)
        elif road.ADMIN_ORG.startswith(prefix):
            orphans.append(road)

    old = forest.CLOSED_ROADS
    forest.CLOSED_ROADS = calculate_closed_road_stats(kept)
    logger.info(
        "%s closed roads: %d roads, %s -> %d roads, %s (allowed codes: %s)",
        forest.FORESTNAME, old.NUM_ROADS, format_miles(old.TOTAL_MILEAGE),
        forest.CLOSED_ROADS.NUM_ROADS, format_miles(forest.CLOSED_ROADS.TOTAL_MILEAGE),
        ", ".join(sorted(allowed)),
    )
    return _collect_orphans(forest.FORESTNAME, CLOSED_ROADS_DATASET, orphans)


def _correct_nfs_roads(
    forest: NationalForest,
    codes: Sequence[int],
    nfs_roads: Sequence[NfsRoadRecord],
) -> list[OrphanGroup]:
    strategies = [
        PaddedOrgCode(code, level="district", entity_name=forest.FORESTNAME)
        for code in codes
    ]
    allowed = {strategy.padded for strategy in strategies}
    prefix = pad_org_code(forest.FORESTORGCODE)

    kept = []
    orphans = []
    for road in nfs_roads:
        if road.OPENFORUSETO != OPEN_TO_ALL or not road.ADMIN_ORG:
            continue
        if road.ADMIN_ORG in allowed:
            kept.append(road)
        elif road.ADMIN_ORG.startswith(prefix):
            orphans.append(road)

    old = forest.MVUM_ROADS
    forest.MVUM_ROADS = calculate_mvum_road_stats(kept)
    logger.info(
        "%s NFS roads: %d roads, %s -> %d roads, %s (allowed ADMIN_ORG: %s)",
        forest.FORESTNAME, old.NUM_ROADS, format_miles(old.TOTAL_MILEAGE),
        forest.MVUM_ROADS.NUM_ROADS, format_miles(forest.MVUM_ROADS.TOTAL_MILEAGE),
        ", ".join(sorted(allowed)),
    )
    return _collect_orphans(forest.FORESTNAME, NFS_ROADS_DATASET, orphans)


def apply_district_corrections(
    forests: Sequence[NationalForest],
    corrections: Sequence[DistrictCorrection],
    closed_roads: Optional[Sequence[ClosedRoadRecord]] = None,
    nfs_roads: Optional[Sequence[NfsRoadRecord]] = None,
) -> tuple[list[NationalForest], list[OrphanGroup]]:
    """Rebuild the forest-level stats named by each correction.

    Every correction target is resolved before anything is changed, so a
    missing forest aborts the stage with the input untouched.

    Args:
        forests: Current entity tree (not mutated).
        corrections: Declarative correction table.
        closed_roads: Rows of closed-roads.json; required when any
            correction lists ``closed_roads``.
        nfs_roads: Rows of nfs-roads.json; required when any correction
            lists ``nfs_roads``.

    Returns:
        (new forest list, orphan groups across all corrections)

    Raises:
        EntityNotFoundError: If a correction names a forest not in ``forests``.
        PipelineError: If a required dataset was not supplied.
        OrgCodeFormatError: If an allowed NFS code is not 5 digits.
    """
    updated = [forest.model_copy(deep=True) for forest in forests]
    by_name = {forest.FORESTNAME: forest for forest in updated}

    for correction in corrections:
        if correction.forest_name not in by_name:
            raise EntityNotFoundError(correction.forest_name, "district correction target")
        if CLOSED_ROADS_DATASET in correction.datasets and closed_roads is None:
            raise PipelineError(
                f"Correction for {correction.forest_name!r} needs closed roads records"
            )
        if NFS_ROADS_DATASET in correction.datasets and nfs_roads is None:
            raise PipelineError(
                f"Correction for {correction.forest_name!r} needs NFS roads records"
            )

    orphans: list[OrphanGroup] = []
    for correction in corrections:
        forest = by_name[correction.forest_name]
        codes = correction.allowed_codes
        if codes is None:
            codes = [district.DISTRICTORGCODE for district in forest.RANGER_DISTRICTS]

        if CLOSED_ROADS_DATASET in correction.datasets:
            orphans.extend(_correct_closed_roads(forest, codes, closed_roads))
        if NFS_ROADS_DATASET in correction.datasets:
            orphans.extend(_correct_nfs_roads(forest, codes, nfs_roads))

    logger.info(
        "Applied %d district corrections, %d orphaned ADMIN_ORG groups excluded",
        len(corrections), len(orphans),
    )
    return updated, orphans
