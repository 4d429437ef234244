"""Record-to-entity matching strategies.

The four route datasets identify their managing unit in four incompatible
ways, so matching is a tagged variant selected per dataset rather than one
canonical join key:

  ============  =====================================================
  ByName        FORESTNAME (and DISTRICTNAME) equal the entity name.
                MVUM roads and MVUM trails.
  OrgCodePrefix First 3 chars of ADMIN_ORG, parsed as an integer, equal
                the forest org code.  Closed roads, forest level.
  OrgCodeExact  ADMIN_ORG equals str(district org code).  Closed roads,
                district level.
  PaddedOrgCode OPENFORUSETO == "ALL" and ADMIN_ORG starts with (forest)
                or equals (district) "0" + org code.  NFS roads, gap-fill
                and corrections only.
  ============  =====================================================

The padded convention only works because forest codes are 3 digits and
district codes are 5 digits.  PaddedOrgCode refuses any other width with
OrgCodeFormatError instead of silently matching nothing.

``RecordIndex`` buckets a dataset by each strategy's record key so an entity
only scans its own bucket; ``matches()`` is still applied to every candidate.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import ClassVar, Hashable, Iterable, Optional

from forest_routes.config import (
    DISTRICT_ORG_CODE_WIDTH,
    FOREST_ORG_CODE_WIDTH,
    ORG_CODE_PAD,
    ORG_CODE_PREFIX_LENGTH,
)
from forest_routes.errors import OrgCodeFormatError
from forest_routes.schemas.models import NationalForest, RangerDistrict

logger = logging.getLogger(__name__)

OPEN_TO_ALL = "ALL"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_leading_int(text: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a string ("501" -> 501, "05x" -> 5, "x" -> None)."""
    if not text:
        return None
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None


def pad_org_code(org_code: int) -> str:
    """Prefix an org code with the single literal pad used by NFS ADMIN_ORG codes."""
    return f"{ORG_CODE_PAD}{org_code}"


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ByName:
    """Exact, case-sensitive forest (and district) name match."""

    forest_name: str
    district_name: Optional[str] = None

    kind: ClassVar[str] = "by_name"
    index_name: ClassVar[str] = "forest_name"

    @property
    def key(self) -> Hashable:
        return self.forest_name

    @staticmethod
    def record_key(record) -> Hashable:
        return getattr(record, "FORESTNAME", None)

    def matches(self, record) -> bool:
        if getattr(record, "FORESTNAME", None) != self.forest_name:
            return False
        if self.district_name is None:
            return True
        return getattr(record, "DISTRICTNAME", None) == self.district_name


@dataclass(frozen=True)
class OrgCodePrefix:
    """Integer value of the first 3 ADMIN_ORG characters equals the forest code."""

    forest_org_code: int

    kind: ClassVar[str] = "org_code_prefix"
    index_name: ClassVar[str] = "admin_org_prefix_int"

    @property
    def key(self) -> Hashable:
        return self.forest_org_code

    @staticmethod
    def record_key(record) -> Hashable:
        admin_org = getattr(record, "ADMIN_ORG", None)
        if not admin_org:
            return None
        return parse_leading_int(admin_org[:ORG_CODE_PREFIX_LENGTH])

    def matches(self, record) -> bool:
        value = self.record_key(record)
        return value is not None and value == self.forest_org_code


@dataclass(frozen=True)
class OrgCodeExact:
    """ADMIN_ORG equals the district org code as an unpadded string."""

    district_org_code: int

    kind: ClassVar[str] = "org_code_exact"
    index_name: ClassVar[str] = "admin_org"

    @property
    def key(self) -> Hashable:
        return str(self.district_org_code)

    @staticmethod
    def record_key(record) -> Hashable:
        return getattr(record, "ADMIN_ORG", None) or None

    def matches(self, record) -> bool:
        admin_org = getattr(record, "ADMIN_ORG", None)
        return bool(admin_org) and admin_org == str(self.district_org_code)


@dataclass(frozen=True)
class PaddedOrgCode:
    """NFS road match on the zero-padded org code, open-to-all roads only.

    Forest level is a prefix match on "0" + forest code; district level is
    an exact match on "0" + district code.
    """

    org_code: int
    level: str = "forest"
    entity_name: Optional[str] = field(default=None, compare=False)

    kind: ClassVar[str] = "padded_org_code"

    def __post_init__(self) -> None:
        if self.level not in ("forest", "district"):
            raise ValueError(f"level must be 'forest' or 'district', got {self.level!r}")
        width = FOREST_ORG_CODE_WIDTH if self.level == "forest" else DISTRICT_ORG_CODE_WIDTH
        if self.org_code < 0 or len(str(self.org_code)) != width:
            raise OrgCodeFormatError(self.org_code, width, self.level, self.entity_name)

    @property
    def padded(self) -> str:
        return pad_org_code(self.org_code)

    @property
    def index_name(self) -> str:
        if self.level == "forest":
            return f"admin_org_head_{len(self.padded)}"
        return "admin_org"

    @property
    def key(self) -> Hashable:
        return self.padded

    def record_key(self, record) -> Hashable:
        admin_org = getattr(record, "ADMIN_ORG", None)
        if not admin_org:
            return None
        if self.level == "forest":
            return admin_org[:len(self.padded)]
        return admin_org

    def matches(self, record) -> bool:
        if getattr(record, "OPENFORUSETO", None) != OPEN_TO_ALL:
            return False
        admin_org = getattr(record, "ADMIN_ORG", None)
        if not admin_org:
            return False
        if self.level == "forest":
            return admin_org.startswith(self.padded)
        return admin_org == self.padded


MatchStrategy = ByName | OrgCodePrefix | OrgCodeExact | PaddedOrgCode


# ---------------------------------------------------------------------------
# Per-dataset strategy selection
# ---------------------------------------------------------------------------


def mvum_strategy_for_forest(forest: NationalForest) -> ByName:
    return ByName(forest.FORESTNAME)


def mvum_strategy_for_district(forest: NationalForest, district: RangerDistrict) -> ByName:
    return ByName(forest.FORESTNAME, district.DISTRICTNAME)


def closed_road_strategy_for_forest(forest: NationalForest) -> OrgCodePrefix:
    return OrgCodePrefix(forest.FORESTORGCODE)


def closed_road_strategy_for_district(district: RangerDistrict) -> OrgCodeExact:
    return OrgCodeExact(district.DISTRICTORGCODE)


def nfs_strategy_for_forest(forest: NationalForest) -> PaddedOrgCode:
    return PaddedOrgCode(forest.FORESTORGCODE, level="forest", entity_name=forest.FORESTNAME)


def nfs_strategy_for_district(district: RangerDistrict) -> PaddedOrgCode:
    return PaddedOrgCode(
        district.DISTRICTORGCODE, level="district", entity_name=district.DISTRICTNAME,
    )


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def select_records(records: Iterable, strategy: MatchStrategy) -> list:
    """Return the records the strategy assigns to its entity, in input order."""
    return [record for record in records if strategy.matches(record)]


class RecordIndex:
    """One dataset, bucketed lazily by each strategy's record key.

    Buckets are built the first time a strategy with a given ``index_name``
    asks for candidates, then reused for every other entity.

    Usage:
        index = RecordIndex(closed_roads)
        for forest in forests:
            matched = index.select(closed_road_strategy_for_forest(forest))
    """

    def __init__(self, records: Iterable) -> None:
        self.records: list = list(records)
        self._buckets: dict[str, dict[Hashable, list]] = {}

    def __len__(self) -> int:
        return len(self.records)

    def candidates(self, strategy: MatchStrategy) -> list:
        buckets = self._buckets.get(strategy.index_name)
        if buckets is None:
            buckets = defaultdict(list)
            for record in self.records:
                buckets[strategy.record_key(record)].append(record)
            self._buckets[strategy.index_name] = buckets
            logger.debug(
                "Indexed %d records into %d %s buckets",
                len(self.records), len(buckets), strategy.index_name,
            )
        return buckets.get(strategy.key, [])

    def select(self, strategy: MatchStrategy) -> list:
        return select_records(self.candidates(strategy), strategy)
