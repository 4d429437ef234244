"""Pydantic v2 validation models for the forest route statistics pipeline.

Each model maps directly to a JSON data file or nested structure used in
the pipeline.  Field names are the uppercase, underscore-separated names
the dashboard reads from ``forests-with-districts.json``; they are part of
the wire format and must not be renamed.

Data sources modeled:
- mvum-roads.json -> MvumRoadRecord
- mvum-trails.json -> MvumTrailRecord
- closed-roads.json -> ClosedRoadRecord
- nfs-roads.json -> NfsRoadRecord
- national-forests.json / ranger-districts.json -> NationalForest, RangerDistrict
- forests-with-districts.json -> NationalForest (with nested stats)
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from forest_routes.utils import safe_float


# ── Category vocabularies ──

MAINTENANCE_LEVEL_KEYS = ("ML1", "ML2", "ML3", "ML4", "ML5", "NONE")

CLOSED_ROAD_MAINTENANCE_LEVEL_KEYS = (
    "DECOMMISSIONED", "ML1", "ML2", "ML3", "ML4", "ML5", "NONE",
)

TRAIL_TYPE_KEYS = ("FULL_SIZE", "ATV", "MOTORCYCLE", "SPECIAL", "OTHER")

GRADES = frozenset({"A", "B", "C", "D", "F"})


# ── Raw route records (GIS exports) ──

class _RouteRecord(BaseModel):
    """Common base for one raw GIS route segment.

    Records are immutable.  Every field is optional because the exports are
    sparse; unknown columns are kept so nothing is lost on ingestion.
    """

    SEG_LENGTH: Any = Field(
        default=None,
        description="Segment length in miles, kept raw; parsed leniently by segment_length",
        examples=["1.25", 0.4],
    )

    model_config = {"extra": "allow", "frozen": True}

    @property
    def segment_length(self) -> float:
        """Parsed segment length, 0.0 when missing or unparseable."""
        return safe_float(self.SEG_LENGTH)

    @property
    def maintenance_level(self) -> Optional[str]:
        return None

    @property
    def seasonal(self) -> Optional[str]:
        return None

    @property
    def symbol_name(self) -> Optional[str]:
        return None


class _NamedRouteRecord(_RouteRecord):
    """Route record keyed by forest and district name (MVUM datasets)."""

    FORESTNAME: Optional[str] = Field(default=None, description="Managing forest name")
    DISTRICTNAME: Optional[str] = Field(default=None, description="Managing district name")
    SEASONAL: Optional[str] = Field(
        default=None,
        description="Seasonal designation",
        examples=["seasonal", "yearlong"],
    )
    MVUM_SYMBOL_NAME: Optional[str] = Field(
        default=None,
        description="MVUM map symbol (vehicle class / trail type)",
        examples=["Roads open to all vehicles, yearlong"],
    )

    @property
    def seasonal(self) -> Optional[str]:
        return self.SEASONAL

    @property
    def symbol_name(self) -> Optional[str]:
        return self.MVUM_SYMBOL_NAME


class MvumRoadRecord(_NamedRouteRecord):
    """One segment from the MVUM roads export."""

    OPERATIONALMAINTLEVEL: Optional[str] = Field(
        default=None,
        description="Operational maintenance level description",
        examples=["2 - HIGH CLEARANCE VEHICLES"],
    )

    @property
    def maintenance_level(self) -> Optional[str]:
        return self.OPERATIONALMAINTLEVEL


class MvumTrailRecord(_NamedRouteRecord):
    """One segment from the MVUM trails export."""


class _OrgCodedRouteRecord(_RouteRecord):
    """Route record keyed by an administrative-organization code."""

    ADMIN_ORG: Optional[str] = Field(
        default=None,
        description="Administrative org code (format varies by dataset)",
        examples=["50101", "050101"],
    )
    OPENFORUSETO: Optional[str] = Field(
        default=None,
        description="Who the road is open to",
        examples=["ALL", "ADMIN"],
    )
    OPER_MAINT_LEVEL: Optional[str] = Field(
        default=None,
        description="Operational maintenance level description",
        examples=["D - DECOMMISSION"],
    )

    @field_validator("ADMIN_ORG", mode="before")
    @classmethod
    def coerce_admin_org(cls, v):
        """Accept numeric org codes; compare everything as strings."""
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @property
    def maintenance_level(self) -> Optional[str]:
        return self.OPER_MAINT_LEVEL


class ClosedRoadRecord(_OrgCodedRouteRecord):
    """One segment from the closed roads export."""

    SYMBOL_NAME: Optional[str] = Field(
        default=None,
        description="Road symbol name",
        examples=["Road, Not Maintained for Passenger Car"],
    )

    @property
    def symbol_name(self) -> Optional[str]:
        return self.SYMBOL_NAME


class NfsRoadRecord(_OrgCodedRouteRecord):
    """One segment from the generic NFS roads export.

    The export carries no seasonal flag and no MVUM symbol, so aggregates
    built from it leave seasonal and vehicle-class mileage at zero.
    """


# ── Category statistics ──

class MaintenanceLevels(BaseModel):
    """Mileage split by operational maintenance level."""

    ML1: float = Field(default=0.0, ge=0.0, description="Basic custodial care (closed)")
    ML2: float = Field(default=0.0, ge=0.0, description="High clearance vehicles")
    ML3: float = Field(default=0.0, ge=0.0, description="Suitable for passenger cars")
    ML4: float = Field(default=0.0, ge=0.0, description="Moderate degree of user comfort")
    ML5: float = Field(default=0.0, ge=0.0, description="High degree of user comfort")
    NONE: float = Field(default=0.0, ge=0.0, description="Missing or unrecognised level")


class ClosedRoadMaintenanceLevels(MaintenanceLevels):
    """Closed-road maintenance levels, which add a decommissioned bucket."""

    DECOMMISSIONED: float = Field(default=0.0, ge=0.0, description="Decommissioned")


class TrailType(BaseModel):
    """Trail mileage split by permitted vehicle type."""

    FULL_SIZE: float = Field(default=0.0, ge=0.0, description="Open to all vehicles")
    ATV: float = Field(default=0.0, ge=0.0, description='Vehicles 50" or less')
    MOTORCYCLE: float = Field(default=0.0, ge=0.0, description="Motorcycles only")
    SPECIAL: float = Field(default=0.0, ge=0.0, description="Special designation")
    OTHER: float = Field(default=0.0, ge=0.0, description="Any other symbol")


class MvumRoadStats(BaseModel):
    """Aggregated MVUM road statistics for one forest or district.

    A zero NUM_ROADS is the trigger for NFS gap-filling.
    """

    NUM_ROADS: int = Field(default=0, ge=0, description="Number of road segments")
    TOTAL_MILEAGE: float = Field(default=0.0, ge=0.0, description="Total miles")
    TOTAL_SEASONAL_MILEAGE: float = Field(
        default=0.0, ge=0.0, description="Miles with a seasonal designation",
    )
    MAINTENANCE_LEVELS: MaintenanceLevels = Field(default_factory=MaintenanceLevels)
    ALL_VEHICLES_MILEAGE: float = Field(
        default=0.0, ge=0.0, description="Miles on roads open to all vehicles",
    )
    HIGHWAY_VEHICLES_ONLY_MILEAGE: float = Field(
        default=0.0, ge=0.0, description="Miles on roads open to highway legal vehicles only",
    )


class MvumTrailStats(BaseModel):
    """Aggregated MVUM trail statistics for one forest or district."""

    NUM_TRAILS: int = Field(default=0, ge=0, description="Number of trail segments")
    TOTAL_MILEAGE: float = Field(default=0.0, ge=0.0, description="Total miles")
    TOTAL_SEASONAL_MILEAGE: float = Field(
        default=0.0, ge=0.0, description="Miles with a seasonal designation",
    )
    TRAIL_TYPE: TrailType = Field(default_factory=TrailType)


class ClosedRoadStats(BaseModel):
    """Aggregated closed road statistics for one forest or district."""

    NUM_ROADS: int = Field(default=0, ge=0, description="Number of closed segments")
    TOTAL_MILEAGE: float = Field(default=0.0, ge=0.0, description="Total miles")
    ADMIN_MILEAGE: float = Field(
        default=0.0, ge=0.0, description="Miles open for administrative use only",
    )
    MILEAGE_SUITABLE_FOR_TRAIL_CONVERSION: float = Field(
        default=0.0, ge=0.0, description="Miles not maintained for passenger cars",
    )
    MAINTENANCE_LEVELS: ClosedRoadMaintenanceLevels = Field(
        default_factory=ClosedRoadMaintenanceLevels,
    )


class Scorecard(BaseModel):
    """Motorized access grade derived from reconciled mileages."""

    OPEN_ROADS_PERCENTAGE: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Open road + full-size trail miles as a share of all miles",
        examples=[80.0],
    )
    GRADE: str = Field(..., description="Letter grade", examples=["A", "F"])

    @field_validator("GRADE")
    @classmethod
    def validate_grade(cls, v: str) -> str:
        if v not in GRADES:
            raise ValueError(f"Invalid grade '{v}'. Must be one of: {sorted(GRADES)}")
        return v


# ── Entities ──

class RangerDistrict(BaseModel):
    """A ranger district, owned by exactly one national forest.

    Identity columns come from ranger-districts.json; statistics are filled
    in by later stages.  Missing stats objects default to all-zero.
    """

    DISTRICTNAME: str = Field(..., description="District name", examples=["Santa Clara/Mojave Rivers Ranger District"])
    DISTRICTORGCODE: int = Field(..., description="District org code", examples=[50101])
    RANGERDISTRICTID: Optional[int] = Field(default=None)
    REGION: Optional[int] = Field(default=None)
    FORESTNUMBER: Optional[int] = Field(default=None)
    FORESTNAME: Optional[str] = Field(default=None, description="Parent forest name")
    DISTRICTNUMBER: Optional[int] = Field(default=None)
    OBJECTID: Optional[int] = Field(default=None)
    MVUM_ROADS: MvumRoadStats = Field(default_factory=MvumRoadStats)
    MVUM_TRAILS: MvumTrailStats = Field(default_factory=MvumTrailStats)
    CLOSED_ROADS: ClosedRoadStats = Field(default_factory=ClosedRoadStats)
    SCORECARD: Optional[Scorecard] = Field(default=None)

    model_config = {"extra": "allow"}

    @field_validator("MVUM_ROADS", "MVUM_TRAILS", "CLOSED_ROADS", mode="before")
    @classmethod
    def null_stats_to_zero(cls, v):
        """Upstream files may carry ``null`` for a stats object."""
        return {} if v is None else v


class NationalForest(BaseModel):
    """A national forest with forest-level stats and its ranger districts.

    Maps to one entry of forests-with-districts.json.
    """

    FORESTNAME: str = Field(..., description="Forest name", examples=["Angeles National Forest"])
    FORESTORGCODE: int = Field(..., description="Forest org code", examples=[501])
    OBJECTID: Optional[int] = Field(default=None)
    ADMINFORESTID: Optional[int] = Field(default=None)
    REGION: Optional[int] = Field(default=None)
    FORESTNUMBER: Optional[int] = Field(default=None)
    GIS_ACRES: Optional[float] = Field(default=None, ge=0.0, description="Forest area in acres")
    STATE: Optional[str] = Field(default=None, description="State abbreviation", examples=["CA"])
    RANGER_DISTRICTS: list[RangerDistrict] = Field(default_factory=list)
    MVUM_ROADS: MvumRoadStats = Field(default_factory=MvumRoadStats)
    MVUM_TRAILS: MvumTrailStats = Field(default_factory=MvumTrailStats)
    CLOSED_ROADS: ClosedRoadStats = Field(default_factory=ClosedRoadStats)
    SCORECARD: Optional[Scorecard] = Field(default=None)

    model_config = {"extra": "allow"}

    @field_validator("MVUM_ROADS", "MVUM_TRAILS", "CLOSED_ROADS", mode="before")
    @classmethod
    def null_stats_to_zero(cls, v):
        return {} if v is None else v

    @field_validator("RANGER_DISTRICTS", mode="before")
    @classmethod
    def null_districts_to_empty(cls, v):
        return [] if v is None else v

    @property
    def has_districts(self) -> bool:
        return len(self.RANGER_DISTRICTS) > 0
