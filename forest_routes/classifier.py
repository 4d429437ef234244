"""Route record classification rules.

Pure, stateless functions mapping one raw field value to a category.  The
aggregator calls these for every record; nothing here reads or writes
entity state.

Matching policy differs by field and is kept exactly as the source data
requires:
  - Maintenance level: exact string match against the official
    descriptions.  Missing, empty and unrecognised values all fall back to
    NONE.
  - Trail type: substring match on the MVUM symbol name, first matching rule
    wins.
  - Vehicle class: case-insensitive substring match; the two classes are
    independent flags.
  - Seasonal: case-insensitive equality.  Admin and trail-conversion flags:
    exact equality.
"""

from typing import Optional

# Official operational maintenance level descriptions
MAINTENANCE_LEVELS: dict[str, str] = {
    "1 - BASIC CUSTODIAL CARE (CLOSED)": "ML1",
    "2 - HIGH CLEARANCE VEHICLES": "ML2",
    "3 - SUITABLE FOR PASSENGER CARS": "ML3",
    "4 - MODERATE DEGREE OF USER COMFORT": "ML4",
    "5 - HIGH DEGREE OF USER COMFORT": "ML5",
}

# Closed roads add the decommissioned level
CLOSED_ROAD_MAINTENANCE_LEVELS: dict[str, str] = {
    "D - DECOMMISSION": "DECOMMISSIONED",
    **MAINTENANCE_LEVELS,
}

UNKNOWN_MAINTENANCE_LEVEL = "NONE"

# (substrings, trail type) in priority order
TRAIL_TYPE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("Trails open to all vehicles",), "FULL_SIZE"),
    (('Trails open to vehicles 50" or less', 'Wheeled OHV <50"'), "ATV"),
    (("Trails open to motorcycles",), "MOTORCYCLE"),
    (("Special Designation",), "SPECIAL"),
)

DEFAULT_TRAIL_TYPE = "OTHER"

ALL_VEHICLES_PHRASE = "all vehicles"
HIGHWAY_VEHICLES_ONLY_PHRASE = "highway legal vehicles only"
SEASONAL_VALUE = "seasonal"
ADMIN_VALUE = "ADMIN"
TRAIL_CONVERSION_SYMBOL = "Road, Not Maintained for Passenger Car"


def classify_maintenance_level(value: Optional[str]) -> str:
    """Map an MVUM/NFS road maintenance level description to ML1-ML5 or NONE."""
    if not value:
        return UNKNOWN_MAINTENANCE_LEVEL
    return MAINTENANCE_LEVELS.get(value, UNKNOWN_MAINTENANCE_LEVEL)


def classify_closed_road_maintenance_level(value: Optional[str]) -> str:
    """Map a closed-road maintenance level to DECOMMISSIONED, ML1-ML5 or NONE."""
    if not value:
        return UNKNOWN_MAINTENANCE_LEVEL
    return CLOSED_ROAD_MAINTENANCE_LEVELS.get(value, UNKNOWN_MAINTENANCE_LEVEL)


def classify_trail_type(symbol_name: Optional[str]) -> str:
    """Map an MVUM trail symbol name to a trail type.

    Rules are evaluated in priority order and only the first match counts,
    so a symbol mentioning both "all vehicles" and "motorcycles" is
    FULL_SIZE.
    """
    name = symbol_name or ""
    for phrases, trail_type in TRAIL_TYPE_RULES:
        if any(phrase in name for phrase in phrases):
            return trail_type
    return DEFAULT_TRAIL_TYPE


def is_all_vehicles(symbol_name: Optional[str]) -> bool:
    """True when the MVUM symbol marks a road open to all vehicles."""
    return ALL_VEHICLES_PHRASE in (symbol_name or "").lower()


def is_highway_vehicles_only(symbol_name: Optional[str]) -> bool:
    """True when the MVUM symbol marks a road open to highway legal vehicles only."""
    return HIGHWAY_VEHICLES_ONLY_PHRASE in (symbol_name or "").lower()


def is_seasonal(value: Optional[str]) -> bool:
    return bool(value) and value.lower() == SEASONAL_VALUE


def is_admin_closed(open_for_use_to: Optional[str]) -> bool:
    return open_for_use_to == ADMIN_VALUE


def is_trail_conversion_suitable(symbol_name: Optional[str]) -> bool:
    return symbol_name == TRAIL_CONVERSION_SYMBOL
