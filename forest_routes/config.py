"""Pipeline configuration for the forest route statistics pipeline.

Two layers:
    - Module constants: rounding precision, tolerances, grade thresholds and
      org-code widths.  Every call site imports the named constant so that
      differing precisions stay visible (road/trail/closed aggregates round to
      2 decimals, the standalone vehicle-class stage rounds to 3).
    - ``config/pipeline_config.json``: deployment settings read with
      ``.get()`` defaults (data directory override, district corrections).

Example config file:
    {
      "data_dir": "data",
      "district_corrections": [
        {"forest_name": "Angeles National Forest",
         "datasets": ["closed_roads", "nfs_roads"]}
      ]
    }
"""

import json
import logging
from pathlib import Path

from forest_routes.errors import InputFileError
from forest_routes.paths import DATA_DIR, PIPELINE_CONFIG_PATH, PROJECT_ROOT

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

MILEAGE_DECIMALS: int = 2
"""Decimal places for every aggregated mileage field."""

VEHICLE_CLASS_MILEAGE_DECIMALS: int = 3
"""Decimal places used by the standalone vehicle-class mileage stage."""

# ---------------------------------------------------------------------------
# Consistency tolerances
# ---------------------------------------------------------------------------

COUNT_TOLERANCE: int = 0
"""Allowed difference between a forest count and the sum of district counts."""

MILEAGE_TOLERANCE: float = 0.1
"""Allowed difference (miles) between a forest field and the district sum."""

LENIENT_COUNT_TOLERANCE: int = 10
"""Count tolerance below which a discrepancy is reported as minor."""

LENIENT_MILEAGE_TOLERANCE: float = 5.0
"""Mileage tolerance below which a discrepancy is reported as minor."""

CATEGORY_SUM_TOLERANCE: float = 0.01
"""Allowed difference between a category breakdown sum and its total."""

CHANGE_THRESHOLD: float = 0.01
"""Smallest difference the reconciler reports as a changed forest total."""

# ---------------------------------------------------------------------------
# Scorecard
# ---------------------------------------------------------------------------

GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (80.0, "A"),
    (70.0, "B"),
    (60.0, "C"),
    (50.0, "D"),
)
"""(minimum open percentage, grade) pairs, checked from the top down."""

FAILING_GRADE: str = "F"
"""Grade for any open percentage below the lowest threshold."""

# ---------------------------------------------------------------------------
# Org codes
# ---------------------------------------------------------------------------

ORG_CODE_PAD: str = "0"
"""Literal prefix that turns a forest/district org code into an NFS ADMIN_ORG."""

FOREST_ORG_CODE_WIDTH: int = 3
"""Digits in a forest org code (e.g. 501)."""

DISTRICT_ORG_CODE_WIDTH: int = 5
"""Digits in a district org code (e.g. 50101)."""

ORG_CODE_PREFIX_LENGTH: int = 3
"""Characters of a closed-road ADMIN_ORG compared against the forest org code."""


def load_pipeline_config(path: Path = PIPELINE_CONFIG_PATH) -> dict:
    """Load the pipeline configuration file.

    A missing file is not fatal: the pipeline runs with defaults and no
    district corrections.

    Raises:
        InputFileError: If the file exists but is not valid JSON.
    """
    try:
        with open(path, encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        logger.warning(
            "Pipeline config not found at %s -- using defaults "
            "(no district corrections)",
            path,
        )
        return {}
    except json.JSONDecodeError as exc:
        raise InputFileError(path, f"invalid JSON: {exc}") from exc

    if not isinstance(config, dict):
        raise InputFileError(path, "expected a JSON object at top level")
    logger.debug("Loaded pipeline config from %s", path)
    return config


def resolve_data_dir(config: dict) -> Path:
    """Return the data directory, honouring a ``data_dir`` override.

    Relative overrides are resolved against the project root.
    """
    raw = config.get("data_dir")
    if not raw:
        return DATA_DIR
    p = Path(raw)
    if not p.is_absolute():
        p = PROJECT_ROOT / p
    return p
