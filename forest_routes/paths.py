"""Centralized path constants for the forest route statistics pipeline.

Every file and directory path used by the pipeline is defined here as a
module-level constant. Stage modules and scripts import from this module
instead of constructing ad-hoc ``Path(...)`` literals.

Design rules:
  1. This module imports ONLY ``pathlib.Path`` -- no project imports, no
     config imports, no runtime validation.  This keeps it importable at any
     point without circular-import chains.
  2. Constants are grouped by purpose (config, source datasets, artifact,
     outputs).
  3. No path existence checks at import time.  Loaders report missing
     inputs; writers create directories as needed.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# -- Project Root --
# ---------------------------------------------------------------------------

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
"""Absolute path to the project root directory (one level above ``forest_routes/``)."""

# ---------------------------------------------------------------------------
# -- Config Paths --
# ---------------------------------------------------------------------------

CONFIG_DIR: Path = PROJECT_ROOT / "config"
"""Directory containing pipeline configuration files."""

PIPELINE_CONFIG_PATH: Path = CONFIG_DIR / "pipeline_config.json"
"""Pipeline configuration (data directory override, district corrections)."""

# ---------------------------------------------------------------------------
# -- Source Datasets --
# ---------------------------------------------------------------------------

DATA_DIR: Path = PROJECT_ROOT / "data"
"""Directory holding the GIS exports (as JSON record lists) and the artifact."""

NATIONAL_FORESTS_FILENAME: str = "national-forests.json"
"""National forest list (one row per forest, FORESTORGCODE + FORESTNAME)."""

RANGER_DISTRICTS_FILENAME: str = "ranger-districts.json"
"""Ranger district list (one row per district, DISTRICTORGCODE + FORESTNAME)."""

MVUM_ROADS_FILENAME: str = "mvum-roads.json"
"""Motor Vehicle Use Map road segments, keyed by forest/district name."""

MVUM_TRAILS_FILENAME: str = "mvum-trails.json"
"""Motor Vehicle Use Map trail segments, keyed by forest/district name."""

CLOSED_ROADS_FILENAME: str = "closed-roads.json"
"""Closed road segments, keyed by unpadded ADMIN_ORG code."""

NFS_ROADS_FILENAME: str = "nfs-roads.json"
"""Generic National Forest System road segments, keyed by zero-padded ADMIN_ORG."""

# ---------------------------------------------------------------------------
# -- Artifact Filename --
# ---------------------------------------------------------------------------

FORESTS_WITH_DISTRICTS_FILENAME: str = "forests-with-districts.json"
"""The shared artifact every stage reads and rewrites."""

# ---------------------------------------------------------------------------
# -- Output Paths --
# ---------------------------------------------------------------------------

OUTPUTS_DIR: Path = PROJECT_ROOT / "outputs"
"""Reports produced alongside the artifact (never read by the dashboard)."""

INTEGRITY_REPORT_PATH: Path = OUTPUTS_DIR / "integrity_report.json"
"""Machine-readable result of the last data-integrity validation."""

# ---------------------------------------------------------------------------
# -- Helper Functions --
# ---------------------------------------------------------------------------


def dataset_path(data_dir: Path, filename: str) -> Path:
    """Return the path of a dataset file inside a data directory (default DATA_DIR or --data-dir)."""
    return data_dir / filename
