"""Tests for configuration loading and path constants.

Tests forest_routes/config.py and forest_routes/paths.py:
  - Missing config file falls back to defaults
  - data_dir override resolution
  - Path constants anchored at the project root
"""

import json
import logging

import pytest

from forest_routes import paths
from forest_routes.config import (
    DISTRICT_ORG_CODE_WIDTH,
    FOREST_ORG_CODE_WIDTH,
    GRADE_THRESHOLDS,
    MILEAGE_DECIMALS,
    VEHICLE_CLASS_MILEAGE_DECIMALS,
    load_pipeline_config,
    resolve_data_dir,
)
from forest_routes.errors import InputFileError


class TestLoadPipelineConfig:

    def test_missing_file_returns_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="forest_routes.config"):
            assert load_pipeline_config(tmp_path / "missing.json") == {}
        assert "using defaults" in caplog.text

    def test_reads_object(self, tmp_path):
        path = tmp_path / "pipeline_config.json"
        path.write_text(json.dumps({"data_dir": "alt"}), encoding="utf-8")
        assert load_pipeline_config(path) == {"data_dir": "alt"}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "pipeline_config.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(InputFileError):
            load_pipeline_config(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "pipeline_config.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(InputFileError, match="JSON object"):
            load_pipeline_config(path)

    def test_shipped_config_declares_angeles_correction(self):
        config = load_pipeline_config()
        names = [row["forest_name"] for row in config["district_corrections"]]
        assert "Angeles National Forest" in names


class TestResolveDataDir:

    def test_default(self):
        assert resolve_data_dir({}) == paths.DATA_DIR

    def test_relative_override(self):
        assert resolve_data_dir({"data_dir": "alt/data"}) == paths.PROJECT_ROOT / "alt" / "data"

    def test_absolute_override(self, tmp_path):
        assert resolve_data_dir({"data_dir": str(tmp_path)}) == tmp_path


class TestConstants:

    def test_precisions(self):
        assert MILEAGE_DECIMALS == 2
        assert VEHICLE_CLASS_MILEAGE_DECIMALS == 3

    def test_org_code_widths(self):
        assert FOREST_ORG_CODE_WIDTH == 3
        assert DISTRICT_ORG_CODE_WIDTH == 5

    def test_grade_thresholds_descending(self):
        minimums = [minimum for minimum, _grade in GRADE_THRESHOLDS]
        assert minimums == sorted(minimums, reverse=True)


class TestPaths:

    def test_project_root(self):
        assert (paths.PROJECT_ROOT / "forest_routes" / "paths.py").is_file()

    def test_filenames_are_distinct_json(self):
        filenames = [
            paths.NATIONAL_FORESTS_FILENAME, paths.RANGER_DISTRICTS_FILENAME,
            paths.MVUM_ROADS_FILENAME, paths.MVUM_TRAILS_FILENAME,
            paths.CLOSED_ROADS_FILENAME, paths.NFS_ROADS_FILENAME,
            paths.FORESTS_WITH_DISTRICTS_FILENAME,
        ]
        assert len(set(filenames)) == len(filenames)
        assert all(name.endswith(".json") for name in filenames)

    def test_integrity_report_under_outputs(self):
        assert paths.INTEGRITY_REPORT_PATH.parent == paths.OUTPUTS_DIR

    def test_dataset_path(self, tmp_path):
        assert paths.dataset_path(tmp_path, paths.NFS_ROADS_FILENAME) == tmp_path / "nfs-roads.json"
