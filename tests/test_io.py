"""Tests for shared JSON I/O.

Tests forest_routes/_io_common.py:
  - Record loading with per-row validation errors
  - Artifact round trip in the dashboard wire format
  - Atomic writes and the path traversal guard
"""

import json
from pathlib import Path

import pytest

from forest_routes._io_common import (
    atomic_write_json,
    dump_forests,
    load_forests,
    load_json_list,
    load_json_records,
    save_forests,
)
from forest_routes.errors import InputFileError
from forest_routes.schemas.models import (
    MvumRoadRecord,
    MvumRoadStats,
    NationalForest,
    RangerDistrict,
)


def _write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ============================================================================
# Readers
# ============================================================================


class TestLoadJsonRecords:

    def test_rows_validated_in_order(self, tmp_path):
        path = _write_json(tmp_path / "mvum-roads.json", [
            {"FORESTNAME": "Alpha National Forest", "SEG_LENGTH": "1.5", "OBJECTID": 7},
            {"FORESTNAME": "Alpha National Forest", "SEG_LENGTH": 2},
        ])
        records = load_json_records(path, MvumRoadRecord)
        assert [r.segment_length for r in records] == [1.5, 2.0]
        assert records[0].model_dump()["OBJECTID"] == 7

    def test_malformed_lengths_do_not_reject_file(self, tmp_path):
        path = _write_json(tmp_path / "mvum-roads.json", [
            {"SEG_LENGTH": [1]},
            {"SEG_LENGTH": {"value": 3}},
            {"SEG_LENGTH": True},
            {"SEG_LENGTH": "-1"},
            {"SEG_LENGTH": "1"},
        ])
        records = load_json_records(path, MvumRoadRecord)
        assert [r.segment_length for r in records] == [0.0, 0.0, 0.0, 0.0, 1.0]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileError, match="file not found"):
            load_json_records(tmp_path / "nope.json", MvumRoadRecord)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(InputFileError, match="invalid JSON"):
            load_json_list(path)

    def test_top_level_must_be_list(self, tmp_path):
        path = _write_json(tmp_path / "obj.json", {"features": []})
        with pytest.raises(InputFileError, match="expected a JSON list, got dict"):
            load_json_list(path)

    def test_invalid_row_named(self, tmp_path):
        path = _write_json(tmp_path / "mvum-roads.json", [{"SEG_LENGTH": 1.0}, "not an object"])
        with pytest.raises(InputFileError, match="row 1 is not a valid MvumRoadRecord"):
            load_json_records(path, MvumRoadRecord)


# ============================================================================
# Artifact
# ============================================================================


class TestForestArtifact:

    def _forest(self):
        return NationalForest(
            FORESTNAME="Alpha National Forest",
            FORESTORGCODE=501,
            MVUM_ROADS=MvumRoadStats(NUM_ROADS=1, TOTAL_MILEAGE=2.0),
            RANGER_DISTRICTS=[RangerDistrict(DISTRICTNAME="North RD", DISTRICTORGCODE=50101)],
        )

    def test_dump_omits_unset_optionals(self):
        data = dump_forests([self._forest()])[0]
        assert "SCORECARD" not in data
        assert "GIS_ACRES" not in data
        assert data["MVUM_ROADS"]["MAINTENANCE_LEVELS"]["NONE"] == 0.0
        assert data["RANGER_DISTRICTS"][0]["CLOSED_ROADS"]["NUM_ROADS"] == 0

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "forests-with-districts.json"
        save_forests(path, [self._forest()])
        loaded = load_forests(path)
        assert loaded[0].model_dump() == self._forest().model_dump()

    def test_null_stats_load_as_zero(self, tmp_path):
        path = _write_json(tmp_path / "forests-with-districts.json", [
            {"FORESTNAME": "Gamma National Forest", "FORESTORGCODE": 503,
             "MVUM_ROADS": None, "RANGER_DISTRICTS": None},
        ])
        forest = load_forests(path)[0]
        assert forest.MVUM_ROADS == MvumRoadStats()
        assert forest.RANGER_DISTRICTS == []


# ============================================================================
# Atomic write
# ============================================================================


class TestAtomicWriteJson:

    def test_creates_parent_dirs(self, tmp_path):
        target = tmp_path / "nested" / "report.json"
        atomic_write_json(target, {"name": "Angeles National Forest"})
        assert json.loads(target.read_text(encoding="utf-8")) == {"name": "Angeles National Forest"}

    def test_non_ascii_preserved(self, tmp_path):
        target = tmp_path / "out.json"
        atomic_write_json(target, ["Año Nuevo"])
        assert "Año Nuevo" in target.read_text(encoding="utf-8")

    def test_no_temp_files_left(self, tmp_path):
        atomic_write_json(tmp_path / "out.json", [1, 2, 3])
        assert [p.name for p in tmp_path.iterdir()] == ["out.json"]

    def test_failed_write_keeps_old_file(self, tmp_path):
        target = tmp_path / "out.json"
        atomic_write_json(target, {"ok": True})
        with pytest.raises(TypeError):
            atomic_write_json(target, {"bad": object()})
        assert json.loads(target.read_text(encoding="utf-8")) == {"ok": True}
        assert [p.name for p in tmp_path.iterdir()] == ["out.json"]

    def test_path_traversal_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="Path traversal"):
            atomic_write_json(Path(str(tmp_path) + "/../escape.json"), {})

    def test_unencodable_data_touches_nothing(self, tmp_path):
        target = tmp_path / "nested" / "out.json"
        with pytest.raises(TypeError):
            atomic_write_json(target, {"bad": {1, 2}})
        assert not target.parent.exists()

    def test_failed_replace_removes_temp_file(self, tmp_path, monkeypatch):
        def refuse(src, dst):
            raise OSError("read-only destination")

        monkeypatch.setattr("forest_routes._io_common.os.replace", refuse)
        with pytest.raises(OSError, match="read-only"):
            atomic_write_json(tmp_path / "out.json", {"ok": True})
        assert list(tmp_path.iterdir()) == []

    def test_indented_with_trailing_newline(self, tmp_path):
        target = tmp_path / "out.json"
        atomic_write_json(target, {"FORESTORGCODE": 501})
        assert target.read_text(encoding="utf-8") == '{\n  "FORESTORGCODE": 501\n}\n'
