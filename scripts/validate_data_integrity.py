#!/usr/bin/env python3
"""
Data Integrity Validator for the forest route statistics artifact

Validates forests-with-districts.json against:
- Pydantic schema (every forest and district row)
- Forest = sum of districts, strict tolerance (0 roads / 0.1 miles)
- Forest = sum of districts, lenient tolerance (10 roads / 5 miles)
- Category breakdowns (maintenance levels, trail types) sum to TOTAL_MILEAGE

Writes outputs/integrity_report.json and exits 1 on any strict failure.

Usage:
    python scripts/validate_data_integrity.py
    python scripts/validate_data_integrity.py --verbose
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, Union

# Ensure project root is on sys.path for forest_routes imports
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from forest_routes._io_common import atomic_write_json, load_forests
from forest_routes.cli import build_parser, load_settings, run_stage
from forest_routes.integrity import AggregationResult, IntegrityReport, build_integrity_report
from forest_routes.paths import FORESTS_WITH_DISTRICTS_FILENAME, INTEGRITY_REPORT_PATH, dataset_path


@dataclass
class CheckResult:
    """One PASS/FAIL line of the integrity report."""

    name: str
    passed: bool
    details: list[str] = field(default_factory=list)


class ValidationReport:
    """Integrity checks over the artifact, printed as a PASS/FAIL list."""

    def __init__(self):
        self.checks: list[CheckResult] = []

    @property
    def failed_checks(self) -> list[str]:
        return [check.name for check in self.checks if not check.passed]

    def add_check(self, name: str, summary: list[str],
                  failures: Sequence[Union[AggregationResult, str]] = ()) -> CheckResult:
        """Record a check that passes when ``failures`` is empty.

        AggregationResult failures are expanded to one line per error under
        the forest name; plain strings are listed as they are.
        """
        details = list(summary)
        for failure in failures:
            if isinstance(failure, AggregationResult):
                details.append(f"{failure.forest_name}:")
                details.extend(f"  - {error}" for error in failure.errors)
            else:
                details.append(f"- {failure}")
        check = CheckResult(name, passed=not failures, details=details)
        self.checks.append(check)
        return check

    def print_report(self) -> bool:
        """Print every check and return True when none failed."""
        rule = "=" * 80
        print(f"\n{rule}\nFOREST ROUTE STATISTICS - DATA INTEGRITY REPORT\n{rule}\n")
        for check in self.checks:
            label = "PASS" if check.passed else "FAIL"
            print(f"[{label}] {check.name}")
            for line in check.details:
                print(f"    {line}")
            print()
        print(rule)
        print(f"SUMMARY: {len(self.checks)} checks, {len(self.failed_checks)} failed")
        print(f"{rule}\n")
        return not self.failed_checks


def _pct(part: int, whole: int) -> str:
    return f"{(100.0 * part / whole):.1f}%" if whole else "n/a"


def add_integrity_checks(report: ValidationReport, integrity: IntegrityReport) -> None:
    """Translate an IntegrityReport into PASS/FAIL checks."""
    analysed = integrity.forests_with_districts
    exact = len(integrity.strict_valid)

    report.add_check(
        "Forest = Sum of Districts (strict)",
        [
            f"Total forests analyzed: {analysed}",
            f"Forests without ranger districts: {integrity.forests_without_districts}",
            f"Perfect aggregation (exact match): {exact} ({_pct(exact, analysed)})",
        ],
        integrity.strict_failures,
    )
    report.add_check(
        "Forest = Sum of Districts (lenient)",
        [
            f"Minor discrepancies (acceptable): {integrity.minor_discrepancies} "
            f"({_pct(integrity.minor_discrepancies, analysed)})",
            f"Major data issues: {len(integrity.major_issues)} "
            f"({_pct(len(integrity.major_issues), analysed)})",
            f"Overall passing rate: {len(integrity.lenient_valid)} / {analysed} "
            f"({_pct(len(integrity.lenient_valid), analysed)})",
        ],
        integrity.major_issues,
    )
    report.add_check(
        "Category Sums",
        [] if integrity.category_errors else ["All category breakdowns match their totals"],
        integrity.category_errors,
    )


def validate(args) -> None:
    _config, data_dir = load_settings(args)
    artifact = dataset_path(data_dir, FORESTS_WITH_DISTRICTS_FILENAME)

    report = ValidationReport()
    forests = load_forests(artifact)
    report.add_check(
        "Schema Validation",
        [f"{len(forests)} forests, "
         f"{sum(len(f.RANGER_DISTRICTS) for f in forests)} ranger districts parsed"],
    )

    integrity = build_integrity_report(forests)
    add_integrity_checks(report, integrity)
    atomic_write_json(INTEGRITY_REPORT_PATH, integrity.to_dict())

    if not report.print_report():
        sys.exit(1)


def main() -> None:
    """Entry point for the data integrity validator."""
    parser = build_parser("Validate forests-with-districts.json integrity.", epilog=__doc__)
    run_stage(validate, parser)


if __name__ == "__main__":
    main()
