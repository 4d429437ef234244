"""GIS CSV export to JSON record list conversion.

The USFS exports arrive as CSV; the pipeline reads JSON lists of objects.
Values are kept as strings (SEG_LENGTH is parsed later by the aggregator).
Rows whose column count differs from the header are dropped and counted;
blank lines are ignored.
"""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path

from forest_routes.errors import InputFileError

logger = logging.getLogger(__name__)


@dataclass
class CsvConversion:
    """Records converted from one CSV file."""

    headers: list[str]
    records: list[dict[str, str]] = field(default_factory=list)
    skipped_rows: int = 0


def csv_to_records(csv_path: Path) -> CsvConversion:
    """Read a CSV file into a list of header-keyed dicts.

    Opens with encoding="utf-8-sig" to handle BOM.  Quoted fields, doubled
    quotes and CRLF line endings are handled by the csv module.

    Raises:
        InputFileError: If the file is missing, unreadable, or has no header row.
    """
    try:
        with open(csv_path, encoding="utf-8-sig", newline="") as f:
            reader = csv.reader(f)
            headers = next(reader, None)
            if not headers:
                raise InputFileError(csv_path, "CSV file is empty")

            conversion = CsvConversion(headers=headers)
            for row in reader:
                if not row:
                    continue
                if len(row) != len(headers):
                    conversion.skipped_rows += 1
                    logger.debug(
                        "%s line %d: %d columns, expected %d -- skipped",
                        csv_path.name, reader.line_num, len(row), len(headers),
                    )
                    continue
                conversion.records.append(dict(zip(headers, row)))
    except FileNotFoundError as exc:
        raise InputFileError(csv_path, "file not found") from exc
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise InputFileError(csv_path, f"unreadable: {exc}") from exc

    shown = ", ".join(headers[:5]) + ("..." if len(headers) > 5 else "")
    logger.info("Found %d columns: %s", len(headers), shown)
    logger.info(
        "Converted %d rows from %s (%d malformed rows skipped)",
        len(conversion.records), csv_path.name, conversion.skipped_rows,
    )
    return conversion
