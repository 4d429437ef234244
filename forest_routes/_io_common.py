"""Shared JSON I/O for pipeline stages.

Consolidates the artifact and dataset reading/writing every stage needs:
  - load_json_records: read a JSON list and validate each row into a model
  - load_forests / save_forests: read and rewrite forests-with-districts.json
  - atomic_write_json: serialize, then swap into place via a temp file

All readers raise InputFileError naming the offending file; nothing here
returns partial data.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence, TypeVar, Union

from pydantic import BaseModel, ValidationError

from forest_routes.errors import InputFileError
from forest_routes.schemas.models import NationalForest

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def read_json(path: Path):
    """Read and parse a JSON file.

    Raises:
        InputFileError: If the file is missing, unreadable, or not valid JSON.
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise InputFileError(path, "file not found") from exc
    except json.JSONDecodeError as exc:
        raise InputFileError(path, f"invalid JSON: {exc}") from exc
    except OSError as exc:
        raise InputFileError(path, f"unreadable: {exc}") from exc


def load_json_list(path: Path) -> list:
    """Read a JSON file whose top level must be a list."""
    data = read_json(path)
    if not isinstance(data, list):
        raise InputFileError(path, f"expected a JSON list, got {type(data).__name__}")
    return data


def load_json_records(path: Path, model: type[ModelT]) -> list[ModelT]:
    """Load a JSON list and validate every row into ``model``.

    Args:
        path: JSON file holding a list of objects.
        model: Pydantic model to validate each row against.

    Returns:
        Validated model instances, in file order.

    Raises:
        InputFileError: If the file cannot be read, is not a JSON list, or a
            row fails validation.
    """
    data = load_json_list(path)

    records: list[ModelT] = []
    for i, row in enumerate(data):
        try:
            records.append(model.model_validate(row))
        except ValidationError as exc:
            raise InputFileError(
                path, f"row {i} is not a valid {model.__name__}: {exc}"
            ) from exc

    logger.info("Loaded %d %s rows from %s", len(records), model.__name__, path.name)
    return records


def load_forests(path: Path) -> list[NationalForest]:
    """Load the forests-with-districts artifact."""
    return load_json_records(path, NationalForest)


def dump_forests(forests: Sequence[NationalForest]) -> list[dict]:
    """Serialize forests to the dashboard wire format (unset optionals omitted)."""
    return [forest.model_dump(mode="json", exclude_none=True) for forest in forests]


def save_forests(path: Path, forests: Sequence[NationalForest]) -> None:
    """Atomically rewrite the forests-with-districts artifact."""
    atomic_write_json(path, dump_forests(forests))
    logger.info("Wrote %d forests to %s", len(forests), path)


def _replace_atomically(output_path: Path, text: str) -> None:
    """Swap ``text`` into ``output_path`` through a sibling temp file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=output_path.parent,
        prefix=f".{output_path.name}.", suffix=".tmp", delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(text)
        except OSError:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        os.replace(tmp_path, output_path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def atomic_write_json(output_path: Path, data: Union[dict, list]) -> None:
    """Write an artifact as 2-space-indented UTF-8 JSON, all or nothing.

    The document is serialized before anything touches the disk, so data
    that cannot be encoded raises TypeError/ValueError with the previous
    artifact and its directory untouched.

    Raises:
        ValueError: If output_path has a ``..`` component.
    """
    if ".." in output_path.parts:
        raise ValueError(f"Path traversal detected in output path: {output_path}")

    text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    _replace_atomically(output_path, text)
    logger.debug("Wrote %s (%d bytes)", output_path, len(text.encode("utf-8")))
