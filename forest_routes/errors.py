"""Exceptions raised by the forest route statistics pipeline.

Every unrecoverable condition is a ``PipelineError`` subclass so the stage
runner (``forest_routes.cli``) can turn it into a logged error and a
non-zero exit.  Recoverable conditions (unparseable segment lengths,
unknown maintenance levels, orphaned records) never raise.
"""

from pathlib import Path
from typing import Optional


class PipelineError(Exception):
    """Base class for fatal pipeline errors."""


class InputFileError(PipelineError):
    """An input file is absent, unreadable, or does not match its schema."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class EntityNotFoundError(PipelineError):
    """A stage targets a forest or district that is not in the artifact."""

    def __init__(self, entity_name: str, context: str = "") -> None:
        self.entity_name = entity_name
        message = f"Entity not found: {entity_name!r}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class OrgCodeFormatError(PipelineError):
    """An org code does not have the width the padded NFS convention assumes."""

    def __init__(self, org_code: int, expected_width: int, level: str,
                 entity_name: Optional[str] = None) -> None:
        self.org_code = org_code
        self.expected_width = expected_width
        self.level = level
        self.entity_name = entity_name
        subject = f"{level} org code {org_code}"
        if entity_name:
            subject = f"{entity_name!r} {subject}"
        super().__init__(
            f"{subject} has {len(str(org_code))} digits; "
            f"the zero-padded NFS ADMIN_ORG convention requires {expected_width}"
        )
