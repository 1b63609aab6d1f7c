"""Schema validation of one exported data file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from streamvault.domain.errors import SchemaError

from .schema import StreamingHistory
from .translator import translate_entry

if TYPE_CHECKING:
    from streamvault.domain.model import RawEntry

log = logging.getLogger(__name__)


def parse_history_file(file_name: str, content: bytes) -> list[RawEntry]:
    """Validate ``content`` as a JSON array of history entries.

    A single malformed entry rejects the whole file: a type violation means the
    file is corrupt or of another format, and salvaging rows could import
    garbage.
    """

    try:
        entries = StreamingHistory.validate_json(content)
    except ValidationError as exc:
        log.debug("Schema validation failed for %s: %s", file_name, exc)
        raise SchemaError(
            f"{file_name}: invalid streaming history format ({_describe(exc)})",
            file_name=file_name,
        ) from exc
    return [translate_entry(entry) for entry in entries]


def _describe(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False, include_input=False)
    if not errors:
        return "no details"
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    suffix = f" and {len(errors) - 1} more" if len(errors) > 1 else ""
    return f"{location}: {first['msg']}{suffix}"
