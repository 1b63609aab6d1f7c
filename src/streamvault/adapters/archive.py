"""Expand uploaded archives into candidate history data files."""

from __future__ import annotations

import io
import logging
import lzma
import zipfile
import zlib
from pathlib import PurePosixPath
from typing import Final

from streamvault.domain.errors import CorruptArchiveError
from streamvault.domain.model import UploadedFile

log = logging.getLogger(__name__)

ZIP_MAGIC: Final[bytes] = b"PK\x03\x04"
ARCHIVE_SUFFIX: Final[str] = ".zip"
DATA_FILE_SUFFIX: Final[str] = ".json"
JUNK_PREFIXES: Final[tuple[str, ...]] = ("__MACOSX",)

_ARCHIVE_ERRORS: Final = (
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
    OSError,
    EOFError,
    NotImplementedError,
)


def is_archive(upload: UploadedFile) -> bool:
    """Check the name first, then the magic bytes for archives renamed by the browser."""

    return upload.name.lower().endswith(ARCHIVE_SUFFIX) or upload.content[:4] == ZIP_MAGIC


def is_data_member(path: str) -> bool:
    """Return whether an archive member is a history file worth parsing.

    Directories, resource forks (``__MACOSX/``) and hidden entries (any path
    component starting with a dot, e.g. ``._Streaming_History.json``) are
    excluded.
    """

    if path.endswith("/"):
        return False
    parts = PurePosixPath(path).parts
    if not parts or not parts[-1].lower().endswith(DATA_FILE_SUFFIX):
        return False
    return not any(part.startswith(JUNK_PREFIXES) or part.startswith(".") for part in parts)


def unwrap_upload(upload: UploadedFile) -> list[UploadedFile]:
    """Return the data files contained in ``upload``.

    Non-archives are passed through as a single-element list. Raises
    ``CorruptArchiveError`` if the archive cannot be read.
    """

    if not is_archive(upload):
        return [upload]

    try:
        with zipfile.ZipFile(io.BytesIO(upload.content)) as archive:
            members = [name for name in archive.namelist() if is_data_member(name)]
            files = [UploadedFile(name=name, content=archive.read(name)) for name in members]
    except _ARCHIVE_ERRORS as exc:
        raise CorruptArchiveError(
            f"{upload.name}: cannot decompress archive ({exc})",
            file_name=upload.name,
        ) from exc
    except RuntimeError as exc:  # encrypted members
        raise CorruptArchiveError(
            f"{upload.name}: cannot read archive ({exc})",
            file_name=upload.name,
        ) from exc

    log.debug("Extracted %s data file(s) from %s", len(files), upload.name)
    return files
