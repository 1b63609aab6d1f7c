"""Ports for turning uploaded bytes into domain entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from streamvault.domain.model import RawEntry, UploadedFile


@runtime_checkable
class HistoryParser(Protocol):
    """Callable port validating one data file into raw entries.

    Implementations raise ``SchemaError`` and never return a partial list.
    """

    def __call__(self, file_name: str, content: bytes) -> list[RawEntry]: ...


@runtime_checkable
class UploadUnwrapper(Protocol):
    """Callable port expanding an uploaded unit into candidate data files."""

    def __call__(self, upload: UploadedFile) -> list[UploadedFile]: ...


__all__ = ["HistoryParser", "UploadUnwrapper"]
