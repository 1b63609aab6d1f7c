from __future__ import annotations

import zipfile

import pytest

from streamvault.adapters.archive import is_archive, is_data_member, unwrap_upload
from streamvault.domain.errors import CorruptArchiveError
from streamvault.domain.model import UploadedFile
from tests.helpers.history import corrupt_zip_payloads, make_zip

EXPORT_DIR = "Spotify Extended Streaming History"


def test_plain_data_file_passes_through() -> None:
    upload = UploadedFile(name="Streaming_History_Audio_2024.json", content=b"[]")

    assert unwrap_upload(upload) == [upload]


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (f"{EXPORT_DIR}/Streaming_History_Audio_2019-2021_0.json", True),
        ("Streaming_History_Video_2020.JSON", True),
        (f"{EXPORT_DIR}/", False),
        (f"{EXPORT_DIR}/ReadMeFirst_ExtendedStreamingHistory.pdf", False),
        (f"__MACOSX/{EXPORT_DIR}/._Streaming_History_Audio_2019.json", False),
        (f"{EXPORT_DIR}/._Streaming_History_Audio_2019.json", False),
        (".hidden/Streaming_History_Audio_2019.json", False),
    ],
)
def test_is_data_member(path: str, expected: bool) -> None:  # noqa: FBT001
    assert is_data_member(path) is expected


def test_archive_is_detected_by_magic_bytes() -> None:
    content = make_zip({"a.json": b"[]"})

    assert is_archive(UploadedFile(name="upload.bin", content=content))
    assert not is_archive(UploadedFile(name="upload.bin", content=b"[]"))


def test_unwrap_extracts_only_data_files_in_archive_order() -> None:
    archive = make_zip(
        {
            f"{EXPORT_DIR}/Streaming_History_Audio_2018.json": b"[1]",
            f"{EXPORT_DIR}/ReadMeFirst.pdf": b"%PDF",
            f"__MACOSX/{EXPORT_DIR}/._Streaming_History_Audio_2018.json": b"junk",
            f"{EXPORT_DIR}/Streaming_History_Audio_2019.json": b"[2]",
            f"{EXPORT_DIR}/.DS_Store": b"junk",
        }
    )

    files = unwrap_upload(UploadedFile(name="my_spotify_data.zip", content=archive))

    assert files == [
        UploadedFile(name=f"{EXPORT_DIR}/Streaming_History_Audio_2018.json", content=b"[1]"),
        UploadedFile(name=f"{EXPORT_DIR}/Streaming_History_Audio_2019.json", content=b"[2]"),
    ]


def test_archive_without_data_files_yields_nothing() -> None:
    archive = make_zip({"notes.txt": b"hello"})

    assert unwrap_upload(UploadedFile(name="other.zip", content=archive)) == []


def test_corrupt_archive_raises_with_file_name() -> None:
    with pytest.raises(CorruptArchiveError) as excinfo:
        unwrap_upload(UploadedFile(name="broken.zip", content=b"this is not a zip archive"))

    assert excinfo.value.file_name == "broken.zip"


def test_truncated_archive_is_corrupt() -> None:
    archive = make_zip({"a.json": b"[]" * 1000})

    with pytest.raises(CorruptArchiveError):
        unwrap_upload(UploadedFile(name="truncated.zip", content=archive[: len(archive) // 2]))


def test_damaged_bzip2_archive_is_corrupt() -> None:
    archive = make_zip({"a.json": b"[]" * 1000}, compression=zipfile.ZIP_BZIP2)

    with pytest.raises(CorruptArchiveError) as excinfo:
        unwrap_upload(UploadedFile(name="bzip2.zip", content=corrupt_zip_payloads(archive)))

    assert excinfo.value.file_name == "bzip2.zip"
