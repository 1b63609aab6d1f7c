from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

import pytest

from streamvault.domain.errors import SchemaError
from streamvault.domain.model import (
    AggregateImportResult,
    DateRange,
    FileOutcome,
    ImportResult,
    ImportStatus,
)
from streamvault.ui import cli

if TYPE_CHECKING:
    from pathlib import Path

USER = "00000000-0000-4000-8000-0000000000aa"


@pytest.fixture(autouse=True)
def clear_user_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STREAMVAULT_USER_ID", raising=False)


def _write(tmp_path: Path, name: str) -> Path:
    path = tmp_path / name
    path.write_bytes(b"[]")
    return path


def test_import_passes_paths_and_progress(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: dict[str, object] = {}

    def fake_import(**kwargs: object) -> AggregateImportResult:
        captured.update(kwargs)
        uploads = kwargs["uploads"]
        captured["names"] = [upload.name for upload in uploads]  # type: ignore[attr-defined]
        return AggregateImportResult.from_outcomes(
            [FileOutcome.done("a.json", ImportResult(total=1, imported=1))]
        )

    monkeypatch.setattr(cli, "import_history_uploads", fake_import)
    first = _write(tmp_path, "a.json")
    second = _write(tmp_path, "b.zip")

    cli.main(["--user-id", USER, "import", str(first), str(second)])

    assert captured["user_id"] == UUID(USER)
    assert captured["names"] == ["a.json", "b.zip"]
    assert captured["on_progress"] is cli._report_progress  # noqa: SLF001
    assert captured["cancel"] is not None


def test_import_exits_nonzero_when_a_file_failed(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def fake_import(**_: object) -> AggregateImportResult:
        return AggregateImportResult.from_outcomes(
            [FileOutcome.failed("a.json", SchemaError("bad", file_name="a.json"))]
        )

    monkeypatch.setattr(cli, "import_history_uploads", fake_import)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--user-id", USER, "import", str(_write(tmp_path, "a.json"))])

    assert excinfo.value.code == 1


def test_import_rejects_missing_files(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--user-id", USER, "import", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_user_id_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "history_status", lambda **_: ImportStatus())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["status"])

    assert excinfo.value.code == 2


def test_invalid_user_id(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "history_status", lambda **_: ImportStatus())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--user-id", "nope", "status"])

    assert excinfo.value.code == 2


def test_user_id_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_status(**kwargs: object) -> ImportStatus:
        captured.update(kwargs)
        return ImportStatus()

    monkeypatch.setenv("STREAMVAULT_USER_ID", USER)
    monkeypatch.setattr(cli, "history_status", fake_status)

    cli.main(["status"])

    assert captured["user_id"] == UUID(USER)


def test_status_logs_summary(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    status = ImportStatus(
        has_data=True,
        total_tracks=42,
        date_range=DateRange(
            earliest=datetime(2020, 1, 1, tzinfo=UTC), latest=datetime(2024, 1, 1, tzinfo=UTC)
        ),
    )
    monkeypatch.setattr(cli, "history_status", lambda **_: status)

    with caplog.at_level("INFO", logger=cli.__name__):
        cli.main(["--user-id", USER, "status"])

    assert "distinct tracks=42" in caplog.text
    assert "2020-01-01T00:00:00+00:00" in caplog.text


def test_delete_with_yes_skips_prompt(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[UUID] = []

    def fake_erase(*, user_id: UUID) -> int:
        calls.append(user_id)
        return 3

    def no_prompt(_prompt: str) -> str:
        raise AssertionError("prompted")

    monkeypatch.setattr(cli, "erase_history", fake_erase)
    monkeypatch.setattr("builtins.input", no_prompt)

    cli.main(["--user-id", USER, "delete", "--yes"])

    assert calls == [UUID(USER)]


@pytest.mark.parametrize(("answer", "expected_calls"), [("y", 1), ("yes", 1), ("", 0), ("n", 0)])
def test_delete_asks_for_confirmation(
    monkeypatch: pytest.MonkeyPatch, answer: str, expected_calls: int
) -> None:
    calls: list[UUID] = []

    def fake_erase(*, user_id: UUID) -> int:
        calls.append(user_id)
        return 0

    monkeypatch.setattr(cli, "erase_history", fake_erase)
    monkeypatch.setattr("builtins.input", lambda _prompt: answer)

    cli.main(["--user-id", USER, "delete"])

    assert len(calls) == expected_calls


def test_fatal_errors_exit_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_status(**_: object) -> ImportStatus:
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(cli, "history_status", broken_status)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--user-id", USER, "status"])

    assert excinfo.value.code == 1


def test_serve_runs_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn  # noqa: PLC0415

    captured: dict[str, object] = {}

    def fake_run(target: str, **kwargs: object) -> None:
        captured["target"] = target
        captured.update(kwargs)

    monkeypatch.setattr(uvicorn, "run", fake_run)

    cli.main(["serve", "--port", "9001"])

    assert captured["target"] == "streamvault.api.main:app"
    assert captured["port"] == 9001
