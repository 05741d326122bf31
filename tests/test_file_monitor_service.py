from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("gi")

from markdown_renderer.services.file_monitor_service import FileMonitorService
from tests.conftest import pump_for, pump_until


def test_folder_monitors_skip_hidden_directories(tmp_path: Path) -> None:
    (tmp_path / "docs" / "deep").mkdir(parents=True)
    (tmp_path / ".git" / "refs").mkdir(parents=True)
    (tmp_path / ".cache").mkdir()

    service = FileMonitorService(tmp_path)
    try:
        assert service.is_directory
        assert service.get_monitored_directories() == {
            str(tmp_path),
            str(tmp_path / "docs"),
            str(tmp_path / "docs" / "deep"),
        }
    finally:
        service.shutdown()
    assert service.get_monitored_directories() == set()


def test_remove_directory(tmp_path: Path) -> None:
    (tmp_path / "docs").mkdir()
    service = FileMonitorService(tmp_path)
    try:
        service.remove_directory(tmp_path / "docs")
        assert service.get_monitored_directories() == {str(tmp_path)}
    finally:
        service.shutdown()


def test_single_file_has_no_directory_monitors(tmp_path: Path) -> None:
    document = tmp_path / "note.md"
    document.write_text("# Hi", encoding="utf-8")

    service = FileMonitorService(document)
    try:
        assert not service.is_directory
        assert service.get_monitored_directories() == set()
    finally:
        service.shutdown()


def test_changes_are_debounced(tmp_path: Path) -> None:
    service = FileMonitorService(tmp_path, debounce_ms=20)
    emitted = []
    service.connect("changed", lambda _s, path: emitted.append(path))
    try:
        service.schedule_changed("/a.md")
        service.schedule_changed("/b.md")
        assert pump_until(lambda: emitted)
        pump_for(0.1)
        assert emitted == ["/b.md"]
    finally:
        service.shutdown()


def test_shutdown_cancels_pending_signal(tmp_path: Path) -> None:
    service = FileMonitorService(tmp_path, debounce_ms=20)
    emitted = []
    service.connect("changed", lambda _s, path: emitted.append(path))

    service.schedule_changed("/a.md")
    service.shutdown()
    pump_for(0.1)

    assert emitted == []


def test_file_write_is_reported(tmp_path: Path) -> None:
    document = tmp_path / "note.md"
    document.write_text("# One", encoding="utf-8")

    service = FileMonitorService(document, debounce_ms=20)
    emitted = []
    service.connect("changed", lambda _s, path: emitted.append(path))
    try:
        pump_for(0.1)
        document.write_text("# Two", encoding="utf-8")
        assert pump_until(lambda: emitted, timeout=5.0)
        assert emitted[-1] == str(document)
    finally:
        service.shutdown()


def test_missing_path_is_ignored(tmp_path: Path) -> None:
    service = FileMonitorService(tmp_path / "missing.md")
    service.shutdown()
