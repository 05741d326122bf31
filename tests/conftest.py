from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path

import pytest


def pump_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    """Iterate the default GLib main context until predicate() or timeout."""
    from gi.repository import GLib

    context = GLib.MainContext.default()
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() >= deadline:
            return False
        while context.pending():
            context.iteration(False)
        time.sleep(0.005)
    return True


def pump_for(seconds: float) -> None:
    """Iterate the default GLib main context for a fixed time."""
    pump_until(lambda: False, timeout=seconds)


@pytest.fixture
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and data directories at tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def settings(isolated_dirs: Path):
    """Fresh SettingsService singleton backed by a temp config dir."""
    pytest.importorskip("gi")
    from markdown_renderer.services.settings_service import SettingsService

    SettingsService._instance = None
    instance = SettingsService.get_instance()
    yield instance
    SettingsService._instance = None
