"""Debounced draft saving for the document being edited."""

from pathlib import Path

import gi

gi.require_version("GLib", "2.0")
gi.require_version("GObject", "2.0")

from gi.repository import GLib, GObject

from .draft_store import DraftStore


class DraftAutosaver(GObject.Object):
    """Saves the editor text to a DraftStore once typing pauses.

    Usage:
        autosaver = DraftAutosaver(DraftStore.live(), document_path)
        autosaver.connect("saved", on_draft_saved)

        # On every edit
        autosaver.schedule(buffer_text)

        # After the document itself is saved
        autosaver.cancel()
        store.clear(document_path)
    """

    __gsignals__ = {
        # Draft written: callback(autosaver, document_path)
        "saved": (GObject.SignalFlags.RUN_FIRST, None, (str,)),
    }

    def __init__(self, store: DraftStore, document_path: str | Path, delay_ms: int | None = None):
        super().__init__()
        self.store = store
        self.document_path = str(document_path)
        if delay_ms is None:
            from .settings_service import SettingsService
            delay_ms = SettingsService.get_instance().get("drafts.save_delay_ms", 900)
        self.delay_ms = delay_ms

        self._pending_text: str | None = None
        self._timeout_id: int | None = None

    @property
    def is_pending(self) -> bool:
        return self._timeout_id is not None

    def schedule(self, text: str):
        """Schedule a draft save, replacing any pending one."""
        self._pending_text = text
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
        self._timeout_id = GLib.timeout_add(self.delay_ms, self._on_timeout)

    def flush(self):
        """Save the pending text immediately."""
        if self._timeout_id is None:
            return
        GLib.source_remove(self._timeout_id)
        self._on_timeout()

    def cancel(self):
        """Drop the pending save."""
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
        self._timeout_id = None
        self._pending_text = None

    def _on_timeout(self) -> bool:
        self._timeout_id = None
        text, self._pending_text = self._pending_text, None
        if text is not None and self.store.save(text, self.document_path):
            self.emit("saved", self.document_path)
        return False  # Don't repeat
