"""Debounced preview rendering."""

import gi

gi.require_version("GLib", "2.0")
gi.require_version("GObject", "2.0")

from gi.repository import GLib, GObject

from .markdown_html import render_html
from .markdown_outline import extract_outline


class PreviewScheduler(GObject.Object):
    """Coalesces rapid edits into one render after a short idle gap.

    A newer update cancels the pending one; the stale text is simply never
    rendered.

    Usage:
        scheduler = PreviewScheduler()
        scheduler.connect("rendered", on_rendered)            # (scheduler, html)
        scheduler.connect("outline-changed", on_outline)      # (scheduler, entries)

        # On every edit
        scheduler.update(buffer_text)

        # When done:
        scheduler.shutdown()
    """

    __gsignals__ = {
        # Rendered HTML fragment
        "rendered": (GObject.SignalFlags.RUN_FIRST, None, (str,)),
        # New outline (list of HeadingEntry), only when it differs from the last one
        "outline-changed": (GObject.SignalFlags.RUN_FIRST, None, (object,)),
    }

    def __init__(self, debounce_ms: int | None = None):
        super().__init__()
        if debounce_ms is None:
            from .settings_service import SettingsService
            debounce_ms = SettingsService.get_instance().get("preview.debounce_ms", 220)
        self.debounce_ms = debounce_ms

        self._pending_text: str | None = None
        self._timeout_id: int | None = None
        self._last_outline: list | None = None

    @property
    def is_pending(self) -> bool:
        return self._timeout_id is not None

    def update(self, markdown: str):
        """Schedule a render of markdown, replacing any pending one."""
        self._pending_text = markdown
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
        self._timeout_id = GLib.timeout_add(self.debounce_ms, self._on_timeout)

    def flush(self):
        """Run the pending render now, if any."""
        if self._timeout_id is None:
            return
        GLib.source_remove(self._timeout_id)
        self._on_timeout()

    def render_now(self, markdown: str):
        """Render synchronously, dropping any pending render."""
        self.shutdown()
        self._render(markdown)

    def _on_timeout(self) -> bool:
        self._timeout_id = None
        text, self._pending_text = self._pending_text, None
        if text is not None:
            self._render(text)
        return False  # Don't repeat

    def _render(self, markdown: str):
        self.emit("rendered", render_html(markdown))

        outline = extract_outline(markdown)
        if outline != self._last_outline:
            self._last_outline = outline
            self.emit("outline-changed", outline)

    def shutdown(self):
        """Cancel the pending render."""
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
        self._timeout_id = None
        self._pending_text = None
