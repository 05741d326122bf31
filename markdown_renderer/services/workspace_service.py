"""Workspace folder service: Markdown file index and search."""

from pathlib import Path

import gi

gi.require_version("GLib", "2.0")
gi.require_version("GObject", "2.0")

from gi.repository import GLib, GObject

from ..utils.paths import relative_display_name
from .file_monitor_service import FileMonitorService
from .settings_service import SettingsService
from .workspace_index import index_folder, search_files


class WorkspaceService(GObject.Object):
    """Tracks the Markdown files of an open folder.

    Usage:
        workspace = WorkspaceService()
        workspace.connect("files-changed", on_files_changed)
        workspace.connect("search-finished", on_search_finished)  # (service, results)

        workspace.set_folder(Path("~/notes").expanduser())
        workspace.schedule_search("todo")
        ...
        workspace.shutdown()
    """

    __gsignals__ = {
        # Index of Markdown files was rebuilt
        "files-changed": (GObject.SignalFlags.RUN_FIRST, None, ()),
        # Debounced search completed: list of Paths
        "search-finished": (GObject.SignalFlags.RUN_FIRST, None, (object,)),
    }

    def __init__(self, settings: SettingsService | None = None):
        super().__init__()
        self.settings = settings or SettingsService.get_instance()

        self.folder: Path | None = None
        self.files: list[Path] = []
        self.search_query = ""
        self.search_results: list[Path] = []

        self._monitor: FileMonitorService | None = None
        self._monitor_handler: int | None = None
        self._search_id: int | None = None

    # --- Folder ---

    def set_folder(self, folder: str | Path | None):
        """Open a folder (or close it with None) and index it."""
        self._stop_monitor()

        self.folder = Path(folder) if folder is not None else None
        if self.folder is not None:
            self._monitor = FileMonitorService(
                self.folder,
                debounce_ms=self.settings.get("workspace.reindex_delay_ms", 250),
            )
            self._monitor_handler = self._monitor.connect("changed", self._on_folder_changed)

        self.reindex()

    def reindex(self):
        """Rebuild the file list now."""
        self.files = index_folder(self.folder) if self.folder is not None else []
        self.emit("files-changed")

    def display_name(self, path: str | Path) -> str:
        """Path relative to the folder, or the file name if outside it."""
        return relative_display_name(path, self.folder)

    def _on_folder_changed(self, monitor, path):
        # The monitor already debounces bursts of events
        self.reindex()

    # --- Search ---

    def search(self, query: str) -> list[Path]:
        """Search indexed files by name, then content."""
        return search_files(
            self.files,
            query,
            read_limit=self.settings.get("workspace.search_read_limit", 300_000),
            max_results=self.settings.get("workspace.max_search_results", 200),
        )

    def schedule_search(self, query: str):
        """Run a debounced search and emit 'search-finished'."""
        self._cancel_search()
        self.search_query = query

        if not query.strip():
            self.search_results = []
            self.emit("search-finished", [])
            return

        delay = self.settings.get("workspace.search_delay_ms", 150)
        self._search_id = GLib.timeout_add(delay, self._run_search)

    def _run_search(self) -> bool:
        self._search_id = None
        self.search_results = self.search(self.search_query)
        self.emit("search-finished", list(self.search_results))
        return False

    @property
    def is_searching(self) -> bool:
        return self._search_id is not None

    # --- Lifecycle ---

    def _cancel_search(self):
        if self._search_id is not None:
            GLib.source_remove(self._search_id)
        self._search_id = None

    def _stop_monitor(self):
        if self._monitor is not None:
            if self._monitor_handler is not None:
                self._monitor.disconnect(self._monitor_handler)
            self._monitor.shutdown()
        self._monitor = None
        self._monitor_handler = None

    def shutdown(self):
        """Stop watching and cancel pending work."""
        self._stop_monitor()
        self._cancel_search()
