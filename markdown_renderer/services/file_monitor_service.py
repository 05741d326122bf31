"""File system monitoring for open documents and workspace folders."""

from pathlib import Path

import gi

gi.require_version("Gio", "2.0")
gi.require_version("GLib", "2.0")
gi.require_version("GObject", "2.0")

from gi.repository import Gio, GLib, GObject


class FileMonitorService(GObject.Object):
    """Watches a single document or a folder tree.

    Provides monitoring for:
    - An open document (reload when changed on disk)
    - A workspace folder and its subdirectories (reindex on changes)

    Bursts of events are coalesced into one debounced signal.

    Usage:
        service = FileMonitorService(path)
        service.connect("changed", on_changed)  # (service, path)
        ...
        # When done:
        service.shutdown()
    """

    __gsignals__ = {
        # Watched file or something under the watched folder changed
        "changed": (GObject.SignalFlags.RUN_FIRST, None, (str,)),
    }

    # Debounce delay (ms)
    DEBOUNCE = 150

    RELEVANT_EVENTS = (
        Gio.FileMonitorEvent.CHANGED,
        Gio.FileMonitorEvent.CREATED,
        Gio.FileMonitorEvent.DELETED,
        Gio.FileMonitorEvent.MOVED_IN,
        Gio.FileMonitorEvent.MOVED_OUT,
        Gio.FileMonitorEvent.RENAMED,
        Gio.FileMonitorEvent.ATTRIBUTE_CHANGED,
    )

    def __init__(self, path: Path, debounce_ms: int | None = None):
        super().__init__()

        self.path = Path(path)
        self.debounce_ms = self.DEBOUNCE if debounce_ms is None else debounce_ms
        self._file_monitor: Gio.FileMonitor | None = None
        self._directory_monitors: dict[str, Gio.FileMonitor] = {}

        # Debounce state
        self._timeout_id: int | None = None
        self._pending_path: str | None = None

        self._setup_monitors()

    def _setup_monitors(self):
        """Set up the file monitor or the directory tree monitors."""
        if self.path.is_dir():
            self.add_directory(self.path)
            for directory in sorted(self.path.rglob("*")):
                if directory.is_dir() and not self._is_hidden(directory):
                    self.add_directory(directory)
        else:
            try:
                gfile = Gio.File.new_for_path(str(self.path))
                monitor = gfile.monitor_file(Gio.FileMonitorFlags.WATCH_MOVES, None)
                monitor.connect("changed", self._on_changed)
                self._file_monitor = monitor
            except GLib.Error:
                pass  # Path may not exist or be inaccessible

    def _is_hidden(self, path: Path) -> bool:
        """Check if a path is inside a hidden directory (.git included)."""
        try:
            relative = path.relative_to(self.path)
        except ValueError:
            return False
        return any(part.startswith(".") for part in relative.parts)

    # --- Directory monitors (dynamic) ---

    def add_directory(self, directory: Path):
        """Add a monitor for a directory under the watched folder."""
        path_str = str(directory)

        # Skip if already monitoring
        if path_str in self._directory_monitors:
            return

        if self._is_hidden(directory):
            return

        try:
            gfile = Gio.File.new_for_path(path_str)
            monitor = gfile.monitor_directory(Gio.FileMonitorFlags.WATCH_MOVES, None)
            monitor.connect("changed", self._on_changed)
            self._directory_monitors[path_str] = monitor
        except GLib.Error:
            pass

    def remove_directory(self, directory: Path):
        """Remove a directory monitor."""
        path_str = str(directory)
        if path_str in self._directory_monitors:
            monitor = self._directory_monitors.pop(path_str)
            monitor.cancel()

    def get_monitored_directories(self) -> set[str]:
        """Get set of currently monitored directories."""
        return set(self._directory_monitors.keys())

    # --- Event handlers ---

    def _on_changed(self, monitor, file, other_file, event_type):
        """Handle a Gio monitor event."""
        if event_type not in self.RELEVANT_EVENTS:
            return

        path = file.get_path() if file else None
        if not path:
            return

        # Skip .git internal changes
        if "/.git/" in path or path.endswith("/.git"):
            return

        changed = Path(path)
        if self._directory_monitors and event_type in (
            Gio.FileMonitorEvent.CREATED,
            Gio.FileMonitorEvent.MOVED_IN,
        ) and changed.is_dir():
            self.add_directory(changed)
        elif event_type in (
            Gio.FileMonitorEvent.DELETED,
            Gio.FileMonitorEvent.MOVED_OUT,
        ):
            self.remove_directory(changed)

        self.schedule_changed(path)

    # --- Debounce logic ---

    def schedule_changed(self, path: str):
        """Schedule a debounced 'changed' emission for path."""
        self._pending_path = path

        # Cancel existing timeout
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)

        self._timeout_id = GLib.timeout_add(self.debounce_ms, self._emit_changed)

    def _emit_changed(self) -> bool:
        """Emit signal and clear pending state."""
        self._timeout_id = None
        path, self._pending_path = self._pending_path, None
        if path is not None:
            self.emit("changed", path)
        return False  # Don't repeat

    # --- Lifecycle ---

    def shutdown(self):
        """Clean up all monitors and the pending timeout."""
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
        self._timeout_id = None
        self._pending_path = None

        if self._file_monitor is not None:
            self._file_monitor.cancel()
            self._file_monitor = None

        for monitor in self._directory_monitors.values():
            monitor.cancel()
        self._directory_monitors.clear()

    @property
    def is_directory(self) -> bool:
        """Check if a folder (rather than a single file) is watched."""
        return self.path.is_dir()
