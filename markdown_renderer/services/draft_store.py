"""Unsaved-draft storage for open documents.

Drafts are stored as individual .txt files in the drafts directory:
- Filename = SHA-256 hex digest of the document's absolute path
- File content = the unsaved editor text
"""

import hashlib
from pathlib import Path

from ..utils.paths import normalize_document_path
from .config_path import get_data_dir
from .document_io import atomic_write_text


class DraftStore:
    """Best-effort persistence of unsaved editor text.

    Usage:
        store = DraftStore.live()

        store.save(text, "/home/user/notes/todo.md")
        draft = store.load("/home/user/notes/todo.md")  # None if no draft
        store.clear("/home/user/notes/todo.md")
    """

    def __init__(self, root_dir: str | Path):
        self.root_dir = Path(root_dir)

    @classmethod
    def live(cls) -> "DraftStore":
        """Store rooted in the application data directory."""
        return cls(get_data_dir() / "drafts")

    def draft_path(self, document_path: str | Path) -> Path:
        """Get the draft file used for a document."""
        key = normalize_document_path(document_path)
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.root_dir / f"{digest}.txt"

    def load(self, document_path: str | Path) -> str | None:
        """Get the saved draft for a document, or None."""
        path = self.draft_path(document_path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def save(self, text: str, document_path: str | Path) -> bool:
        """Save a draft. Returns True on success."""
        path = self.draft_path(document_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_text(path, text)
            return True
        except OSError as e:
            print(f"Failed to save draft for {document_path}: {e}")
            return False

    def clear(self, document_path: str | Path) -> None:
        """Delete a document's draft, if any."""
        try:
            self.draft_path(document_path).unlink(missing_ok=True)
        except OSError:
            pass

    def has_newer_draft(self, document_path: str | Path, current_text: str) -> bool:
        """Check if a draft exists that differs from the document text."""
        draft = self.load(document_path)
        return draft is not None and draft != current_text
