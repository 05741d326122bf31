"""Path helpers shared by drafts and the workspace view."""

import os
from pathlib import Path


def normalize_document_path(path: str | Path) -> str:
    """Absolute, normalized form of a document path.

    Example: ~/notes/../notes/todo.md -> /home/user/notes/todo.md

    Symlinks are not resolved, so a document keeps the identity it was
    opened under.
    """
    return os.path.normpath(os.path.abspath(os.path.expanduser(str(path))))


def relative_display_name(path: str | Path, folder: str | Path | None) -> str:
    """Display name for a file shown under a workspace folder.

    Returns the path relative to folder when the file is inside it,
    otherwise just the file name.

    Example: (/tmp/ws/docs/readme.md, /tmp/ws) -> docs/readme.md
    """
    file_path = normalize_document_path(path)
    name = Path(file_path).name
    if folder is None:
        return name

    folder_path = normalize_document_path(folder)
    prefix = folder_path.rstrip(os.sep) + os.sep
    if not file_path.startswith(prefix):
        return name

    return file_path[len(prefix):]
