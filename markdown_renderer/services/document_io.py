"""Reading and writing Markdown documents."""

import codecs
import os
import tempfile
from pathlib import Path


MARKDOWN_EXTENSIONS = {".md", ".markdown"}


class DocumentReadError(OSError):
    """Raised when a document's bytes cannot be decoded as text."""

    def __init__(self, path: str | Path, message: str = "unsupported text encoding"):
        self.path = str(path)
        super().__init__(f"Cannot read {self.path}: {message}")


def is_markdown_file(path: str | Path) -> bool:
    """Check if a path has a Markdown extension."""
    return Path(path).suffix.lower() in MARKDOWN_EXTENSIONS


def read_markdown(path: str | Path) -> str:
    """Read a Markdown document.

    Tries UTF-8 first, then UTF-16 when the file starts with a UTF-16
    byte order mark.

    Raises:
        DocumentReadError: If the data is neither.
        OSError: If the file cannot be read.
    """
    data = Path(path).read_bytes()

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        try:
            return data.decode("utf-16")
        except UnicodeDecodeError:
            pass

    raise DocumentReadError(path)


def write_markdown(path: str | Path, text: str) -> None:
    """Write a document as UTF-8, replacing the file atomically."""
    atomic_write_text(Path(path), text)


def atomic_write_text(path: Path, text: str) -> None:
    """Write text to a temp file in the same directory, then rename it over path."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
