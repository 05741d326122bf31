"""Markdown file indexing and search for a workspace folder."""

import os
from pathlib import Path

import pathspec

from .document_io import is_markdown_file


DEFAULT_READ_LIMIT = 300_000
DEFAULT_MAX_RESULTS = 200


def load_ignore_spec(folder: Path) -> pathspec.PathSpec | None:
    """Load ignore patterns from the folder's .gitignore, if any."""
    gitignore_path = folder / ".gitignore"
    if not gitignore_path.exists():
        return None

    patterns = []
    try:
        with open(gitignore_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                # Skip comments and empty lines
                if line and not line.startswith("#"):
                    patterns.append(line)
    except OSError:
        return None

    # None if no patterns
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, patterns)


def index_folder(folder: str | Path) -> list[Path]:
    """List Markdown files under folder, sorted by path.

    Hidden files and directories are skipped, as is anything matched by
    the folder's .gitignore.
    """
    root = Path(folder)
    if not root.is_dir():
        return []

    ignore_spec = load_ignore_spec(root)
    files = []

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        relative_dir = current.relative_to(root)

        kept = []
        for name in dirnames:
            if name.startswith("."):
                continue
            relative = (relative_dir / name).as_posix() + "/"
            if ignore_spec is not None and ignore_spec.match_file(relative):
                continue
            kept.append(name)
        # Prune in place so os.walk skips them
        dirnames[:] = kept

        for name in filenames:
            if name.startswith(".") or not is_markdown_file(name):
                continue
            relative = (relative_dir / name).as_posix()
            if ignore_spec is not None and ignore_spec.match_file(relative):
                continue
            files.append(current / name)

    files.sort(key=lambda p: str(p))
    return files


def file_matches(path: Path, query: str, read_limit: int = DEFAULT_READ_LIMIT) -> bool:
    """Check if a file's name or leading content contains query (case-insensitive)."""
    needle = query.lower()
    if needle in path.name.lower():
        return True

    try:
        with open(path, "rb") as f:
            data = f.read(read_limit)
    except OSError:
        return False

    # A multi-byte character may be cut at the read limit
    text = data.decode("utf-8", errors="ignore")
    return needle in text.lower()


def search_files(
    files: list[Path],
    query: str,
    read_limit: int = DEFAULT_READ_LIMIT,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[Path]:
    """Filter files by name or content match, keeping index order."""
    query = query.strip()
    if not query:
        return []

    results = []
    for path in files:
        if file_matches(path, query, read_limit):
            results.append(path)
            if len(results) >= max_results:
                break
    return results
