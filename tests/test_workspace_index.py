from __future__ import annotations

from pathlib import Path

import pytest

from markdown_renderer.services.workspace_index import file_matches, index_folder, search_files


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    files = {
        "a.md": "# Alpha\nshopping list",
        "docs/b.markdown": "# Beta\nMeeting NOTES",
        "docs/deep/c.md": "# Gamma",
        ".hidden/secret.md": "# Hidden",
        ".draft.md": "# Dotfile",
        "node_modules/pkg/readme.md": "# Vendored",
        "build.md": "# Generated",
        "notes.txt": "not markdown",
    }
    for name, text in files.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    (tmp_path / ".gitignore").write_text("# deps\nnode_modules/\nbuild.md\n", encoding="utf-8")
    return tmp_path


def test_index_folder(workspace: Path) -> None:
    assert index_folder(workspace) == [
        workspace / "a.md",
        workspace / "docs" / "b.markdown",
        workspace / "docs" / "deep" / "c.md",
    ]


def test_index_without_gitignore(tmp_path: Path) -> None:
    (tmp_path / "build.md").write_text("x", encoding="utf-8")
    assert index_folder(tmp_path) == [tmp_path / "build.md"]


def test_index_with_crlf_gitignore(tmp_path: Path) -> None:
    for name in ["keep.md", "build.md", "out/page.md"]:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x", encoding="utf-8")
    (tmp_path / ".gitignore").write_bytes(b"  # generated\r\nbuild.md  \r\nout/\r\n")

    assert index_folder(tmp_path) == [tmp_path / "keep.md"]


def test_index_missing_folder(tmp_path: Path) -> None:
    assert index_folder(tmp_path / "missing") == []


def test_search_by_name_and_content(workspace: Path) -> None:
    files = index_folder(workspace)
    assert search_files(files, "gamma") == [workspace / "docs" / "deep" / "c.md"]
    assert search_files(files, "meeting notes") == [workspace / "docs" / "b.markdown"]
    assert search_files(files, "B.MARK") == [workspace / "docs" / "b.markdown"]


def test_search_empty_query(workspace: Path) -> None:
    assert search_files(index_folder(workspace), "   ") == []


def test_search_caps_results(workspace: Path) -> None:
    files = index_folder(workspace)
    assert len(search_files(files, "#", max_results=2)) == 2


def test_content_search_reads_only_the_limit(tmp_path: Path) -> None:
    path = tmp_path / "long.md"
    path.write_text("x" * 100 + "needle", encoding="utf-8")
    assert file_matches(path, "needle") is True
    assert file_matches(path, "needle", read_limit=50) is False


def test_unreadable_file_does_not_match(tmp_path: Path) -> None:
    assert file_matches(tmp_path / "gone.md", "anything") is False
