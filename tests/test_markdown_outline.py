from __future__ import annotations

import dataclasses

import pytest

from markdown_renderer.models import HeadingEntry
from markdown_renderer.services.markdown_outline import extract_outline


SAMPLE = """# Guide

Intro text with a #hashtag.

## Install

```bash
# not a heading
pip install thing
```

## Usage
### Intro
### Intro
  ### Intro 1
####### Too deep
#NoSpace
## Usage
"""


def test_empty_input() -> None:
    assert extract_outline("") == []


def test_levels_titles_and_lines() -> None:
    entries = extract_outline("# A\n## B\n### C")
    assert [(e.level, e.title, e.source_line) for e in entries] == [
        (1, "A", 0),
        (2, "B", 1),
        (3, "C", 2),
    ]


def test_sample_document() -> None:
    entries = extract_outline(SAMPLE)
    assert [(e.id, e.level, e.source_line) for e in entries] == [
        ("guide", 1, 0),
        ("install", 2, 4),
        ("usage", 2, 11),
        ("intro", 3, 12),
        ("intro-1", 3, 13),
        ("intro-1-1", 3, 14),
        ("usage-1", 2, 17),
    ]


def test_fenced_heading_is_suppressed() -> None:
    assert extract_outline("```\n# not a heading\n```") == []


def test_fence_delimiter_line_is_never_a_heading() -> None:
    assert extract_outline("```# looks like one\n```") == []


def test_unterminated_fence_hides_the_rest() -> None:
    entries = extract_outline("# A\n```\n# B\n# C")
    assert [e.title for e in entries] == ["A"]


def test_duplicate_titles() -> None:
    entries = extract_outline("# Intro\n\n# Intro")
    assert [e.id for e in entries] == ["intro", "intro-1"]


def test_rejected_heading_lines() -> None:
    assert extract_outline("#NoSpace\n####### Seven\n#\n# ") == []


def test_trailing_newline_keeps_line_indices() -> None:
    text = "intro\n\n## Title\n"
    entries = extract_outline(text)
    lines = text.split("\n")
    assert len(lines) == 4
    assert entries[0].source_line == 2
    assert lines[entries[0].source_line] == "## Title"


def test_crlf_line_endings() -> None:
    entries = extract_outline("# One\r\n\r\n## Two\r\n")
    assert [(e.id, e.title, e.source_line) for e in entries] == [
        ("one", "One", 0),
        ("two", "Two", 2),
    ]


def test_properties_hold_for_sample() -> None:
    entries = extract_outline(SAMPLE)
    line_count = len(SAMPLE.split("\n"))

    assert len({e.id for e in entries}) == len(entries)
    assert all(1 <= e.level <= 6 for e in entries)
    assert all(0 <= e.source_line < line_count for e in entries)
    assert [e.source_line for e in entries] == sorted(e.source_line for e in entries)


def test_extraction_is_idempotent() -> None:
    assert extract_outline(SAMPLE) == extract_outline(SAMPLE)


def test_heading_entry_is_immutable() -> None:
    entry = extract_outline("# Title")[0]
    assert isinstance(entry, HeadingEntry)
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.title = "Other"  # type: ignore[misc]


def test_heading_entry_helpers() -> None:
    entry = extract_outline("## Read Me")[0]
    assert entry.anchor == "#read-me"
    assert entry.display_name == "Read Me"
    assert entry.to_dict() == {"id": "read-me", "level": 2, "title": "Read Me", "source_line": 0}
