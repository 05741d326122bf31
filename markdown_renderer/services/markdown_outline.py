"""Markdown outline parser for extracting headings."""

from ..models import HeadingEntry
from .slugs import SlugRegistry, is_fence_line, parse_heading_line, slugify


def extract_outline(source: str) -> list[HeadingEntry]:
    """Parse Markdown source and extract headings.

    Supports ATX-style headings (# Heading).
    Ignores headings inside fenced code blocks; an unterminated fence
    hides every heading after it.

    Returns a list of HeadingEntry objects ordered by line number.
    Line numbers are zero-based indices into source.split("\\n").
    """
    items = []
    registry = SlugRegistry()
    in_code_block = False

    for line_num, line in enumerate(source.split("\n")):
        # Check for code fence toggle
        if is_fence_line(line):
            in_code_block = not in_code_block
            continue

        # Skip if inside code block
        if in_code_block:
            continue

        heading = parse_heading_line(line)
        if heading is None:
            continue

        level, title = heading
        items.append(HeadingEntry(
            id=registry.unique(slugify(title)),
            level=level,
            title=title,
            source_line=line_num,
        ))

    return items
