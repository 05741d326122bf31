"""Heading line classification and anchor slug generation.

Shared by the outline extractor and the HTML renderer so that outline ids
and preview heading ids are computed by one algorithm.
"""

import re
from urllib.parse import quote


FENCE_MARKER = "```"
MAX_HEADING_LEVEL = 6

WHITESPACE_RUN = re.compile(r"\s+")

# Characters left as-is by percent-encoding (RFC 3986 unreserved set)
UNRESERVED = "-_.~"


def is_fence_line(line: str) -> bool:
    """Check whether a line opens or closes a code fence."""
    return line.strip().startswith(FENCE_MARKER)


def fence_language(line: str) -> str | None:
    """Get the language tag of an opening fence line, if any."""
    tag = line.strip()[len(FENCE_MARKER):].strip()
    return tag or None


def parse_heading_line(line: str) -> tuple[int, str] | None:
    """Classify a line as an ATX heading.

    The hash run must be 1-6 characters long and followed by a space,
    so `#tag` text and seven-hash lines are rejected rather than clamped.

    Returns (level, title) or None if the line is not a heading.
    """
    trimmed = line.strip()
    level = len(trimmed) - len(trimmed.lstrip("#"))
    if not 1 <= level <= MAX_HEADING_LEVEL:
        return None
    if trimmed[level:level + 1] != " ":
        return None

    title = trimmed[level:].strip()
    if not title:
        return None
    return level, title


def slugify(title: str) -> str:
    """Build a URL-safe anchor slug from heading text.

    Whitespace runs collapse to a single dash before percent-encoding,
    so spaces never turn into %20.
    """
    dashed = WHITESPACE_RUN.sub("-", title.strip().lower())
    return quote(dashed, safe=UNRESERVED)


class SlugRegistry:
    """Tracks slugs issued within one document pass.

    Usage:
        registry = SlugRegistry()
        registry.unique("intro")    # "intro"
        registry.unique("intro")    # "intro-1"
        registry.unique("intro-1")  # "intro-1-1"
    """

    def __init__(self):
        self._counters: dict[str, int] = {}

    def __contains__(self, slug: str) -> bool:
        return slug in self._counters

    def __len__(self) -> int:
        return len(self._counters)

    def unique(self, slug: str) -> str:
        """Register a slug, appending -1, -2, ... if it is already taken."""
        if slug not in self._counters:
            self._counters[slug] = 0
            return slug

        suffix = self._counters[slug] + 1
        # A literal heading like "Intro 1" may already own "intro-1"
        while f"{slug}-{suffix}" in self._counters:
            suffix += 1

        candidate = f"{slug}-{suffix}"
        self._counters[slug] = suffix
        self._counters[candidate] = 0
        return candidate
