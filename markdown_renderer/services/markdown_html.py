"""Markdown to HTML renderer for the live preview.

Rendering runs five ordered passes:

    escape -> code fences -> headings -> inline spans -> blocks

Passes after the escape work on a list of segments: one segment per source
line, except that a whole fenced code block becomes a single segment. Since
raw `<` is escaped first, any segment starting with `<h` or `<pre>` was
produced by a later pass.

The renderer never raises. Unterminated fences and unmatched inline
delimiters are left as literal text.
"""

import re

from .slugs import (
    SlugRegistry,
    fence_language,
    is_fence_line,
    parse_heading_line,
    slugify,
)


CODE_BLOCK_OPEN = "<pre>"
HEADING_OPEN = "<h"

# Inline patterns never cross a line boundary
INLINE_CODE_PATTERN = re.compile(r"`([^`\n]+)`")
BOLD_PATTERN = re.compile(r"\*\*([^*\n]+)\*\*")
ITALIC_PATTERN = re.compile(r"_([^_\n]+)_")
IMAGE_PATTERN = re.compile(r"!\[([^\]\n]*)\]\(([^)\n]+)\)")
LINK_PATTERN = re.compile(r"\[([^\]\n]+)\]\(([^)\n]+)\)")

# Image must run before link: "[alt](url)" is a substring of "![alt](url)"
SPAN_RULES = (
    (BOLD_PATTERN, r"<strong>\1</strong>"),
    (ITALIC_PATTERN, r"<em>\1</em>"),
    (IMAGE_PATTERN, r'<img alt="\1" src="\2" />'),
    (LINK_PATTERN, r'<a href="\2">\1</a>'),
)

# Stands in for an inline code span while the other rules run
PLACEHOLDER = "\x00"
PLACEHOLDER_PATTERN = re.compile(r"\x00(\d+)\x00")

HEADING_ELEMENT_PATTERN = re.compile(r'^(<h[1-6] id="[^"]*">)(.*)(</h[1-6]>)$')

BULLET = "- "


def render_html(markdown: str) -> str:
    """Render Markdown text to an HTML fragment.

    Returns an empty string for empty input.
    """
    escaped = escape_html(markdown)
    segments = render_code_fences(escaped)
    segments = render_headings(segments)
    segments = render_inline(segments)
    return render_blocks(segments)


def escape_html(text: str) -> str:
    """Escape &, < and > (in that order)."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def unescape_html(text: str) -> str:
    """Reverse escape_html exactly."""
    return (
        text.replace("&lt;", "<")
        .replace("&gt;", ">")
        .replace("&amp;", "&")
    )


def render_code_fences(text: str) -> list[str]:
    """Split text into segments, collapsing fenced blocks into <pre> elements.

    A fence left open at the end of the input is closed implicitly.
    CRLF line endings are read as plain newlines.
    """
    segments = []
    buffer: list[str] | None = None
    language = None

    for line in text.replace("\r\n", "\n").split("\n"):
        if is_fence_line(line):
            if buffer is None:
                buffer = []
                language = fence_language(line)
            else:
                segments.append(_code_block(buffer, language))
                buffer = None
                language = None
            continue

        if buffer is not None:
            buffer.append(line)
        else:
            segments.append(line)

    if buffer is not None:
        segments.append(_code_block(buffer, language))

    return segments


def _code_block(lines: list[str], language: str | None) -> str:
    lang_class = f' class="language-{language}"' if language else ""
    code = "\n".join(lines)
    return f"<pre><code{lang_class}>{code}</code></pre>"


def render_headings(segments: list[str]) -> list[str]:
    """Turn heading lines into <hN id="slug"> elements.

    Uses a fresh slug registry, so ids match extract_outline() for the
    same source.
    """
    registry = SlugRegistry()
    result = []

    for segment in segments:
        if segment.startswith(CODE_BLOCK_OPEN):
            result.append(segment)
            continue

        heading = parse_heading_line(segment)
        if heading is None:
            result.append(segment)
            continue

        level, title = heading
        # Slug from the source text, not its escaped form
        slug = registry.unique(slugify(unescape_html(title)))
        result.append(f'<h{level} id="{slug}">{title}</h{level}>')

    return result


def render_inline(segments: list[str]) -> list[str]:
    """Apply inline span rules to every non-code segment."""
    result = []
    for segment in segments:
        if segment.startswith(CODE_BLOCK_OPEN):
            result.append(segment)
            continue

        # Only the heading text is rewritten, never its id attribute
        match = HEADING_ELEMENT_PATTERN.match(segment)
        if match:
            open_tag, content, close_tag = match.groups()
            result.append(open_tag + render_inline_line(content) + close_tag)
        else:
            result.append(render_inline_line(segment))
    return result


def render_inline_line(line: str) -> str:
    """Render inline spans on a single line.

    Inline code is matched first and parked behind placeholder tokens while
    the remaining rules run over the whole line, so spans may wrap code
    (`**`x`**`, `[`x`](url)`) but never rewrite its content.
    """
    code_spans = []

    def park(match):
        code_spans.append(f"<code>{match.group(1)}</code>")
        return f"{PLACEHOLDER}{len(code_spans) - 1}{PLACEHOLDER}"

    line = INLINE_CODE_PATTERN.sub(park, line)
    for pattern, template in SPAN_RULES:
        line = pattern.sub(template, line)

    if not code_spans:
        return line
    return PLACEHOLDER_PATTERN.sub(lambda m: code_spans[int(m.group(1))], line)


def render_blocks(segments: list[str]) -> str:
    """Group segments into paragraphs and lists.

    Blank lines delimit blocks. Headings and code blocks always stand
    alone. A block made only of "- " lines becomes one <ul>; any other
    block becomes one <p> with <br/> line breaks.
    """
    blocks: list[list[str]] = []
    current: list[str] = []

    def flush():
        nonlocal current
        if current:
            blocks.append(current)
            current = []

    for segment in segments:
        segment = segment.replace("\r\n", "\n")
        if not segment.strip():
            flush()
        elif segment.startswith(CODE_BLOCK_OPEN) or segment.startswith(HEADING_OPEN):
            flush()
            blocks.append([segment])
        else:
            current.append(segment)
    flush()

    return "\n".join(_render_block(lines) for lines in blocks)


def _render_block(lines: list[str]) -> str:
    if lines[0].startswith(CODE_BLOCK_OPEN) or lines[0].startswith(HEADING_OPEN):
        return lines[0]

    stripped = [line.strip() for line in lines]
    if all(line.startswith(BULLET) for line in stripped):
        items = "\n".join(f"<li>{line[len(BULLET):]}</li>" for line in stripped)
        return f"<ul>\n{items}\n</ul>"

    text = "\n".join(lines).strip().replace("\n", "<br/>")
    return f"<p>{text}</p>"
