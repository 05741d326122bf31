"""Markdown Renderer - command-line front end for the preview and outline."""

import argparse
import json
import sys
from pathlib import Path

from .services.document_io import atomic_write_text, read_markdown
from .services.markdown_html import render_html
from .services.markdown_outline import extract_outline
from .services.preview_document import THEMES, build_preview_document
from .version import __version__


def _read_input(path: str) -> str | None:
    """Read the input document, printing an error on failure."""
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        print(f"Error: File does not exist: {path}", file=sys.stderr)
        return None
    try:
        return read_markdown(file_path)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def _resolve_theme(theme: str | None) -> str:
    if theme is not None:
        return theme
    from .services.settings_service import SettingsService
    return SettingsService.get_instance().get("appearance.theme", "system")


def _render_document(text: str, source: Path, standalone: bool, theme: str | None) -> str:
    body = render_html(text)
    if not standalone:
        return body
    base_url = source.expanduser().resolve().parent.as_uri() + "/"
    return build_preview_document(body, base_url=base_url, theme=_resolve_theme(theme))


def _write_output(content: str, output: str | None):
    if output is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
    else:
        atomic_write_text(Path(output).expanduser(), content)


def cmd_render(args) -> int:
    text = _read_input(args.file)
    if text is None:
        return 1
    _write_output(_render_document(text, Path(args.file), args.standalone, args.theme), args.output)
    return 0


def cmd_outline(args) -> int:
    text = _read_input(args.file)
    if text is None:
        return 1

    entries = extract_outline(text)
    if args.json:
        print(json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False))
    else:
        for entry in entries:
            indent = "  " * (entry.level - 1)
            print(f"{indent}{entry.title}  (line {entry.source_line + 1}, {entry.anchor})")
    return 0


def cmd_watch(args) -> int:
    """Re-render the standalone preview whenever the document changes."""
    import gi

    gi.require_version("GLib", "2.0")
    from gi.repository import GLib

    from .services.file_monitor_service import FileMonitorService

    source = Path(args.file).expanduser()
    if _read_input(args.file) is None:
        return 1

    def rerender(*_args):
        try:
            text = read_markdown(source)
        except OSError as e:
            # File may be mid-save; the next change event retries
            print(f"Failed to read {source}: {e}", file=sys.stderr)
            return
        _write_output(_render_document(text, source, True, args.theme), args.output)
        print(f"Rendered {source} -> {args.output}")

    rerender()
    monitor = FileMonitorService(source)
    monitor.connect("changed", rerender)

    loop = GLib.MainLoop()
    try:
        loop.run()
    except KeyboardInterrupt:
        pass
    finally:
        monitor.shutdown()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markdown-renderer",
        description="Render Markdown previews and document outlines",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a document to HTML")
    render.add_argument("file", help="Markdown file")
    render.add_argument("--output", "-o", help="Write to this file instead of stdout")
    render.add_argument(
        "--standalone", "-s",
        action="store_true",
        help="Emit a complete styled HTML document",
    )
    render.add_argument("--theme", choices=THEMES, help="Preview theme (standalone only)")
    render.set_defaults(func=cmd_render)

    outline = subparsers.add_parser("outline", help="Print the heading outline")
    outline.add_argument("file", help="Markdown file")
    outline.add_argument("--json", action="store_true", help="Print entries as JSON")
    outline.set_defaults(func=cmd_outline)

    watch = subparsers.add_parser("watch", help="Re-render a preview file on every change")
    watch.add_argument("file", help="Markdown file")
    watch.add_argument("--output", "-o", required=True, help="HTML file to keep updated")
    watch.add_argument("--theme", choices=THEMES, help="Preview theme")
    watch.set_defaults(func=cmd_watch)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
