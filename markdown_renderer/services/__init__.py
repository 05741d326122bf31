from .slugs import SlugRegistry, slugify, parse_heading_line, is_fence_line
from .markdown_outline import extract_outline
from .markdown_html import render_html, escape_html
from .config_path import get_config_dir, get_data_dir
from .document_io import read_markdown, write_markdown, is_markdown_file, DocumentReadError
from .draft_store import DraftStore
from .asset_cache import AssetCache
from .preview_document import build_preview_document, set_body_script, link_policy

# Workspace indexing (pathspec) and the GObject-based services (SettingsService,
# FileMonitorService, PreviewScheduler, DraftAutosaver, WorkspaceService) are
# imported from their own modules.

__all__ = [
    "SlugRegistry",
    "slugify",
    "parse_heading_line",
    "is_fence_line",
    "extract_outline",
    "render_html",
    "escape_html",
    "get_config_dir",
    "get_data_dir",
    "read_markdown",
    "write_markdown",
    "is_markdown_file",
    "DocumentReadError",
    "DraftStore",
    "AssetCache",
    "build_preview_document",
    "set_body_script",
    "link_policy",
]
