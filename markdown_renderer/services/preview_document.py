"""Full HTML document shell around a rendered preview fragment."""

import html
import json
from typing import Callable
from urllib.parse import urlsplit

from .asset_cache import AssetCache


THEMES = ("system", "light", "dark")

# Schemes handed to the desktop instead of navigating the preview
EXTERNAL_SCHEMES = {"http", "https", "mailto"}

# HTML template; CSS and JS are inlined from the asset cache
HTML_TEMPLATE = """<!doctype html>
<html{theme_attr}>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  {base_tag}
  <style>
{css}
  </style>
  <script>
{js}
  </script>
</head>
<body>
  <main class="page">{body}</main>
</body>
</html>
"""


def build_preview_document(
    body_html: str,
    base_url: str | None = None,
    theme: str = "system",
    sanitizer: Callable[[str], str] | None = None,
) -> str:
    """Wrap a rendered fragment in a complete, styled HTML document.

    Args:
        body_html: Fragment from render_html()
        base_url: Optional base URL for resolving relative links and images
        theme: "system", "light" or "dark"; unknown values mean "system"
        sanitizer: Optional callable applied to the fragment before embedding

    Returns:
        The full HTML document
    """
    if sanitizer is not None:
        body_html = sanitizer(body_html)

    assets = AssetCache()
    theme_attr = f' data-theme="{theme}"' if theme in ("light", "dark") else ""
    base_tag = f'<base href="{html.escape(base_url, quote=True)}">' if base_url else ""

    return HTML_TEMPLATE.format(
        theme_attr=theme_attr,
        base_tag=base_tag,
        css=assets.get("preview.css"),
        js=assets.get("preview.js"),
        body=body_html,
    )


def set_body_script(body_html: str) -> str:
    """JavaScript that swaps the body of an already loaded preview document."""
    return f"window.__setBody({json.dumps(body_html)});"


def scroll_to_progress_script(progress: float) -> str:
    """JavaScript that scrolls the preview to a fraction of its height."""
    clamped = min(max(progress, 0.0), 1.0)
    return f"window.__scrollToProgress({clamped});"


def scroll_to_anchor_script(anchor_id: str) -> str:
    """JavaScript that scrolls the preview to a heading id."""
    return f"window.__scrollToAnchor({json.dumps(anchor_id)});"


def link_policy(uri: str, open_external: bool = True) -> str:
    """Decide how a clicked preview link is handled.

    Returns "open-external" for web and mail links (when enabled),
    "allow" for anchors and local files.
    """
    scheme = urlsplit(uri).scheme.lower()
    if open_external and scheme in EXTERNAL_SCHEMES:
        return "open-external"
    return "allow"
