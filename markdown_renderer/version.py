"""Version management for Markdown Renderer."""

import subprocess
from pathlib import Path

# Base version (update manually at milestones)
__version_base__ = "0.3"


def get_version() -> str:
    """Get full version string: base.commit_count (e.g., 0.3.41)."""
    try:
        result = subprocess.run(
            ["git", "rev-list", "--count", "HEAD"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).parent.parent,
            timeout=5,
        )
        if result.returncode == 0 and result.stdout.strip().isdigit():
            return f"{__version_base__}.{result.stdout.strip()}"
    except (OSError, subprocess.SubprocessError):
        pass

    return f"{__version_base__}.0"


__version__ = get_version()
