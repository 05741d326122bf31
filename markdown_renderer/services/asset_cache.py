"""Static asset cache for the preview document."""

from importlib import resources
from typing import ClassVar


class AssetCache:
    """Singleton cache for packaged preview assets (CSS, JS).

    Assets are immutable for a given install, so each one is read once
    per process and never invalidated.
    """

    _instance: ClassVar["AssetCache | None"] = None

    PACKAGE: ClassVar[str] = "markdown_renderer.assets"

    def __new__(cls) -> "AssetCache":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._cache = {}
        return cls._instance

    def get(self, name: str) -> str:
        """Get an asset's text by file name.

        Raises:
            KeyError: If no such asset is packaged.
        """
        if name not in self._cache:
            resource = resources.files(self.PACKAGE).joinpath(name)
            if not resource.is_file():
                raise KeyError(name)
            self._cache[name] = resource.read_text(encoding="utf-8")
        return self._cache[name]

    def has_asset(self, name: str) -> bool:
        """Check if an asset is packaged."""
        try:
            self.get(name)
        except KeyError:
            return False
        return True

    @property
    def cached_count(self) -> int:
        """Number of assets loaded so far."""
        return len(self._cache)

    def clear(self) -> None:
        """Forget loaded assets."""
        self._cache.clear()
