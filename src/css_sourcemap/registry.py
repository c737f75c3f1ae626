"""Build-scoped registries linking modules, map assets and output assets.

Both registries are append-only and keyed, so hooks completing out of
order never disturb each other. Insertion order per key is the order
modules are merged in.
"""

from collections.abc import Iterator

from css_sourcemap.log import get_logger

logger = get_logger(__name__)


class ModuleMapRegistry:
    """Reference handles of the map asset emitted for each style module."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._handles: dict[str, str] = {}

    def register(self, module_id: str, handle: str) -> None:
        """Record the map asset handle for a module.

        A module transformed again (e.g. in watch mode) keeps only its
        latest handle.

        Args:
            module_id: Id of the transformed module.
            handle: Reference handle returned by the host on emission.

        """
        self._handles[module_id] = handle
        logger.debug("Registered map %s for module %s", handle, module_id)

    def get(self, module_id: str) -> str | None:
        """Look up the map asset handle for a module.

        Args:
            module_id: Id of the module.

        Returns:
            The handle, or None if no map was emitted for the module.

        """
        return self._handles.get(module_id)

    def __contains__(self, module_id: object) -> bool:
        """Check whether a map was emitted for ``module_id``."""
        return module_id in self._handles

    def __len__(self) -> int:
        """Return the number of registered modules."""
        return len(self._handles)


class AssetModuleIndex:
    """Ordered module membership of each output style asset.

    Keys are either the final hash-qualified asset name (hashed builds)
    or the computed pre-hash asset path (builds without hashes).
    """

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._modules: dict[str, list[str]] = {}

    def add(self, asset_key: str, module_id: str) -> None:
        """Append a module to an asset's membership.

        Args:
            asset_key: Pre-hash or post-hash asset key.
            module_id: Id of the contributing module.

        """
        self._modules.setdefault(asset_key, []).append(module_id)
        logger.debug("Associated module %s with asset %s", module_id, asset_key)

    def get(self, asset_key: str) -> list[str]:
        """Get the modules recorded for a key, in insertion order.

        Args:
            asset_key: Pre-hash or post-hash asset key.

        Returns:
            A copy of the membership list, empty if the key is unknown.

        """
        return list(self._modules.get(asset_key, ()))

    def resolve(self, *asset_keys: str) -> list[str]:
        """Get the membership of the first key that has one.

        Args:
            *asset_keys: Candidate keys in lookup order.

        Returns:
            Modules of the first known key, or an empty list.

        """
        for key in asset_keys:
            modules = self._modules.get(key)
            if modules:
                return list(modules)
        return []

    def keys(self) -> Iterator[str]:
        """Iterate over known asset keys in first-seen order."""
        return iter(self._modules)

    def __len__(self) -> int:
        """Return the number of known asset keys."""
        return len(self._modules)
