"""Bundle discovery implementations.

A bundle is a unit contributing an extra container document. Discovery yields
bundle name to bundle root; the merge engine looks for the bundle's container
file relative to that root.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from importlib.metadata import entry_points
from pathlib import Path

logger = logging.getLogger(__name__)

BUNDLE_ENTRY_POINT_GROUP = "servicewire.bundles"


class StaticBundleDiscovery:
    """Bundle discovery over a fixed mapping, in insertion order."""

    def __init__(self, bundles: Mapping[str, Path | str] | None = None) -> None:
        self._bundles: dict[str, Path | str] = dict(bundles or {})

    def bundles(self) -> Mapping[str, Path | str]:
        return dict(self._bundles)


class EntryPointBundleDiscovery:
    """Discover bundles from installed package entry points.

    Each entry point in the group loads to either a path-like bundle root, a
    module (its directory is the root), or a callable returning the root.
    Discovery is lazy and happens once.

    Example (in a bundle's ``pyproject.toml``):
        ```toml
        [project.entry-points."servicewire.bundles"]
        blog = "blog_bundle:BUNDLE_ROOT"
        ```

    """

    def __init__(self, group: str = BUNDLE_ENTRY_POINT_GROUP) -> None:
        self._group = group
        self._bundles: dict[str, Path] | None = None

    def bundles(self) -> Mapping[str, Path]:
        if self._bundles is None:
            self._bundles = self._discover()
        return dict(self._bundles)

    def _discover(self) -> dict[str, Path]:
        discovered: dict[str, Path] = {}
        for ep in entry_points(group=self._group):
            target = ep.load()
            root = _bundle_root(target)
            if root is None:
                logger.warning(
                    "Entry point '%s' in group '%s' does not name a bundle root",
                    ep.name,
                    self._group,
                )
                continue
            discovered[ep.name] = root
            logger.debug("Discovered bundle '%s' at %s", ep.name, root)
        return discovered


def _bundle_root(target: object) -> Path | None:
    if isinstance(target, str | Path):
        return Path(target)
    module_file = getattr(target, "__file__", None)
    if isinstance(module_file, str):
        return Path(module_file).parent
    if callable(target):
        return _bundle_root(target())
    return None
