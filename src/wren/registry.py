"""Route registry — maps route roots to their strategies.

Mutable during setup, frozen at the first lookup. After that it is
read-only and safe to share between every build and request cycle
without synchronization.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator

from wren.errors import ConfigurationError
from wren.paths import PathEntry, is_under, normalize_path
from wren.strategy.template import RouteStrategy

logger = logging.getLogger("wren.registry")


def templates_map(*strategies: RouteStrategy) -> dict[str, RouteStrategy]:
    """Build a ``{root: strategy}`` mapping from the given strategies.

    Raises:
        ConfigurationError: If two strategies share a root.
    """
    mapping: dict[str, RouteStrategy] = {}
    for strategy in strategies:
        if strategy.path in mapping:
            msg = f"Duplicate route root {strategy.path!r}."
            raise ConfigurationError(msg)
        mapping[strategy.path] = strategy
    return mapping


class RouteRegistry:
    """Process-wide mapping of route roots to strategies.

    Usage::

        registry = RouteRegistry()
        registry.add(RouteStrategy("about"))
        registry.add(blog)
        match = registry.match("blog/hello-world")

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one caller compiles the lookup order,
        even if the first lookups race.
    """

    __slots__ = ("_by_root", "_freeze_lock", "_frozen", "_prefix_order")

    def __init__(self, strategies: Iterable[RouteStrategy] = ()) -> None:
        self._by_root: dict[str, RouteStrategy] = {}
        self._prefix_order: tuple[RouteStrategy, ...] = ()
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self.extend(strategies)

    # -- Setup --

    def add(self, strategy: RouteStrategy) -> RouteStrategy:
        """Register *strategy*. Must be called before the first lookup."""
        self._check_not_frozen()
        if strategy.path in self._by_root:
            msg = f"Duplicate route root {strategy.path!r}."
            raise ConfigurationError(msg)
        self._by_root[strategy.path] = strategy
        return strategy

    def extend(self, strategies: Iterable[RouteStrategy]) -> None:
        for strategy in strategies:
            self.add(strategy)

    def freeze(self) -> None:
        """Make the registry read-only. Idempotent."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            # Longest roots first so nested routes win over their parents
            self._prefix_order = tuple(
                sorted(
                    (
                        s
                        for s in self._by_root.values()
                        if s.uses_build_paths() or s.uses_incremental()
                    ),
                    key=lambda s: len(s.path.split("/")) if s.path else 0,
                    reverse=True,
                )
            )
            self._frozen = True
            logger.debug("Route registry frozen with %d routes", len(self._by_root))

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Lookup --

    def get(self, root: str) -> RouteStrategy | None:
        """Return the strategy registered at exactly *root*."""
        self.freeze()
        return self._by_root.get(normalize_path(root))

    def match(self, path: str) -> tuple[PathEntry, RouteStrategy] | None:
        """Resolve a page path to its route.

        An exact root match wins. Otherwise the deepest root that *path*
        lies beneath is used, considering only routes that enumerate
        build paths or generate pages incrementally (the only routes with
        pages below their root).
        """
        self.freeze()
        path = normalize_path(path)
        strategy = self._by_root.get(path)
        if strategy is not None:
            return PathEntry(strategy.path), strategy
        for strategy in self._prefix_order:
            if is_under(strategy.path, path):
                return PathEntry.from_full(strategy.path, path), strategy
        return None

    def __iter__(self) -> Iterator[RouteStrategy]:
        self.freeze()
        return iter(self._by_root.values())

    def __len__(self) -> int:
        return len(self._by_root)

    def __contains__(self, root: object) -> bool:
        return isinstance(root, str) and normalize_path(root) in self._by_root

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register routes after the registry has been used. "
                "Register every route before building or serving."
            )
            raise RuntimeError(msg)
