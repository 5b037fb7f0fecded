"""In-process state store.

Records live in a plain dict and are replaced by assignment, so a reader
gets either the previous ``CachedPage`` or the new one, never a mix.
Regeneration is deduplicated per path with ``Singleflight``.
"""

import logging

from wren.store.base import CachedPage, PageProducer
from wren.store.singleflight import Singleflight

logger = logging.getLogger("wren.store")


class MemoryStateStore:
    """Dict-backed ``StateStore`` for a single process.

    Usage::

        store = MemoryStateStore()
        await build_all(registry, store)
        page = await store.get("blog/a")
    """

    __slots__ = ("_flight", "_pages")

    def __init__(self) -> None:
        self._pages: dict[str, CachedPage] = {}
        self._flight = Singleflight()

    async def get(self, path: str) -> CachedPage | None:
        return self._pages.get(path)

    async def put(self, page: CachedPage) -> None:
        self._pages[page.path] = page

    async def paths(self) -> frozenset[str]:
        return frozenset(self._pages)

    async def coalesce(self, path: str, producer: PageProducer) -> CachedPage:
        """Produce and store a page for *path*, at most once concurrently.

        Callers arriving while a producer runs wait for it and receive the
        page it stored. If the producer fails nothing is stored and every
        waiter sees the error.
        """

        async def _produce_and_store() -> CachedPage:
            page = await producer()
            self._pages[path] = page
            logger.debug("Stored regenerated page %s", path)
            return page

        return await self._flight.do(path, _produce_and_store)

    def snapshot(self) -> dict[str, CachedPage]:
        """A point-in-time copy of every stored page."""
        return dict(self._pages)

    def __len__(self) -> int:
        return len(self._pages)
