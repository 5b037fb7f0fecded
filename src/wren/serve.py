"""Request phase — resolve the state for a page and render it.

Per request, for the matched route:

1. Read the cached page. Missing pages under an incremental route are
   generated now and cached for later requests; anything else missing
   is a 404. The root of a build-paths route is never generated on
   demand, it has to be enumerated.
2. Check the revalidation policy. A stale page is regenerated once, no
   matter how many requests notice, and swapped into the store whole.
   When a predicate throttled by time declines, the page is stored again
   with a new check stamp so the next check waits a full interval.
3. Generate request state, if the route has any, and reconcile it with
   the cached build state.
4. Render, or serve the prerendered markup when nothing is per-request.

Failures propagate typed. ``status_for`` turns them into an HTTP status
for whatever transport sits in front.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from wren._internal.types import Clock
from wren.build import generate_page
from wren.config import EngineConfig
from wren.errors import NotFound, status_for
from wren.paths import PathEntry
from wren.registry import RouteRegistry
from wren.render import RenderExecutor, render_with_strategy, run_renderer
from wren.revalidation import RevalidationPolicy, utc_now
from wren.store.base import CachedPage, StateStore
from wren.strategy.states import States
from wren.strategy.template import RouteStrategy

logger = logging.getLogger("wren.serve")


@dataclass(frozen=True, slots=True)
class RenderedPage:
    """The outcome of one request: resolved state plus markup."""

    path: str
    route: str
    state: str | None
    html: str


class PageServer:
    """Serves pages from a frozen registry and a state store.

    Usage::

        server = PageServer(registry, store)
        page = await server.get_page("blog/hello-world", request)

    Holds no per-request state; safe to call concurrently for any paths.
    """

    __slots__ = ("_clock", "_config", "_policy", "_registry", "_renderer", "_store")

    def __init__(
        self,
        registry: RouteRegistry,
        store: StateStore,
        *,
        renderer: RenderExecutor = render_with_strategy,
        clock: Clock | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        registry.freeze()
        self._registry = registry
        self._store = store
        self._renderer = renderer
        self._clock = clock or utc_now
        self._policy = RevalidationPolicy(self._clock)
        self._config = config or EngineConfig()

    async def get_page(self, path: str, request: Any = None) -> RenderedPage:
        """Resolve and render the page at *path*.

        Raises:
            NotFound: No route matches, or the page was never built and
                cannot be generated on demand.
            RenderFnFailed: A strategy function failed.
            BothStatesDefined: Build and request state both exist and the
                route has no amalgamator.
        """
        match = self._registry.match(path)
        if match is None:
            raise NotFound(f"No route matches {path!r}")
        entry, strategy = match

        page, fresh = await self._cached_page(strategy, entry)
        if not fresh:
            page = await self._revalidate(strategy, entry, page)

        if not strategy.uses_request_state():
            return RenderedPage(entry.full, strategy.path, page.state, page.html or "")

        request_state = await strategy.get_request_state(
            entry.strategy_path(strategy.uses_build_paths()), request
        )
        states = States(build_state=page.state, request_state=request_state)
        if states.both_defined() and strategy.can_amalgamate():
            state = await strategy.amalgamate_states(states)
        else:
            state = states.get_defined(entry.full)

        html = await run_renderer(self._renderer, strategy, state)
        return RenderedPage(entry.full, strategy.path, state, html)

    def status_for(self, exc: BaseException) -> int:
        """HTTP status for a failure raised by ``get_page``."""
        return status_for(exc, self._config)

    # -- Internals --

    async def _generate(self, strategy: RouteStrategy, entry: PathEntry) -> CachedPage:
        return await generate_page(strategy, entry, renderer=self._renderer, clock=self._clock)

    async def _cached_page(
        self, strategy: RouteStrategy, entry: PathEntry
    ) -> tuple[CachedPage, bool]:
        """The stored page, generating it first if the route allows that.

        Returns the page and whether it was generated by this call.
        """
        page = await self._store.get(entry.full)
        if page is not None:
            return page, False
        if entry.is_root or not strategy.uses_incremental():
            raise NotFound(f"Page {entry.full!r} was not prerendered")

        async def _produce() -> CachedPage:
            # Another request may have finished generating it already
            existing = await self._store.get(entry.full)
            if existing is not None:
                return existing
            logger.debug("Generating %s on demand", entry.full)
            return await self._generate(strategy, entry)

        return await self._store.coalesce(entry.full, _produce), True

    async def _revalidate(
        self, strategy: RouteStrategy, entry: PathEntry, page: CachedPage
    ) -> CachedPage:
        policy = self._policy
        if not await policy.is_stale(strategy, page):
            if policy.throttles_logic(strategy) and policy.interval_elapsed(strategy, page):
                # The predicate ran and declined; wait a full interval before asking again
                return await self._restart_interval(entry, page)
            return page

        async def _produce() -> CachedPage:
            # Skip if the stale record was already replaced
            current = await self._store.get(entry.full)
            if current is not None and current is not page:
                return current
            logger.debug("Revalidating %s", entry.full)
            return await self._generate(strategy, entry)

        return await self._store.coalesce(entry.full, _produce)

    async def _restart_interval(self, entry: PathEntry, page: CachedPage) -> CachedPage:
        checked = self._policy.restart_interval(page)
        # Never overwrite a record that was regenerated in the meantime
        if await self._store.get(entry.full) is page:
            await self._store.put(checked)
        return checked
