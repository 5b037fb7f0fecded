"""Build phase — prerender every enumerated page into the store.

For each route: enumerate its paths (or just its root when it has no
build paths), generate build state, render unless the route needs
request state, and persist the result. The same ``generate_page`` step
serves incremental generation and revalidation at request time, so a
page produced on demand is indistinguishable from a prebuilt one.

Build failures are not retried or skipped: the first one cancels the
route's remaining work and propagates, and the caller is expected to
abort the build.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import anyio

from wren._internal.types import Clock
from wren.config import EngineConfig
from wren.paths import PathEntry, normalize_path
from wren.registry import RouteRegistry
from wren.render import RenderExecutor, render_with_strategy, run_renderer
from wren.revalidation import utc_now
from wren.store.base import CachedPage, StateStore
from wren.strategy.template import RouteStrategy

logger = logging.getLogger("wren.build")


@dataclass(frozen=True, slots=True)
class BuildReport:
    """Pages written by a build, keyed by route root."""

    routes: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(len(paths) for paths in self.routes.values())


async def enumerate_paths(strategy: RouteStrategy) -> list[PathEntry]:
    """The pages a route prerenders.

    Routes without build paths have exactly one page, their root. For the
    rest only enumerated paths are built; an enumerated ``""`` stands for
    the root, which is otherwise left out.
    """
    if not strategy.uses_build_paths():
        return [PathEntry(strategy.path)]

    entries: list[PathEntry] = []
    seen: set[str] = set()
    for raw in await strategy.get_build_paths():
        suffix = normalize_path(raw)
        if suffix in seen:
            logger.warning("Route %r enumerated %r more than once", strategy.path, raw)
            continue
        seen.add(suffix)
        entries.append(PathEntry(strategy.path, suffix))
    return entries


async def generate_page(
    strategy: RouteStrategy,
    entry: PathEntry,
    *,
    renderer: RenderExecutor = render_with_strategy,
    clock: Clock = utc_now,
) -> CachedPage:
    """Generate the cacheable part of one page.

    Build state runs if configured. Markup is prerendered only when the
    route has no request state; otherwise it depends on each request and
    is left to the page server.
    """
    state: str | None = None
    if strategy.uses_build_state():
        state = await strategy.get_build_state(entry.strategy_path(strategy.uses_build_paths()))

    html: str | None = None
    if not strategy.uses_request_state():
        html = await run_renderer(renderer, strategy, state)

    return CachedPage(
        path=entry.full,
        route=strategy.path,
        state=state,
        html=html,
        generated_at=clock(),
    )


async def build_route(
    strategy: RouteStrategy,
    store: StateStore,
    *,
    renderer: RenderExecutor = render_with_strategy,
    clock: Clock = utc_now,
    config: EngineConfig | None = None,
) -> tuple[str, ...]:
    """Prerender all of one route's pages into *store*.

    Pages are generated concurrently, at most ``config.build_concurrency``
    at a time. Returns the full paths written, in enumeration order.

    Raises:
        WrenError: The first generation failure; remaining generations
            are cancelled.
        Exception: A store failure, raised as-is after the same
            cancellation.
    """
    config = config or EngineConfig()
    entries = await enumerate_paths(strategy)
    limiter = anyio.CapacityLimiter(config.build_concurrency)
    failures: list[Exception] = []

    async def _build_one(entry: PathEntry) -> None:
        async with limiter:
            try:
                page = await generate_page(strategy, entry, renderer=renderer, clock=clock)
                await store.put(page)
            except Exception as exc:
                failures.append(exc)
                tg.cancel_scope.cancel()
                return
            logger.debug("Built %s", page.path or "/")

    async with anyio.create_task_group() as tg:
        for entry in entries:
            tg.start_soon(_build_one, entry)

    if failures:
        raise failures[0]
    return tuple(entry.full for entry in entries)


async def build_all(
    registry: RouteRegistry,
    store: StateStore,
    *,
    renderer: RenderExecutor = render_with_strategy,
    clock: Clock = utc_now,
    config: EngineConfig | None = None,
) -> BuildReport:
    """Run the build phase for every registered route.

    Raises:
        WrenError: The first failure of any route. Routes already built
            stay in the store; the build as a whole should be treated as
            failed.
    """
    routes: dict[str, tuple[str, ...]] = {}
    for strategy in registry:
        routes[strategy.path] = await build_route(
            strategy, store, renderer=renderer, clock=clock, config=config
        )
        logger.debug("Route %r: %d pages", strategy.path, len(routes[strategy.path]))

    report = BuildReport(routes)
    logger.info("Build finished: %d pages across %d routes", report.total, len(routes))
    return report
