"""Wren — per-route rendering strategies for server-rendered sites.

Decides, for every page route, when and how its state is produced: at
build time, on demand, per request, or on a schedule, and how build and
request state are reconciled.

Basic usage::

    from wren import MemoryStateStore, PageServer, RouteRegistry, RouteStrategy, build_all

    registry = RouteRegistry([
        RouteStrategy("about").with_render(render_about),
        RouteStrategy("blog")
        .with_render(render_post)
        .with_build_paths(list_slugs)
        .with_build_state(load_post)
        .with_incremental(True)
        .with_revalidate_after("1h"),
    ])

    store = MemoryStateStore()
    await build_all(registry, store)

    server = PageServer(registry, store)
    page = await server.get_page("blog/hello-world", request)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "BothStatesDefined",
    "BuildReport",
    "CachedPage",
    "ConfigurationError",
    "EngineConfig",
    "ErrorCause",
    "GenerationError",
    "HTTPError",
    "MemoryStateStore",
    "NotFound",
    "PageServer",
    "PathEntry",
    "RenderFnFailed",
    "RenderedPage",
    "RevalidationPolicy",
    "RouteRegistry",
    "RouteStrategy",
    "StateStore",
    "States",
    "TemplateFeatureNotEnabled",
    "WrenError",
    "build_all",
    "build_route",
    "parse_interval",
    "status_for",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "BothStatesDefined": "wren.errors",
    "BuildReport": "wren.build",
    "CachedPage": "wren.store.base",
    "ConfigurationError": "wren.errors",
    "EngineConfig": "wren.config",
    "ErrorCause": "wren.errors",
    "GenerationError": "wren.errors",
    "HTTPError": "wren.errors",
    "MemoryStateStore": "wren.store.memory",
    "NotFound": "wren.errors",
    "PageServer": "wren.serve",
    "PathEntry": "wren.paths",
    "RenderFnFailed": "wren.errors",
    "RenderedPage": "wren.serve",
    "RevalidationPolicy": "wren.revalidation",
    "RouteRegistry": "wren.registry",
    "RouteStrategy": "wren.strategy.template",
    "StateStore": "wren.store.base",
    "States": "wren.strategy.states",
    "TemplateFeatureNotEnabled": "wren.errors",
    "WrenError": "wren.errors",
    "build_all": "wren.build",
    "build_route": "wren.build",
    "parse_interval": "wren.strategy.interval",
    "status_for": "wren.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
