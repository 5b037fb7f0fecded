"""``wren build`` — run the build phase without persisting anything.

Enumerates and generates every prerendered page into an in-memory store,
then prints how many pages each route produced. Exits non-zero on the
first failure so it can gate CI.
"""

import argparse
import logging
import sys
from functools import partial

import anyio

from wren.build import build_all
from wren.cli._resolve import resolve_registry
from wren.config import EngineConfig
from wren.errors import ConfigurationError, RenderFnFailed, WrenError
from wren.store.memory import MemoryStateStore

logger = logging.getLogger("wren.build")


def run_build(args: argparse.Namespace) -> None:
    """Build every route of ``args.registry`` into memory and report."""
    try:
        registry = resolve_registry(args.registry)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    overrides = {} if args.concurrency is None else {"build_concurrency": args.concurrency}
    try:
        config = EngineConfig(log_level=args.log_level, **overrides)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    store = MemoryStateStore()
    try:
        report = anyio.run(partial(build_all, registry, store, config=config))
    except WrenError as exc:
        logger.error("Build failed: %s", exc)
        if isinstance(exc, RenderFnFailed) and exc.__cause__ is not None:
            logger.debug("Underlying error", exc_info=exc.__cause__)
        print(f"Build failed: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    for root, paths in sorted(report.routes.items()):
        print(f"/{root}  {len(paths)} page{'s' if len(paths) != 1 else ''}")
    print(f"{report.total} pages built")
