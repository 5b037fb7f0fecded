"""``wren routes`` — list registered routes.

Resolves an import string to a route registry and prints every route
root with its enabled strategies.
"""

import argparse
import sys

from wren.cli._resolve import resolve_registry


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of ROUTE and STRATEGIES for a registry."""
    try:
        registry = resolve_registry(args.registry)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    strategies = sorted(registry, key=lambda s: s.path)
    if not strategies:
        print("No routes registered.")
        return

    rows = [("/" + s.path, ", ".join(s.describe())) for s in strategies]
    max_route = max(max(len(r[0]) for r in rows), 5)  # "ROUTE" header

    fmt = f"{{:<{max_route}}}  {{}}"
    print(fmt.format("ROUTE", "STRATEGIES"))
    sep_len = max_route + 2 + max(len(r[1]) for r in rows)
    print("-" * min(sep_len, 80))
    for route, strategies_str in rows:
        print(fmt.format(route, strategies_str))
