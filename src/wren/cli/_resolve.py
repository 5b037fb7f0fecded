"""Registry import resolution — resolves ``"module:attribute"`` strings.

Shared by ``wren routes`` and ``wren build`` to locate the route
registry from a user-supplied import string.
"""

import importlib
from collections.abc import Iterable, Mapping

from wren.registry import RouteRegistry
from wren.strategy.template import RouteStrategy


def resolve_registry(import_string: str) -> RouteRegistry:
    """Resolve an import string to a ``RouteRegistry``.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"registry"``.

    The attribute may be a ``RouteRegistry``, a ``{root: strategy}``
    mapping, an iterable of ``RouteStrategy``, or a zero-argument factory
    returning any of those.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is none of the accepted shapes.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "registry"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, (RouteRegistry, RouteStrategy)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, RouteRegistry):
        return obj
    if isinstance(obj, Mapping):
        obj = obj.values()
    if isinstance(obj, Iterable) and not isinstance(obj, (str, bytes)):
        strategies = list(obj)
        if all(isinstance(s, RouteStrategy) for s in strategies):
            return RouteRegistry(strategies)

    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a wren RouteRegistry"
    raise TypeError(msg)
