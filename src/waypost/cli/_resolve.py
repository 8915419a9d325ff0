"""Import resolution — resolves ``"module:attribute"`` strings to route trees.

Shared by ``waypost routes`` and ``waypost resolve``.
"""

import importlib

from waypost.navigator import Navigator
from waypost.routing.tree import RouteTree


def resolve_tree(import_string: str) -> RouteTree:
    """Resolve an import string to a ``RouteTree``.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"tree"`` (e.g. ``"myapp"`` resolves to
    ``myapp.tree``).

    The attribute may be a ``RouteTree``, a ``Navigator`` (its tree is
    used), or a factory returning either.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a tree or navigator.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "tree"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, RouteTree | Navigator):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, Navigator):
        return obj.tree
    if not isinstance(obj, RouteTree):
        msg = (
            f"{import_string!r} resolved to {type(obj).__name__}, "
            "not a waypost RouteTree or Navigator"
        )
        raise TypeError(msg)
    return obj
