"""``waypost routes`` and ``waypost resolve`` — inspect a route tree."""

import argparse
import sys

from waypost.cli._resolve import resolve_tree
from waypost.errors import RouteNotFound
from waypost.routing.tree import RouteTree
from waypost.state import RouterState


def _load(import_string: str) -> RouteTree:
    try:
        return resolve_tree(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _component_name(factory: object) -> str:
    return getattr(factory, "__qualname__", None) or getattr(factory, "__name__", str(factory))


def _print_table(header: tuple[str, str, str], rows: list[tuple[str, str, str]]) -> None:
    width_a = max(len(header[0]), *(len(r[0]) for r in rows))
    width_b = max(len(header[1]), *(len(r[1]) for r in rows))
    fmt = f"{{:<{width_a}}}  {{:<{width_b}}}  {{}}"
    print(fmt.format(*header))
    sep_len = width_a + width_b + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))


def run_routes(args: argparse.Namespace) -> None:
    """Print every configured route: pattern, name, and component."""
    tree = _load(args.app)
    nodes = tree.nodes
    if not nodes:
        print("No routes configured.")
        return

    rows: list[tuple[str, str, str]] = []
    for node in nodes:
        indent = "  " * (node.depth - 1)
        pattern = node.key or "/"
        rows.append(
            (
                f"{indent}{pattern}",
                node.config.name or "",
                _component_name(node.config.component),
            )
        )
    _print_table(("PATTERN", "NAME", "COMPONENT"), rows)


def run_resolve(args: argparse.Namespace) -> None:
    """Print the chain of routes *args.path* activates and its params."""
    tree = _load(args.app)
    try:
        resolution = tree.resolve(RouterState.from_path(args.path))
    except RouteNotFound as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not resolution.placements:
        print(f"{args.path} matches the root; no components are activated.")
        return

    rows = [
        (
            placement.node.key,
            _component_name(placement.node.config.component),
            ", ".join(f"{k}={v}" for k, v in placement.params.items()),
        )
        for placement in resolution.placements
    ]
    _print_table(("PATTERN", "COMPONENT", "PARAMS"), rows)
