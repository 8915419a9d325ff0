"""Waypost CLI — route tree introspection.

Entry point registered as ``waypost`` in ``pyproject.toml``::

    [project.scripts]
    waypost = "waypost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypost`` command."""
    parser = argparse.ArgumentParser(
        prog="waypost",
        description="Waypost — lifecycle hooks for component routers.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypost routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List configured routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp.routes:tree)",
    )

    # -- waypost resolve --------------------------------------------------
    resolve_parser = subparsers.add_parser(
        "resolve", help="Show which routes a path activates"
    )
    resolve_parser.add_argument(
        "app",
        help="Import string (e.g. myapp.routes:tree)",
    )
    resolve_parser.add_argument("path", help="Target path (e.g. /crises/1)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waypost.cli._routes import run_routes

        run_routes(args)
    elif args.command == "resolve":
        from waypost.cli._routes import run_resolve

        run_resolve(args)
