"""devmount CLI — resolve request URLs against build output on disk.

Entry point registered as ``devmount`` in ``pyproject.toml``::

    [project.scripts]
    devmount = "devmount.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``devmount`` command."""
    parser = argparse.ArgumentParser(
        prog="devmount",
        description="devmount — resolve dev-server request URLs onto build output files.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- devmount resolve -------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a URL to an output file")
    resolve_parser.add_argument("url", help="Request URL (e.g. /assets/app.js)")
    resolve_parser.add_argument(
        "--mount",
        action="append",
        default=None,
        metavar="PUBLIC=OUTPUT",
        help="Mount point, repeatable, first match wins (default: auto=.)",
    )
    index_group = resolve_parser.add_mutually_exclusive_group()
    index_group.add_argument("--index", default=None, help="Index document name (default: index.html)")
    index_group.add_argument(
        "--no-index",
        action="store_true",
        help="Do not fall back to an index document for directories",
    )
    resolve_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution details to stderr",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "resolve":
        from devmount.cli._resolve import parse_mounts, run_resolve

        try:
            args.mounts = parse_mounts(args.mount or ["auto=."])
        except ValueError as exc:
            resolve_parser.error(str(exc))

        run_resolve(args)
