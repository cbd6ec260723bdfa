"""``devmount resolve`` — resolve one URL against on-disk mounts."""

import argparse
import logging
import sys

from devmount.filesystem import DiskFileSystem
from devmount.mounts import MountPoint
from devmount.resolve import resolve_filename


def parse_mounts(specs: list[str]) -> tuple[MountPoint, ...]:
    """Parse ``PUBLIC=OUTPUT`` strings into mount points.

    Raises:
        ValueError: If a spec has no ``=`` or an empty output path.
    """
    mounts = []
    for spec in specs:
        public_path, sep, output_path = spec.partition("=")
        if not sep or not output_path:
            msg = f"invalid mount {spec!r}, expected PUBLIC=OUTPUT"
            raise ValueError(msg)
        mounts.append(MountPoint(public_path=public_path, output_path=output_path))
    return tuple(mounts)


def run_resolve(args: argparse.Namespace) -> None:
    """Print the resolved filename, or exit with status 1."""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    index: bool | str | None = False if args.no_index else args.index
    filename = resolve_filename(args.url, args.mounts, DiskFileSystem(), index)
    if filename is None:
        print(f"not found: {args.url}", file=sys.stderr)
        sys.exit(1)
    print(filename)
