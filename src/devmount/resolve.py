"""Request URL to output filename resolution.

Maps a request URL onto the build's output filesystem by walking the
mount points in order::

    /assets/app.js  with  MountPoint("/assets/", "/dist")
        -> strip "/assets/"     -> "app.js"
        -> decode and join      -> "/dist/app.js"
        -> stat: regular file   -> "/dist/app.js"

Directories fall back to an index document. Each mount either produces a
filename or nothing; the first filename wins. Parse and stat failures
count as "nothing" for that mount, so ``resolve_filename`` never raises
and an unresolved URL looks the same whatever the cause.

Prefix matching is a plain string test, not segment aware: a mount at
``/pub`` also claims ``/public/x``.
"""

import logging
from collections.abc import Callable, Iterable
from typing import TypeAlias
from urllib.parse import unquote

from devmount._internal.paths import join_paths
from devmount._internal.urls import ParseCache, ParsedUrl, default_cache
from devmount.errors import UrlParseError
from devmount.filesystem import StatCapability, StatResult
from devmount.mounts import MountPoint

logger = logging.getLogger("devmount.resolve")

Parser: TypeAlias = Callable[[str], ParsedUrl]

DEFAULT_INDEX = "index.html"


def index_document(index: bool | str | None) -> str | None:
    """Name of the index document for an ``index`` option, or None if disabled.

    ``None`` and ``True`` select ``"index.html"``; ``False`` and ``""``
    disable the fallback; any other string is used as-is.
    """
    if index is None or index is True:
        return DEFAULT_INDEX
    if not index:
        return None
    return index


def resolve_filename(
    url: str,
    mount_points: Iterable[MountPoint],
    filesystem: StatCapability,
    index: bool | str | None = None,
    *,
    cache: ParseCache | None = None,
) -> str | None:
    """Resolve *url* to a filename on *filesystem*, or None.

    Args:
        url: The request target (path, query and fragment).
        mount_points: Ordered mount points; earlier ones take precedence.
        filesystem: Anything with a ``stat(path)`` method.
        index: Index document option, see ``index_document``.
        cache: Parse cache to use. Defaults to the process-wide cache.

    Returns:
        The resolved filename, or None when no mount produced one.
    """
    parse = (cache if cache is not None else default_cache).parse
    request = _parse(parse, url)
    if request is None or not request.pathname:
        return None

    index_name = index_document(index)
    for mount in mount_points:
        filename = _resolve_mount(request, mount, filesystem, index_name, parse)
        if filename is not None:
            return filename

    logger.debug("No mount point resolved %r", url)
    return None


def _resolve_mount(
    request: ParsedUrl,
    mount: MountPoint,
    filesystem: StatCapability,
    index_name: str | None,
    parse: Parser,
) -> str | None:
    """Try a single mount point. Returns the filename or None."""
    public = _parse(parse, mount.normalized_public_path)
    if public is None:
        return None
    if not request.pathname.startswith(public.pathname):
        return None

    # "/assets/css/site.css" under "/assets/" -> "css/site.css"
    residual = request.pathname[len(public.pathname) :]
    filename = mount.output_path
    if residual:
        filename = join_paths(mount.output_path, unquote(residual))

    stats = _stat(filesystem, filename)
    if stats is None:
        return None
    if stats.is_file():
        return filename
    if not stats.is_dir() or index_name is None:
        return None

    filename = join_paths(filename, index_name)
    stats = _stat(filesystem, filename)
    if stats is not None and stats.is_file():
        return filename
    return None


def _parse(parse: Parser, raw: str) -> ParsedUrl | None:
    try:
        return parse(raw)
    except UrlParseError as exc:
        logger.debug("Skipping unparsable URL %r: %s", raw, exc)
        return None


def _stat(filesystem: StatCapability, path: str) -> StatResult | None:
    # Any failure is a miss; backends may signal it with their own error types
    try:
        return filesystem.stat(path)
    except OSError:
        return None
    except Exception as exc:
        logger.debug("stat(%r) failed: %r", path, exc)
        return None
