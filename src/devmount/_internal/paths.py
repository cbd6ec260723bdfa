"""POSIX path joining for output filesystem paths.

Output filesystems are addressed with forward slashes regardless of the
host OS. ``join_paths`` glues every non-empty part with ``/`` and then
collapses ``.``, ``..`` and repeated separators. Unlike ``posixpath.join``,
an absolute later part does not discard the parts before it, so a residual
like ``"/app.js"`` stays under its output directory.
"""

import posixpath


def join_paths(*parts: str) -> str:
    """Join and normalize path parts, keeping a trailing separator."""
    joined = "/".join(part for part in parts if part)
    if not joined:
        return "."

    normalized = posixpath.normpath(joined)
    # normpath keeps exactly two leading slashes; a filesystem path never wants them
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    if joined.endswith("/") and not normalized.endswith("/"):
        normalized += "/"
    return normalized
