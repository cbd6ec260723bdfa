"""Middleware configuration.

One frozen dataclass per middleware instance. Mount points, the index
document and the output filesystem are fixed once the context is built.
"""

from dataclasses import dataclass

from devmount.filesystem import OutputFileSystem
from devmount.mounts import AUTO_PUBLIC_PATH, MountPoint


@dataclass(frozen=True, slots=True)
class MiddlewareConfig:
    """Development middleware configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MiddlewareConfig(public_path="/assets/", output_path="/dist", index="app.html")
    """

    # Single mount (ignored when mount_points is set)
    public_path: str = AUTO_PUBLIC_PATH
    output_path: str = "/"

    # Ordered mounts, first match wins
    mount_points: tuple[MountPoint, ...] = ()

    # Index document: None/True -> "index.html", False -> no fallback, str -> that file
    index: bool | str | None = None

    # None -> fresh in-memory filesystem
    output_filesystem: OutputFileSystem | None = None

    # URL parse cache size, None -> unbounded
    url_cache_size: int | None = None

    def resolved_mount_points(self) -> tuple[MountPoint, ...]:
        """The configured mounts, falling back to the single public/output pair."""
        if self.mount_points:
            return self.mount_points
        return (MountPoint(public_path=self.public_path, output_path=self.output_path),)
