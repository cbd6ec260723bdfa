"""Mount points and the registry that supplies them.

A mount point pairs a public URL prefix with the output directory that
backs it. The registry hands the resolver an ordered sequence; the first
mount whose prefix matches and whose file exists wins.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

# Public path value meaning "serve from the root"
AUTO_PUBLIC_PATH = "auto"


@dataclass(frozen=True, slots=True)
class MountPoint:
    """A public URL prefix served from an output directory.

    ``public_path`` may be ``"auto"`` or empty, both of which mean ``"/"``::

        MountPoint(public_path="/assets/", output_path="/dist")
    """

    public_path: str
    output_path: str

    @property
    def normalized_public_path(self) -> str:
        """The public path with ``"auto"`` and ``""`` mapped to ``"/"``."""
        if not self.public_path or self.public_path == AUTO_PUBLIC_PATH:
            return "/"
        return self.public_path


@runtime_checkable
class PathRegistry(Protocol):
    """Supplies the ordered mount points for a context.

    The resolver treats what it gets as already validated.
    """

    def get_paths(self) -> Sequence[MountPoint]: ...


class StaticPathRegistry:
    """A registry over a fixed, ordered set of mount points."""

    __slots__ = ("_mount_points",)

    def __init__(self, mount_points: Iterable[MountPoint]) -> None:
        self._mount_points = tuple(mount_points)

    def get_paths(self) -> tuple[MountPoint, ...]:
        return self._mount_points

    def __repr__(self) -> str:
        return f"StaticPathRegistry({list(self._mount_points)!r})"
