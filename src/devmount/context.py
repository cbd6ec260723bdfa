"""Per-middleware context.

Ties one configuration to its output filesystem, mount registry,
readiness gate and URL parse cache. Each context owns its own cache, so
two middlewares in one process do not share parse results.
"""

from dataclasses import dataclass, field
from typing import Any

from devmount._internal.urls import ParseCache
from devmount.config import MiddlewareConfig
from devmount.errors import ConfigurationError
from devmount.filesystem import OutputFileSystem, setup_output_filesystem
from devmount.mounts import PathRegistry, StaticPathRegistry
from devmount.ready import ReadinessGate, ReadyCallback
from devmount.resolve import resolve_filename


@dataclass(slots=True)
class DevContext:
    """Everything a request needs to find its file."""

    config: MiddlewareConfig
    filesystem: OutputFileSystem
    registry: PathRegistry
    gate: ReadinessGate = field(default_factory=ReadinessGate)
    url_cache: ParseCache = field(default_factory=ParseCache)

    def filename_for(self, url: str) -> str | None:
        """Resolve *url* against this context's mounts, or None."""
        return resolve_filename(
            url,
            self.registry.get_paths(),
            self.filesystem,
            self.config.index,
            cache=self.url_cache,
        )

    def ready(self, callback: ReadyCallback, name: str | None = None) -> None:
        """Run *callback* once the build is done. See ``ReadinessGate.ready``."""
        self.gate.ready(callback, name)


def create_context(
    config: MiddlewareConfig | None = None,
    *,
    compiler: Any = None,
    registry: PathRegistry | None = None,
) -> DevContext:
    """Build a ``DevContext`` from *config*.

    Provisions the output filesystem (and assigns it to *compiler*), and
    uses the config's mounts unless an explicit *registry* is given.

    Raises:
        ConfigurationError: If the output filesystem or cache size is invalid.
    """
    config = config or MiddlewareConfig()

    cache_size = config.url_cache_size
    if cache_size is not None and cache_size < 1:
        msg = f"url_cache_size must be a positive integer or None, got {cache_size!r}"
        raise ConfigurationError(msg)

    filesystem = setup_output_filesystem(config, compiler)
    if registry is None:
        registry = StaticPathRegistry(config.resolved_mount_points())

    return DevContext(
        config=config,
        filesystem=filesystem,
        registry=registry,
        url_cache=ParseCache(maxsize=cache_size),
    )
