"""devmount — resolve dev-server request URLs onto a build's output files.

The lookup layer of a development HTTP middleware: match a request URL
against ordered mount points, strip the public prefix, and find the file
(or directory index) on the build's output filesystem.

Basic usage::

    from devmount import MemoryFileSystem, MiddlewareConfig, create_context

    fs = MemoryFileSystem()
    fs.mkdirp("/dist")
    fs.write_file("/dist/app.js", "console.log(1)")

    ctx = create_context(MiddlewareConfig(
        public_path="/assets/", output_path="/dist", output_filesystem=fs,
    ))
    ctx.filename_for("/assets/app.js")  # "/dist/app.js"

Without a context::

    from devmount import MountPoint, resolve_filename

    resolve_filename("/assets/app.js", [MountPoint("/assets/", "/dist")], fs)
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "devmount.errors",
    "DevContext": "devmount.context",
    "DevMountError": "devmount.errors",
    "DiskFileSystem": "devmount.filesystem",
    "FileStat": "devmount.filesystem",
    "MemoryFileSystem": "devmount.filesystem",
    "MiddlewareConfig": "devmount.config",
    "MountPoint": "devmount.mounts",
    "OutputFileSystem": "devmount.filesystem",
    "ParseCache": "devmount._internal.urls",
    "ParsedUrl": "devmount._internal.urls",
    "PathRegistry": "devmount.mounts",
    "ReadinessGate": "devmount.ready",
    "StatCapability": "devmount.filesystem",
    "StaticPathRegistry": "devmount.mounts",
    "UrlParseError": "devmount.errors",
    "create_context": "devmount.context",
    "parse_url": "devmount._internal.urls",
    "resolve_filename": "devmount.resolve",
    "setup_output_filesystem": "devmount.filesystem",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import devmount`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
