"""Output filesystem capability and the two backends devmount ships.

The resolver only ever asks one question of a filesystem: "what is at this
path?" That narrow surface is the ``StatCapability`` protocol. Provisioning
needs a little more (``join`` and ``mkdirp``), captured by
``OutputFileSystem``. Any object with the right shape works; no base class
required.

Backends:
    DiskFileSystem -- the real disk via ``os.stat``
    MemoryFileSystem -- an in-memory tree for builds that never touch disk
"""

from __future__ import annotations

import errno
import os
import posixpath
import stat as stat_module
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Protocol, TypeAlias, runtime_checkable

from devmount._internal.paths import join_paths
from devmount.errors import ConfigurationError

if TYPE_CHECKING:
    from devmount.config import MiddlewareConfig

FileKind: TypeAlias = Literal["file", "directory", "other"]

# Methods a user-supplied output filesystem must provide
_REQUIRED_METHODS = ("stat", "join", "mkdirp")


@runtime_checkable
class StatResult(Protocol):
    """What a successful stat answers."""

    def is_file(self) -> bool: ...
    def is_dir(self) -> bool: ...


@runtime_checkable
class StatCapability(Protocol):
    """Stat-by-path. Failures (missing path, I/O error) raise ``OSError``."""

    def stat(self, path: str) -> StatResult: ...


@runtime_checkable
class OutputFileSystem(StatCapability, Protocol):
    """A filesystem a build can write to and the resolver can read from."""

    def join(self, *parts: str) -> str: ...
    def mkdirp(self, path: str) -> None: ...


@dataclass(frozen=True, slots=True)
class FileStat:
    """Stat result returned by the bundled backends."""

    kind: FileKind
    size: int = 0

    @classmethod
    def from_os(cls, result: os.stat_result) -> FileStat:
        mode = result.st_mode
        if stat_module.S_ISREG(mode):
            return cls(kind="file", size=result.st_size)
        if stat_module.S_ISDIR(mode):
            return cls(kind="directory")
        return cls(kind="other")

    def is_file(self) -> bool:
        return self.kind == "file"

    def is_dir(self) -> bool:
        return self.kind == "directory"


class DiskFileSystem:
    """The host filesystem."""

    __slots__ = ()

    def stat(self, path: str) -> FileStat:
        return FileStat.from_os(os.stat(path))

    def join(self, *parts: str) -> str:
        return join_paths(*parts)

    def mkdirp(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)


class MemoryFileSystem:
    """An in-memory directory tree rooted at ``/``.

    Errors mirror the OS: ``FileNotFoundError`` for missing paths,
    ``NotADirectoryError`` when a file sits where a directory is needed,
    ``IsADirectoryError`` when a directory sits where a file is needed.
    Relative paths are taken relative to the root.

    Usage::

        fs = MemoryFileSystem()
        fs.mkdirp("/dist/assets")
        fs.write_file("/dist/assets/app.js", "console.log(1)")
        fs.stat("/dist/assets/app.js").is_file()  # True
    """

    __slots__ = ("_dirs", "_files", "_lock")

    def __init__(self) -> None:
        self._dirs: set[str] = {"/"}
        self._files: dict[str, bytes] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Capability surface
    # ------------------------------------------------------------------

    def stat(self, path: str) -> FileStat:
        key, trailing = _normalize(path)
        with self._lock:
            data = self._files.get(key)
            if data is not None:
                if trailing:
                    raise _os_error(NotADirectoryError, errno.ENOTDIR, path)
                return FileStat(kind="file", size=len(data))
            if key in self._dirs:
                return FileStat(kind="directory")
            raise self._missing(key, path)

    def join(self, *parts: str) -> str:
        return join_paths(*parts)

    def mkdirp(self, path: str) -> None:
        key, _ = _normalize(path)
        with self._lock:
            if key in self._files:
                raise _os_error(FileExistsError, errno.EEXIST, path)
            current = ""
            for segment in key.strip("/").split("/"):
                if not segment:
                    continue
                current = f"{current}/{segment}"
                if current in self._files:
                    raise _os_error(NotADirectoryError, errno.ENOTDIR, path)
                self._dirs.add(current)

    # ------------------------------------------------------------------
    # File contents
    # ------------------------------------------------------------------

    def write_file(self, path: str, data: bytes | str) -> None:
        """Create or replace a file. The parent directory must exist."""
        key, trailing = _normalize(path)
        if isinstance(data, str):
            data = data.encode("utf-8")
        with self._lock:
            if trailing or key in self._dirs:
                raise _os_error(IsADirectoryError, errno.EISDIR, path)
            parent = posixpath.dirname(key)
            if parent not in self._dirs:
                raise self._missing(parent, path)
            self._files[key] = bytes(data)

    def read_file(self, path: str) -> bytes:
        key, _ = _normalize(path)
        with self._lock:
            data = self._files.get(key)
            if data is not None:
                return data
            if key in self._dirs:
                raise _os_error(IsADirectoryError, errno.EISDIR, path)
            raise self._missing(key, path)

    def exists(self, path: str) -> bool:
        key, _ = _normalize(path)
        return key in self._files or key in self._dirs

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _missing(self, key: str, path: str) -> OSError:
        """The error for an absent *key*: ENOTDIR if an ancestor is a file."""
        parent = posixpath.dirname(key)
        while parent != "/":
            if parent in self._files:
                return _os_error(NotADirectoryError, errno.ENOTDIR, path)
            parent = posixpath.dirname(parent)
        return _os_error(FileNotFoundError, errno.ENOENT, path)

    def __repr__(self) -> str:
        return f"MemoryFileSystem(dirs={len(self._dirs)}, files={len(self._files)})"


def _normalize(path: str) -> tuple[str, bool]:
    """Return the absolute key for *path* and whether it had a trailing slash."""
    if not isinstance(path, str):
        msg = f"path must be a string, got {type(path).__name__}"
        raise TypeError(msg)
    if "\x00" in path:
        msg = "embedded null byte"
        raise ValueError(msg)
    normalized = join_paths("/", path)
    trailing = normalized != "/" and normalized.endswith("/")
    return normalized.rstrip("/") or "/", trailing


def _os_error(cls: type[OSError], code: int, path: str) -> OSError:
    return cls(code, os.strerror(code), path)


def setup_output_filesystem(config: MiddlewareConfig, compiler: Any = None) -> OutputFileSystem:
    """Provision the output filesystem and hand it to the compiler(s).

    Uses ``config.output_filesystem`` when set, after checking it exposes
    ``stat()``, ``join()`` and ``mkdirp()``. Otherwise creates a fresh
    ``MemoryFileSystem``.

    *compiler* receives the filesystem as its ``output_filesystem``
    attribute. A multi-compiler (anything with a ``compilers`` attribute)
    has it assigned to each child instead.

    Raises:
        ConfigurationError: If the configured filesystem lacks a required
            method.
    """
    filesystem = config.output_filesystem
    if filesystem is not None:
        for name in _REQUIRED_METHODS:
            if not callable(getattr(filesystem, name, None)):
                msg = f"Invalid options: output_filesystem.{name}() method is expected"
                raise ConfigurationError(msg)
    else:
        filesystem = MemoryFileSystem()

    if compiler is not None:
        children = getattr(compiler, "compilers", None)
        for target in children if children is not None else (compiler,):
            target.output_filesystem = filesystem

    return filesystem
