"""Bundle readiness gate.

Requests that arrive while a build is running wait here until the build
reports completion::

    gate = ReadinessGate()
    gate.ready(lambda stats: serve(stats), name="/app.js")  # queued
    gate.done(stats)                                        # runs it

The build drives the gate: ``invalidate()`` when a rebuild starts,
``done(stats)`` when it finishes. Queued callbacks run in the order they
were queued.

Free-threading safety:
    - Queue and state changes happen under a ``threading.Lock``
    - Callbacks run outside the lock, so they may call back into the gate
    - Registrations during a flush join the tail of the queue
"""

import logging
import threading
from collections import deque
from collections.abc import Callable
from typing import Any, TypeAlias

import anyio

ReadyCallback: TypeAlias = Callable[[Any], object]

_log = logging.getLogger("devmount.ready")


class ReadinessGate:
    """Defers callbacks until the build is complete.

    ``stats`` is whatever the build reported with its last ``done()``;
    the gate never looks inside it.

    While ``done()`` is flushing, callbacks registered from any thread join
    the tail of the queue, so every callback runs after the ones queued
    before it. A callback that raises is logged and the flush goes on.
    """

    __slots__ = ("_callbacks", "_flushing", "_lock", "_logger", "_state", "_stats")

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _log
        self._lock = threading.Lock()
        self._state = False
        self._flushing = False
        self._stats: Any = None
        self._callbacks: deque[ReadyCallback] = deque()

    @property
    def is_ready(self) -> bool:
        return self._state

    @property
    def stats(self) -> Any:
        """Result of the last completed build, or None before the first one."""
        return self._stats

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the build."""
        return len(self._callbacks)

    def ready(self, callback: ReadyCallback, name: str | None = None) -> None:
        """Run *callback* with the build stats now, or once the build is done.

        *name* identifies the waiter in the log notice, typically the
        request URL. Defaults to the callback's ``__name__``.
        """
        with self._lock:
            building = not self._state
            queued = building or self._flushing
            if queued:
                self._callbacks.append(callback)
            stats = self._stats

        if not queued:
            callback(stats)
            return
        if not building:
            return

        label = name or getattr(callback, "__name__", "")
        if label == "<lambda>":
            label = ""
        self._logger.info("wait until bundle finished%s", f": {label}" if label else "")

    def invalidate(self) -> None:
        """Mark the build as in progress; new callbacks queue until ``done()``."""
        with self._lock:
            self._state = False

    def done(self, stats: Any = None) -> None:
        """Mark the build complete and flush queued callbacks in FIFO order.

        A ``done()`` arriving while another thread is flushing only updates
        the stats; the running flush drains the queue. An ``invalidate()``
        during a flush leaves the remaining callbacks for the next build.
        """
        with self._lock:
            self._state = True
            self._stats = stats
            if self._flushing:
                return
            self._flushing = True

        while True:
            with self._lock:
                if not self._state or not self._callbacks:
                    self._flushing = False
                    return
                callback = self._callbacks.popleft()
                current = self._stats

            try:
                callback(current)
            except Exception:
                self._logger.exception("ready callback %r failed", callback)

    async def wait(self) -> Any:
        """Wait for the build to complete and return its stats.

        ``done()`` must be called from the thread running this event loop.
        """
        event = anyio.Event()
        result: list[Any] = []

        def _release(stats: Any) -> None:
            result.append(stats)
            event.set()

        self.ready(_release, name="wait()")
        await event.wait()
        return result[0]

    def __repr__(self) -> str:
        state = "ready" if self._state else "building"
        return f"ReadinessGate({state}, pending={len(self._callbacks)})"
