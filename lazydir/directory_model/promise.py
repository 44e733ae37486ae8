"""Single-write completion cell resolved inline or by a background thread."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Promise(Generic[T]):
    """Pending until resolved exactly once; reads never block.

    The value is published through a ``threading.Event`` so a reader that sees
    ``is_ready()`` also sees the fully built value.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._value: T | None = None
        self._thread: threading.Thread | None = None

    @classmethod
    def from_ready(cls, value: T) -> "Promise[T]":
        promise: Promise[T] = cls()
        promise._resolve(value)
        return promise

    @classmethod
    def spawn_thread(
        cls,
        name: str,
        job: Callable[[], T],
        on_error: Callable[[Exception], T] | None = None,
    ) -> "Promise[T]":
        """Run ``job`` on a daemon thread and resolve with its return value.

        ``job`` is expected not to raise. If it does, the exception is logged
        and the promise resolves with ``on_error(exc)``; without ``on_error``
        it stays pending.
        """
        promise: Promise[T] = cls()

        def worker() -> None:
            try:
                value = job()
            except Exception as exc:
                logger.exception("Background job %r failed", name)
                if on_error is None:
                    return
                value = on_error(exc)
            promise._resolve(value)

        promise._thread = threading.Thread(target=worker, name=name, daemon=True)
        promise._thread.start()
        return promise

    def _resolve(self, value: T) -> None:
        with self._lock:
            if self._done.is_set():
                raise RuntimeError("promise already resolved")
            self._value = value
            self._done.set()

    def is_ready(self) -> bool:
        return self._done.is_set()

    def ready(self) -> T | None:
        """Return the value once resolved, else ``None``."""
        if not self._done.is_set():
            return None
        return self._value

    def wait(self, timeout: float | None = None) -> T | None:
        """Block up to ``timeout`` seconds for the value; ``None`` if still pending."""
        if not self._done.wait(timeout):
            return None
        return self._value


__all__ = ["Promise"]
