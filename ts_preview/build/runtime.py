"""Process-wide bundler runtime.

The bundler owns the worker pool used to walk module graphs. It is created
lazily on first use and reused by every build in the process; tearing it down
lets the next call start a fresh one.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from ..module_resolution.plugin import BundlerPlugin
from .graph import BuildResult
from .graph import GraphBuilder

logger = logging.getLogger(__name__)


class Bundler:
    """Runs graph builds on a shared thread pool."""

    def __init__(self, max_workers: int = 4):
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ts-preview")
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def build(
        self,
        plugin: BundlerPlugin,
        entry_points: list[str],
        cancel_event: threading.Event | None = None,
    ) -> BuildResult:
        if self._closed:
            raise RuntimeError("Bundler has been shut down")
        return GraphBuilder(plugin, self._executor, cancel_event).build(entry_points)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._executor.shutdown(wait=True, cancel_futures=True)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "ready"
        return f"Bundler(max_workers={self.max_workers}, {state})"


# Singleton instance
_bundler: Bundler | None = None
_bundler_lock = threading.Lock()


def get_bundler(max_workers: int = 4) -> Bundler:
    """Return the process bundler, initializing it on first use.

    ``max_workers`` only applies when the bundler is created.
    """
    global _bundler
    with _bundler_lock:
        if _bundler is None or _bundler.closed:
            _bundler = Bundler(max_workers=max_workers)
            logger.debug(f"Initialized {_bundler!r}")
        return _bundler


def shutdown_bundler() -> None:
    """Tear down the process bundler (no-op if it was never started)."""
    global _bundler
    with _bundler_lock:
        if _bundler is not None:
            _bundler.close()
            logger.debug("Bundler shut down")
            _bundler = None
