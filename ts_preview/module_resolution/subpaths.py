"""Thread-safe collection of externalized subpath imports."""

import threading


class SubpathImportAccumulator:
    """Set of ``package/subpath`` specifiers seen during one build.

    Insertions may come from several resolver threads at once. The lock only
    guards the set itself, so no storage call ever runs while it is held.
    """

    def __init__(self) -> None:
        self._imports: set[str] = set()
        self._lock = threading.Lock()

    def add(self, specifier: str) -> bool:
        """Record a subpath import.

        Returns:
            True if the specifier was new, False if it was already recorded
        """
        with self._lock:
            if specifier in self._imports:
                return False
            self._imports.add(specifier)
            return True

    def snapshot(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._imports)

    def __len__(self) -> int:
        with self._lock:
            return len(self._imports)
