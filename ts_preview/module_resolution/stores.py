"""Storage backends consulted by the resolver.

Two stores coexist during a build:
- VirtualFileStore: the user's project source, a flat map of canonical paths
- PackageStore: a hierarchical filesystem holding installed packages
  (MemoryVolume for a fully in-memory install, DirectoryPackageStore to serve
  an existing node_modules tree read-only)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol
from typing import runtime_checkable

from ..models import VirtualFile
from ..paths import dirname
from ..paths import join
from ..paths import normalize_path

logger = logging.getLogger(__name__)


class VirtualFileStore:
    """In-memory project files keyed by canonical path."""

    def __init__(self, files: Iterable[VirtualFile] = ()):
        self._files: dict[str, VirtualFile] = {}
        for file in files:
            self.add(file)

    def add(self, file: VirtualFile) -> None:
        """Register a file under its canonical path.

        A second registration of the same canonical path replaces the first.
        """
        normalized = file.normalized()
        if normalized.path in self._files:
            logger.warning(f"Virtual file registered twice, keeping latest: {normalized.path}")
        self._files[normalized.path] = normalized

    def has(self, path: str) -> bool:
        return normalize_path(path) in self._files

    def get(self, path: str) -> VirtualFile | None:
        return self._files.get(normalize_path(path))

    def paths(self) -> list[str]:
        return sorted(self._files)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.has(path)

    def __iter__(self) -> Iterator[VirtualFile]:
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"VirtualFileStore({len(self._files)} files)"


@runtime_checkable
class PackageStore(Protocol):
    """Read access into the filesystem that holds installed packages.

    Existence and read calls may block on the backing storage.
    """

    def exists(self, path: str) -> bool:
        """True if a file or directory exists at the canonical path."""
        ...

    def is_dir(self, path: str) -> bool:
        """True if the canonical path denotes a directory."""
        ...

    def read_utf8(self, path: str) -> str:
        """Read a file as UTF-8 text.

        Raises:
            FileNotFoundError: No file at the path
        """
        ...


class MemoryVolume:
    """Hierarchical in-memory filesystem.

    Files map canonical paths to text; parent directories are created
    implicitly. Package managers write into it, the resolver only reads.
    """

    def __init__(self) -> None:
        self._files: dict[str, str] = {}
        self._dirs: set[str] = {"/"}

    @classmethod
    def from_json(cls, tree: Mapping[str, str | None]) -> MemoryVolume:
        """Build a volume from ``{path: contents}``; a ``None`` value creates a directory."""
        volume = cls()
        for path, contents in tree.items():
            if contents is None:
                volume.mkdir(path)
            else:
                volume.write_file(path, contents)
        return volume

    def mkdir(self, path: str) -> None:
        """Create a directory and all missing parents."""
        path = join(normalize_path(path))
        if path in self._files:
            raise NotADirectoryError(f"Not a directory: {path}")
        while path not in self._dirs:
            self._dirs.add(path)
            path = dirname(path)

    def write_file(self, path: str, contents: str) -> None:
        path = join(normalize_path(path))
        if path in self._dirs:
            raise IsADirectoryError(f"Is a directory: {path}")
        self.mkdir(dirname(path))
        self._files[path] = contents

    def exists(self, path: str) -> bool:
        path = normalize_path(path)
        return path in self._files or path.rstrip("/") in self._dirs or path == "/"

    def is_dir(self, path: str) -> bool:
        path = normalize_path(path)
        return path == "/" or path.rstrip("/") in self._dirs

    def is_file(self, path: str) -> bool:
        return normalize_path(path) in self._files

    def read_utf8(self, path: str) -> str:
        path = normalize_path(path)
        if path in self._files:
            return self._files[path]
        if self.is_dir(path):
            raise IsADirectoryError(f"Is a directory: {path}")
        raise FileNotFoundError(f"No such file in volume: {path}")

    def listdir(self, path: str) -> list[str]:
        """Names of the direct children of a directory."""
        path = join(normalize_path(path))
        if path not in self._dirs:
            raise FileNotFoundError(f"No such directory in volume: {path}")
        prefix = path.rstrip("/") + "/"
        children = {
            entry[len(prefix) :].split("/", 1)[0]
            for entry in (*self._files, *self._dirs)
            if entry.startswith(prefix) and entry != path
        }
        return sorted(children)

    def to_json(self) -> dict[str, str]:
        return dict(sorted(self._files.items()))

    def __repr__(self) -> str:
        return f"MemoryVolume({len(self._files)} files, {len(self._dirs)} dirs)"


class DirectoryPackageStore:
    """Serve a real directory tree as a read-only package store.

    Canonical paths under ``mount`` map onto ``root``; e.g. with
    ``mount="/home/web/app/node_modules"`` the path
    ``/home/web/app/node_modules/react/index.js`` reads ``<root>/react/index.js``.
    """

    def __init__(self, root: str | Path, mount: str = "/"):
        self.root = Path(root).resolve()
        self.mount = join(normalize_path(mount))

    def _locate(self, path: str) -> Path | None:
        path = join(normalize_path(path))
        if path == self.mount:
            return self.root
        prefix = self.mount.rstrip("/") + "/"
        if not path.startswith(prefix):
            return None
        candidate = (self.root / path[len(prefix) :]).resolve()
        # Symlinks may point outside the root
        if not candidate.is_relative_to(self.root):
            logger.warning(f"Path escapes package root, ignoring: {path}")
            return None
        return candidate

    def exists(self, path: str) -> bool:
        located = self._locate(path)
        return located is not None and located.exists()

    def is_dir(self, path: str) -> bool:
        located = self._locate(path)
        return located is not None and located.is_dir()

    def read_utf8(self, path: str) -> str:
        located = self._locate(path)
        if located is None or not located.is_file():
            raise FileNotFoundError(f"No such file in package store: {path}")
        return located.read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return f"DirectoryPackageStore({self.root} at {self.mount})"
