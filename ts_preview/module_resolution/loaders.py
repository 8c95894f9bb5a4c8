"""Load dispatch: hand the bundler the source text of a resolved module."""

import logging

from ..errors import LoadError
from ..errors import ResolverInvariantError
from ..models import LoaderKind
from ..models import LoadResult
from ..models import Namespace
from ..paths import normalize_path
from .stores import PackageStore
from .stores import VirtualFileStore

logger = logging.getLogger(__name__)

# Checked in priority order
_LOADER_SUFFIXES = (
    (".tsx", LoaderKind.TSX),
    (".ts", LoaderKind.TS),
    (".jsx", LoaderKind.JSX),
)


def infer_loader(path: str) -> LoaderKind:
    """Pick the parser for a file from its suffix (defaults to plain JS)."""
    for suffix, kind in _LOADER_SUFFIXES:
        if path.endswith(suffix):
            return kind
    return LoaderKind.JS


class LoadDispatcher:
    """Read module contents from the store that owns its namespace.

    Paths reaching the dispatcher were produced by the resolver against the
    same stores, so a missing file is reported as ResolverInvariantError
    rather than as an ordinary not-found error.
    """

    def __init__(self, files: VirtualFileStore, packages: PackageStore | None = None):
        self.files = files
        self.packages = packages

    def load(self, path: str, namespace: Namespace | str) -> LoadResult:
        """Load a resolved module.

        Args:
            path: Canonical path returned by resolve()
            namespace: Namespace returned by resolve()

        Returns:
            LoadResult with contents and loader kind

        Raises:
            ResolverInvariantError: The module is missing, or the namespace is not loadable
            LoadError: A package file exists but cannot be read as UTF-8 text
        """
        namespace = Namespace(namespace)
        if namespace is Namespace.PROJECT:
            contents = self._load_project(path)
        elif namespace is Namespace.PACKAGE:
            contents = self._load_package(path)
        else:
            raise ResolverInvariantError(f"External module requested for loading: {path}")

        logger.debug(f"[load] {namespace.value}:{path}")
        return LoadResult(contents=contents, loader=infer_loader(path))

    def _load_project(self, path: str) -> str:
        file = self.files.get(path)
        if file is None:
            logger.error(f"[load] resolved project file missing from virtual store: {path}")
            raise ResolverInvariantError(f"File not found in virtual store: {normalize_path(path)}")
        return file.code

    def _load_package(self, path: str) -> str:
        if self.packages is None:
            raise ResolverInvariantError(f"Package module requested without a package store: {path}")
        try:
            return self.packages.read_utf8(path)
        except (FileNotFoundError, IsADirectoryError) as e:
            logger.error(f"[load] resolved package file missing from package store: {path}")
            raise ResolverInvariantError(f"File not found in package store: {path}") from e
        except (UnicodeDecodeError, OSError) as e:
            raise LoadError(path, str(e)) from e
