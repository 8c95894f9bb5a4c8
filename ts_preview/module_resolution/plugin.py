"""Bundler plugin contract and the virtual filesystem plugin."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol
from typing import runtime_checkable

from ..models import LoadResult
from ..models import Namespace
from ..models import ResolvedModule
from ..models import VirtualFile
from .loaders import LoadDispatcher
from .resolvers import DEFAULT_NODE_MODULES
from .resolvers import ResolutionEngine
from .stores import PackageStore
from .stores import VirtualFileStore


@runtime_checkable
class BundlerPlugin(Protocol):
    """Callbacks a bundler invokes while walking the module graph."""

    name: str

    def resolve(
        self, specifier: str, importer: str | None, namespace: Namespace | str | None
    ) -> ResolvedModule:
        """Resolve an import; raise ResolutionError when nothing matches."""
        ...

    def load(self, path: str, namespace: Namespace | str) -> LoadResult:
        """Return the contents of a resolved, non-external module; raise LoadError when unreadable."""
        ...

    @property
    def subpath_imports(self) -> frozenset[str]:
        """Externalized subpath imports collected during the build."""
        ...


class VirtualFsPlugin:
    """Resolve and load hooks over in-memory project files and a package store."""

    name = "virtual-fs"

    def __init__(self, engine: ResolutionEngine, dispatcher: LoadDispatcher):
        self.engine = engine
        self.dispatcher = dispatcher

    def resolve(
        self, specifier: str, importer: str | None = None, namespace: Namespace | str | None = None
    ) -> ResolvedModule:
        return self.engine.resolve(specifier, importer, namespace)

    def load(self, path: str, namespace: Namespace | str) -> LoadResult:
        return self.dispatcher.load(path, namespace)

    @property
    def subpath_imports(self) -> frozenset[str]:
        return self.engine.subpath_imports

    def __repr__(self) -> str:
        return f"VirtualFsPlugin({self.engine!r})"


def create_virtual_fs_plugin(
    files: Iterable[VirtualFile] | VirtualFileStore,
    package_store: PackageStore | None = None,
    node_modules: str = DEFAULT_NODE_MODULES,
) -> VirtualFsPlugin:
    """Build a plugin for one build.

    Args:
        files: Project files (any path form) or an existing store
        package_store: Store holding installed packages, if any
        node_modules: Package directory inside the package store

    Returns:
        VirtualFsPlugin with a fresh subpath-import accumulator
    """
    store = files if isinstance(files, VirtualFileStore) else VirtualFileStore(files)
    engine = ResolutionEngine(store, package_store, node_modules=node_modules)
    return VirtualFsPlugin(engine, LoadDispatcher(store, package_store))
