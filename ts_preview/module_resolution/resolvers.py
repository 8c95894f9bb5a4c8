"""Import resolution across the project and package stores.

Resolution order (first applicable branch wins, no backtracking):
1. Bare specifier (``react``, ``react/jsx-runtime``): installed package in the
   package store, otherwise externalized for the runtime import map
2. Entry point (no importer): the normalized path in the project store
3. Relative or absolute specifier from a project file: project store probing
4. Relative or absolute specifier from a package file: package store probing
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterator

from ..errors import ManifestParseError
from ..errors import ModuleNotFound
from ..models import Namespace
from ..models import ResolvedModule
from ..paths import is_bare_specifier
from ..paths import join
from ..paths import join_relative
from ..paths import normalize_path
from ..paths import split_package_specifier
from .manifest import PackageManifest
from .manifest import parse_manifest
from .stores import PackageStore
from .stores import VirtualFileStore
from .subpaths import SubpathImportAccumulator

logger = logging.getLogger(__name__)

DEFAULT_NODE_MODULES = "/home/web/app/node_modules"

# Probe order is part of the contract: the first existing candidate wins.
PROJECT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")
PACKAGE_SUBPATH_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")


def candidate_paths(path: str, extensions: tuple[str, ...]) -> Iterator[str]:
    """Yield the exact path, then ``path<ext>``, then ``path/index<ext>``."""
    yield path
    for ext in extensions:
        yield path + ext
    directory = path.rstrip("/") + "/"
    for ext in extensions:
        yield f"{directory}index{ext}"


class ResolutionEngine:
    """Resolve import specifiers to project files, package files, or externals.

    The engine only answers questions; the bundler decides when to ask. It owns
    the subpath-import accumulator, which is the only state that changes while
    a build runs.
    """

    def __init__(
        self,
        files: VirtualFileStore,
        packages: PackageStore | None = None,
        node_modules: str = DEFAULT_NODE_MODULES,
    ):
        """Initialize engine.

        Args:
            files: Project source store
            packages: Installed package store (None: every bare import is external)
            node_modules: Directory in the package store holding installed packages
        """
        self.files = files
        self.packages = packages
        self.node_modules = join(normalize_path(node_modules))
        self._subpath_imports = SubpathImportAccumulator()

    @property
    def subpath_imports(self) -> frozenset[str]:
        """Externalized ``package/subpath`` specifiers seen so far."""
        return self._subpath_imports.snapshot()

    def resolve(
        self,
        specifier: str,
        importer: str | None = None,
        namespace: Namespace | str | None = None,
    ) -> ResolvedModule:
        """Resolve one specifier.

        Args:
            specifier: Import string as written in the source
            importer: Canonical path of the importing module (None for entry points)
            namespace: Namespace of the importing module

        Returns:
            ResolvedModule

        Raises:
            ModuleNotFound: No candidate matched in the applicable store
        """
        if is_bare_specifier(specifier):
            return self._resolve_bare(specifier)

        if importer is None:
            return self._resolve_entry(specifier)

        importer_namespace = self._coerce_namespace(namespace)
        importer = normalize_path(importer)

        if importer_namespace is Namespace.PROJECT:
            return self._resolve_relative(specifier, importer, Namespace.PROJECT, self.files.has)
        if importer_namespace is Namespace.PACKAGE:
            return self._resolve_relative(specifier, importer, Namespace.PACKAGE, self._package_file_exists)

        raise ModuleNotFound(
            specifier, importer, f"modules in namespace '{namespace}' cannot import by path"
        )

    def _coerce_namespace(self, namespace: Namespace | str | None) -> Namespace | None:
        if namespace is None or namespace == "":
            # Importers without a namespace are project files
            return Namespace.PROJECT
        try:
            return Namespace(namespace)
        except ValueError:
            return None

    def _resolve_entry(self, specifier: str) -> ResolvedModule:
        path = normalize_path(specifier)
        if not self.files.has(path):
            raise ModuleNotFound(specifier, None, "entry point is not a virtual file")
        logger.debug(f"[resolve] entry {specifier} -> {path}")
        return ResolvedModule(path=path, namespace=Namespace.PROJECT)

    def _resolve_relative(
        self,
        specifier: str,
        importer: str,
        namespace: Namespace,
        exists: Callable[[str], bool],
    ) -> ResolvedModule:
        joined = join_relative(importer, specifier)
        for candidate in candidate_paths(joined, PROJECT_EXTENSIONS):
            if exists(candidate):
                logger.debug(f"[resolve] {specifier} from {importer} -> {namespace.value}:{candidate}")
                return ResolvedModule(path=candidate, namespace=namespace)

        logger.debug(f"[resolve] {specifier} from {importer} not found (tried {joined})")
        raise ModuleNotFound(specifier, importer)

    def _resolve_bare(self, specifier: str) -> ResolvedModule:
        package_name, subpath = split_package_specifier(specifier)
        package_dir = join(self.node_modules, package_name)

        if self.packages is not None and self.packages.is_dir(package_dir):
            if subpath:
                path = self._resolve_package_subpath(package_dir, subpath)
            else:
                path = self._resolve_package_entry(package_name, package_dir)
            if path:
                logger.debug(f"[resolve] {specifier} -> package:{path}")
                return ResolvedModule(path=path, namespace=Namespace.PACKAGE)

        return self._externalize(specifier, subpath)

    def _resolve_package_entry(self, package_name: str, package_dir: str) -> str | None:
        manifest_path = f"{package_dir}/package.json"
        try:
            manifest = self._read_manifest(manifest_path)
        except ManifestParseError as e:
            logger.warning(f"[resolve] {package_name}: {e}; falling back to external")
            return None

        entry = join(package_dir, manifest.entry)
        for candidate in candidate_paths(entry, PACKAGE_SUBPATH_EXTENSIONS):
            if self._inside(candidate, package_dir) and self._package_file_exists(candidate):
                return candidate

        logger.warning(f"[resolve] {package_name}: entry '{manifest.entry}' missing from {package_dir}")
        return None

    def _resolve_package_subpath(self, package_dir: str, subpath: str) -> str | None:
        target = join(package_dir, subpath)
        if not self._inside(target, package_dir):
            logger.warning(f"[resolve] subpath escapes package directory: {subpath}")
            return None

        for candidate in candidate_paths(target, PACKAGE_SUBPATH_EXTENSIONS):
            if self._package_file_exists(candidate):
                return candidate
        return None

    def _read_manifest(self, path: str) -> PackageManifest:
        assert self.packages is not None
        if not self.packages.exists(path):
            logger.debug(f"[resolve] no manifest at {path}, using defaults")
            return PackageManifest()
        try:
            text = self.packages.read_utf8(path)
        except (UnicodeDecodeError, OSError) as e:
            raise ManifestParseError(path, f"unreadable ({e})") from e
        return parse_manifest(text, path)

    def _externalize(self, specifier: str, subpath: str) -> ResolvedModule:
        if subpath and self._subpath_imports.add(specifier):
            logger.debug(f"[resolve] recorded subpath import {specifier}")
        logger.debug(f"[resolve] {specifier} -> external")
        return ResolvedModule.externalized(specifier)

    def _package_file_exists(self, path: str) -> bool:
        if self.packages is None:
            return False
        return self.packages.exists(path) and not self.packages.is_dir(path)

    @staticmethod
    def _inside(path: str, directory: str) -> bool:
        return path.startswith(directory.rstrip("/") + "/")

    def __repr__(self) -> str:
        return f"ResolutionEngine({self.files!r}, packages={self.packages!r})"
