"""Module graph walk driving a bundler plugin's resolve and load hooks."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_COMPLETED
from concurrent.futures import Executor
from concurrent.futures import Future
from concurrent.futures import wait
from dataclasses import dataclass
from dataclasses import field

from ..errors import BuildCancelled
from ..errors import LoadError
from ..errors import ResolutionError
from ..models import LoaderKind
from ..models import Namespace
from ..models import ResolvedModule
from ..module_resolution.loaders import infer_loader
from ..module_resolution.plugin import BundlerPlugin
from .scanner import scan_imports

logger = logging.getLogger(__name__)

ModuleKey = tuple[Namespace, str]


@dataclass(frozen=True)
class BuildMessage:
    """One error collected during a build, tied to the import that caused it."""

    text: str
    specifier: str | None = None
    importer: str | None = None


@dataclass
class ModuleRecord:
    """A loaded module and the resolution of each of its imports."""

    path: str
    namespace: Namespace
    loader: LoaderKind
    contents: str
    imports: dict[str, ResolvedModule] = field(default_factory=dict)
    errors: list[BuildMessage] = field(default_factory=list)


@dataclass
class BuildResult:
    """Everything a build discovered.

    Attributes:
        entry_points: Entry specifiers as requested
        modules: Loaded modules keyed by (namespace, path)
        order: Module keys in discovery order
        externals: Specifiers left to the runtime loader
        errors: Collected errors, entry points first then in discovery order
        subpath_imports: Externalized ``package/subpath`` specifiers
        dependencies: Dependency map used for externals (name -> version)
        import_map: Import map entries, if any dependencies are known
    """

    entry_points: list[str]
    modules: dict[ModuleKey, ModuleRecord]
    order: list[ModuleKey]
    externals: set[str]
    errors: list[BuildMessage]
    subpath_imports: frozenset[str]
    dependencies: dict[str, str] = field(default_factory=dict)
    import_map: dict[str, str] | None = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def get(self, path: str, namespace: Namespace = Namespace.PROJECT) -> ModuleRecord | None:
        return self.modules.get((namespace, path))

    def paths(self, namespace: Namespace | None = None) -> list[str]:
        """Module paths in discovery order, optionally for one namespace."""
        return [path for ns, path in self.order if namespace is None or ns is namespace]


class GraphBuilder:
    """Walk the import graph of one build.

    Entry points are resolved on the calling thread; every module is then
    loaded and scanned on the executor, so independent subgraphs are explored
    in parallel. Each (namespace, path) is visited once.
    """

    def __init__(
        self,
        plugin: BundlerPlugin,
        executor: Executor,
        cancel_event: threading.Event | None = None,
    ):
        self.plugin = plugin
        self.executor = executor
        self.cancel_event = cancel_event or threading.Event()

    def build(self, entry_points: list[str]) -> BuildResult:
        """Resolve, load and scan everything reachable from the entry points.

        Raises:
            BuildCancelled: cancel_event was set before the walk finished
            ResolverInvariantError: A resolved module could not be loaded
        """
        entry_errors: list[BuildMessage] = []
        modules: dict[ModuleKey, ModuleRecord] = {}
        order: list[ModuleKey] = []
        seen: set[ModuleKey] = set()
        externals: set[str] = set()
        pending: dict[Future, ModuleKey] = {}

        def schedule(resolved: ResolvedModule) -> None:
            if resolved.external:
                externals.add(resolved.path)
                return
            key = (resolved.namespace, resolved.path)
            if key in seen:
                return
            seen.add(key)
            order.append(key)
            pending[self.executor.submit(self._visit, resolved)] = key

        try:
            for entry in entry_points:
                try:
                    schedule(self.plugin.resolve(entry, None, None))
                except ResolutionError as e:
                    logger.debug(f"[build] entry {entry} failed: {e}")
                    entry_errors.append(BuildMessage(str(e), specifier=entry))

            while pending:
                self._check_cancelled()
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    key = pending.pop(future)
                    record = future.result()
                    modules[key] = record
                    for resolved in record.imports.values():
                        schedule(resolved)
        finally:
            for future in pending:
                future.cancel()

        errors = entry_errors + [message for key in order for message in modules[key].errors]
        logger.info(
            f"[build] {len(modules)} modules, {len(externals)} externals, {len(errors)} errors"
        )
        return BuildResult(
            entry_points=list(entry_points),
            modules=modules,
            order=order,
            externals=externals,
            errors=errors,
            subpath_imports=self.plugin.subpath_imports,
        )

    def _visit(self, resolved: ResolvedModule) -> ModuleRecord:
        self._check_cancelled()
        try:
            loaded = self.plugin.load(resolved.path, resolved.namespace)
        except LoadError as e:
            logger.debug(f"[build] {e}")
            return ModuleRecord(
                path=resolved.path,
                namespace=resolved.namespace,
                loader=infer_loader(resolved.path),
                contents="",
                errors=[BuildMessage(str(e), specifier=resolved.path)],
            )
        record = ModuleRecord(
            path=resolved.path,
            namespace=resolved.namespace,
            loader=loaded.loader,
            contents=loaded.contents,
        )
        for specifier in scan_imports(loaded.contents):
            try:
                record.imports[specifier] = self.plugin.resolve(specifier, resolved.path, resolved.namespace)
            except ResolutionError as e:
                logger.debug(f"[build] {e}")
                record.errors.append(BuildMessage(str(e), specifier=specifier, importer=resolved.path))
        return record

    def _check_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise BuildCancelled("Build cancelled")
