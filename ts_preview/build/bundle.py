"""High-level entry point: bundle a list of virtual files."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from ..dependencies import select_dependencies
from ..errors import BuildError
from ..import_map import generate_import_map
from ..models import VirtualFile
from ..module_resolution.plugin import create_virtual_fs_plugin
from ..module_resolution.stores import PackageStore
from ..paths import normalize_path
from ..settings import BundlerSettings
from .graph import BuildResult
from .runtime import get_bundler

logger = logging.getLogger(__name__)


def bundle_files(
    files: Iterable[VirtualFile],
    entry_point: str | None = None,
    dependencies: dict[str, str] | None = None,
    package_store: PackageStore | None = None,
    settings: BundlerSettings | None = None,
    strict: bool = False,
    cancel_event: threading.Event | None = None,
) -> BuildResult:
    """Walk the module graph of an in-memory project.

    Args:
        files: Project files, registered with or without a leading slash
        entry_point: Entry file (default: settings.entry_point)
        dependencies: Explicit dependency map; overrides /package.json when given
        package_store: Store with installed packages (None: all packages external)
        settings: Bundler settings (default: BundlerSettings())
        strict: Raise BuildError when any import failed to resolve
        cancel_event: Set to abort the build

    Returns:
        BuildResult with modules, externals, collected errors and the import map

    Raises:
        BuildError: strict is set and errors were collected
        BuildCancelled: cancel_event was set
    """
    settings = settings or BundlerSettings()
    files = list(files)
    entry = normalize_path(entry_point or settings.entry_point)
    deps = select_dependencies(files, dependencies)

    plugin = create_virtual_fs_plugin(files, package_store, node_modules=settings.node_modules)
    logger.info(f"[build] bundling {len(files)} files from {entry}")

    result = get_bundler(settings.max_workers).build(plugin, [entry], cancel_event)
    result.dependencies = deps
    result.import_map = generate_import_map(deps, result.subpath_imports, settings.cdn_base)

    for message in result.errors:
        logger.warning(f"[build] {message.text}")

    if strict and result.errors:
        raise BuildError(result.errors)
    return result
