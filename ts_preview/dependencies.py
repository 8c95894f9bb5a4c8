"""Project dependency detection and the package-install boundary.

Installing packages is done by an external package manager; this module only
decides which packages to ask for and prepares the volume it installs into.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Protocol

from .errors import ManifestParseError
from .models import VirtualFile
from .module_resolution.manifest import parse_manifest
from .module_resolution.stores import MemoryVolume
from .module_resolution.stores import PackageStore
from .paths import join
from .paths import normalize_path
from .settings import BundlerSettings

logger = logging.getLogger(__name__)

PROJECT_MANIFEST = "/package.json"


def extract_dependencies_from_package_json(files: Iterable[VirtualFile]) -> dict[str, str]:
    """Read ``dependencies`` from the project's own /package.json.

    Returns:
        Package name -> version, or an empty dict when there is no usable manifest
    """
    manifest_file = next((f for f in files if normalize_path(f.path) == PROJECT_MANIFEST), None)
    if manifest_file is None:
        return {}

    try:
        manifest = parse_manifest(manifest_file.code, PROJECT_MANIFEST)
    except ManifestParseError as e:
        logger.warning(f"Ignoring project dependencies: {e}")
        return {}

    return dict(manifest.dependencies)


def select_dependencies(
    files: Iterable[VirtualFile], explicit: dict[str, str] | None = None
) -> dict[str, str]:
    """Pick the dependency map for a build.

    An explicitly supplied map always wins, even when empty; the project
    manifest is only consulted when none is given.
    """
    if explicit is not None:
        return dict(explicit)
    detected = extract_dependencies_from_package_json(files)
    if detected:
        logger.info(f"Detected {len(detected)} dependencies from {PROJECT_MANIFEST}")
    return detected


def create_package_volume(settings: BundlerSettings | None = None) -> MemoryVolume:
    """Create an empty install target with a stub package.json in ``settings.app_dir``."""
    app_dir = (settings or BundlerSettings()).app_dir
    manifest = {"name": "ts-preview-app", "private": True, "dependencies": {}}
    return MemoryVolume.from_json({join(normalize_path(app_dir), "package.json"): json.dumps(manifest, indent=2)})


class PackageInstaller(Protocol):
    """External package manager that writes packages into a store."""

    def install(self, store: PackageStore, specs: list[str], cwd: str) -> None:
        """Install ``name@version`` specs under ``<cwd>/node_modules``."""
        ...


def install_dependencies(
    store: PackageStore,
    dependencies: dict[str, str],
    installer: PackageInstaller,
    settings: BundlerSettings | None = None,
) -> list[str]:
    """Ask the installer for every dependency at its pinned version.

    Packages go under ``settings.app_dir``; the installer runs with it as cwd.

    Returns:
        The specs passed to the installer (empty when nothing to install)
    """
    if not dependencies:
        return []

    cwd = normalize_path((settings or BundlerSettings()).app_dir)
    specs = [f"{name}@{version}" for name, version in dependencies.items()]
    logger.info(f"Installing {len(specs)} packages into {cwd}: {' '.join(specs)}")
    installer.install(store, specs, cwd)
    return specs
