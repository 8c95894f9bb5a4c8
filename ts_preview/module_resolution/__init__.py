"""Module resolution for in-memory projects.

This package decides where each import of a virtual project comes from:
project files held in memory, installed packages in a package store, or an
external URL supplied at runtime through an import map.
"""

from .loaders import LoadDispatcher
from .loaders import infer_loader
from .manifest import PackageManifest
from .manifest import parse_manifest
from .plugin import BundlerPlugin
from .plugin import VirtualFsPlugin
from .plugin import create_virtual_fs_plugin
from .resolvers import DEFAULT_NODE_MODULES
from .resolvers import ResolutionEngine
from .stores import DirectoryPackageStore
from .stores import MemoryVolume
from .stores import PackageStore
from .stores import VirtualFileStore
from .subpaths import SubpathImportAccumulator

__all__ = [
    "DEFAULT_NODE_MODULES",
    "BundlerPlugin",
    "DirectoryPackageStore",
    "LoadDispatcher",
    "MemoryVolume",
    "PackageManifest",
    "PackageStore",
    "ResolutionEngine",
    "SubpathImportAccumulator",
    "VirtualFileStore",
    "VirtualFsPlugin",
    "create_virtual_fs_plugin",
    "infer_loader",
    "parse_manifest",
]
