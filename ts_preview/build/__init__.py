"""Module graph builds over in-memory projects."""

from .bundle import bundle_files
from .graph import BuildMessage
from .graph import BuildResult
from .graph import GraphBuilder
from .graph import ModuleRecord
from .runtime import Bundler
from .runtime import get_bundler
from .runtime import shutdown_bundler
from .scanner import scan_imports

__all__ = [
    "BuildMessage",
    "BuildResult",
    "Bundler",
    "GraphBuilder",
    "ModuleRecord",
    "bundle_files",
    "get_bundler",
    "scan_imports",
    "shutdown_bundler",
]
