"""ts-preview: module resolution for bundling in-memory TypeScript projects."""

from .build import BuildResult
from .build import bundle_files
from .dependencies import extract_dependencies_from_package_json
from .errors import BuildCancelled
from .errors import BuildError
from .errors import LoadError
from .errors import ManifestParseError
from .errors import ModuleNotFound
from .errors import ResolutionError
from .errors import ResolverInvariantError
from .errors import TsPreviewError
from .import_map import generate_import_map
from .models import LoaderKind
from .models import LoadResult
from .models import Namespace
from .models import ResolvedModule
from .models import VirtualFile
from .module_resolution import MemoryVolume
from .module_resolution import ResolutionEngine
from .module_resolution import VirtualFileStore
from .module_resolution import create_virtual_fs_plugin
from .paths import normalize_path

__all__ = [
    "BuildCancelled",
    "BuildError",
    "BuildResult",
    "LoadError",
    "LoadResult",
    "LoaderKind",
    "ManifestParseError",
    "MemoryVolume",
    "ModuleNotFound",
    "Namespace",
    "ResolutionEngine",
    "ResolutionError",
    "ResolvedModule",
    "ResolverInvariantError",
    "TsPreviewError",
    "VirtualFile",
    "VirtualFileStore",
    "bundle_files",
    "create_virtual_fs_plugin",
    "extract_dependencies_from_package_json",
    "generate_import_map",
    "normalize_path",
]
