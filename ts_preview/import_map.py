"""Import map generation for externalized dependencies."""

import json

from .paths import split_package_specifier

DEFAULT_CDN_BASE = "https://esm.sh"


def generate_import_map(
    dependencies: dict[str, str],
    subpath_imports: frozenset[str] | set[str] = frozenset(),
    cdn_base: str = DEFAULT_CDN_BASE,
) -> dict[str, str] | None:
    """Map bare specifiers to CDN URLs.

    Every dependency gets ``<cdn>/<name>@<version>``; every recorded subpath
    import of a known dependency gets ``<cdn>/<name>@<version>/<subpath>``.
    Subpaths of packages without a version are left out.

    Args:
        dependencies: Package name -> version
        subpath_imports: ``package/subpath`` specifiers recorded during the build
        cdn_base: CDN origin (no trailing slash needed)

    Returns:
        Import map entries, or None when there are no dependencies
    """
    if not dependencies:
        return None

    base = cdn_base.rstrip("/")
    imports = {name: f"{base}/{name}@{version}" for name, version in dependencies.items()}

    for specifier in sorted(subpath_imports):
        package_name, subpath = split_package_specifier(specifier)
        version = dependencies.get(package_name)
        if version and subpath:
            imports[specifier] = f"{base}/{package_name}@{version}/{subpath}"

    return imports


def render_import_map(imports: dict[str, str]) -> str:
    """Serialize entries as an import map document."""
    return json.dumps({"imports": imports}, indent=2)
