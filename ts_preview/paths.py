"""Canonical virtual path helpers.

Every path handled by the resolver uses one convention: POSIX separators and
exactly one leading slash. Project files may be registered either way
(``index.ts`` or ``/index.ts``); both forms map to the same canonical key.
"""

import posixpath


def normalize_path(path: str) -> str:
    """Prefix a path with ``/`` unless it is empty or already absolute."""
    if not path or path.startswith("/"):
        return path
    return "/" + path


def dirname(path: str) -> str:
    """Directory part of a canonical path (``/`` for root-level files)."""
    directory = posixpath.dirname(normalize_path(path))
    return directory or "/"


def join_relative(importer: str, specifier: str) -> str:
    """Join a relative specifier against the importer's directory.

    ``.`` and ``..`` segments are collapsed and ``..`` never climbs above the
    root, matching URL resolution against ``http://host/<importer>``.

    Args:
        importer: Canonical path of the importing file
        specifier: Relative specifier (``./x``, ``../y/z``)

    Returns:
        Canonical joined path
    """
    joined = posixpath.join(dirname(importer), specifier)
    collapsed = posixpath.normpath(joined)
    # normpath keeps a leading "//" (POSIX allows it to be special)
    if collapsed.startswith("//"):
        collapsed = "/" + collapsed.lstrip("/")
    return normalize_path(collapsed)


def join(*parts: str) -> str:
    """Join path parts and collapse the result into a canonical path."""
    return normalize_path(posixpath.normpath(posixpath.join(*parts)))


def is_bare_specifier(specifier: str) -> bool:
    """Bare specifiers have no relative or absolute prefix (``react``, ``lodash/fp``)."""
    return bool(specifier) and not specifier.startswith((".", "/"))


def split_package_specifier(specifier: str) -> tuple[str, str]:
    """Split a bare specifier into package name and subpath.

    Scoped packages keep their scope: ``@mui/material/Button`` gives
    ``("@mui/material", "Button")``.

    Returns:
        Tuple of (package_name, subpath); subpath is empty for single-segment imports
    """
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) >= 2:
        return "/".join(parts[:2]), "/".join(parts[2:])
    return parts[0], "/".join(parts[1:])
