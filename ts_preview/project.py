"""Load a project directory from disk as virtual files."""

import logging
from fnmatch import fnmatch
from pathlib import Path

from .models import VirtualFile

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDES = ("node_modules", ".git", "dist", ".ts-preview", "__pycache__")
SOURCE_SUFFIXES = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".json", ".css")


def load_project_dir(
    root: str | Path,
    excludes: tuple[str, ...] = DEFAULT_EXCLUDES,
    suffixes: tuple[str, ...] = SOURCE_SUFFIXES,
) -> list[VirtualFile]:
    """Read source files under ``root`` into VirtualFiles.

    Paths are relative to ``root`` with a leading slash (``/src/index.ts``).
    A file is skipped when any path component matches an exclude pattern.

    Args:
        root: Project directory
        excludes: Glob patterns matched against each path component
        suffixes: File suffixes to include

    Returns:
        VirtualFiles sorted by path
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise NotADirectoryError(f"Project directory not found: {root}")

    files = []
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if any(fnmatch(part, pattern) for part in relative.parts for pattern in excludes):
            continue
        if not path.is_file() or path.suffix not in suffixes:
            continue
        try:
            code = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning(f"Skipping non-UTF-8 file: {relative}")
            continue
        files.append(VirtualFile(path="/" + relative.as_posix(), code=code))

    logger.debug(f"Loaded {len(files)} files from {root}")
    return files
