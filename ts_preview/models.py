"""Core data types shared by the resolver, loader and build driver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .paths import normalize_path


class Namespace(str, Enum):
    """Resolution domain of a module.

    Types:
    - PROJECT: user source held in the virtual file store
    - PACKAGE: installed package files held in the package store
    - EXTERNAL: left out of the bundle and loaded at runtime (import map)
    """

    PROJECT = "project"
    PACKAGE = "package"
    EXTERNAL = "external"


class LoaderKind(str, Enum):
    """How the bundler should parse a module's contents."""

    TSX = "tsx"
    TS = "ts"
    JSX = "jsx"
    JS = "js"


@dataclass(frozen=True)
class VirtualFile:
    """A project source file that only exists in memory.

    Attributes:
        path: File path, with or without a leading slash
        code: Source text
    """

    path: str
    code: str

    def normalized(self) -> VirtualFile:
        """Return a copy keyed by the canonical path."""
        return VirtualFile(path=normalize_path(self.path), code=self.code)


@dataclass(frozen=True)
class ResolvedModule:
    """Outcome of one resolve call."""

    path: str
    namespace: Namespace
    external: bool = False

    @classmethod
    def externalized(cls, specifier: str) -> ResolvedModule:
        return cls(path=specifier, namespace=Namespace.EXTERNAL, external=True)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one load call."""

    contents: str
    loader: LoaderKind
