"""Tests for canonical path helpers."""

import pytest
from ts_preview.paths import dirname
from ts_preview.paths import is_bare_specifier
from ts_preview.paths import join
from ts_preview.paths import join_relative
from ts_preview.paths import normalize_path
from ts_preview.paths import split_package_specifier


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("index.ts", "/index.ts"),
            ("/index.ts", "/index.ts"),
            ("src/app.tsx", "/src/app.tsx"),
            ("", ""),
            ("/", "/"),
            ("./a.ts", "/./a.ts"),
        ],
    )
    def test_normalize(self, path, expected):
        assert normalize_path(path) == expected

    @pytest.mark.parametrize("path", ["", "/", "a", "/a/b", "a/b/", "//x", "../y", " spaced"])
    def test_idempotent(self, path):
        """Normalizing twice is the same as normalizing once."""
        once = normalize_path(path)
        assert normalize_path(once) == once


class TestJoinRelative:
    def test_sibling(self):
        assert join_relative("/index.ts", "./math") == "/math"

    def test_nested_importer(self):
        assert join_relative("/src/app/main.ts", "../lib/util") == "/src/lib/util"

    def test_parent_never_escapes_root(self):
        assert join_relative("/a.ts", "../../b") == "/b"

    def test_importer_without_leading_slash(self):
        assert join_relative("src/index.ts", "./x") == "/src/x"

    def test_collapses_dot_segments(self):
        assert join_relative("/a/b/c.ts", "./.././d/./e") == "/a/d/e"

    def test_absolute_specifier(self):
        assert join_relative("/a/b/c.ts", "/x/y") == "/x/y"

    def test_dot_only(self):
        assert join_relative("/a/b.ts", ".") == "/a"


class TestHelpers:
    def test_dirname(self):
        assert dirname("/a/b.ts") == "/a"
        assert dirname("/b.ts") == "/"
        assert dirname("b.ts") == "/"

    def test_join(self):
        assert join("/home/web/app/node_modules", "react", "./index.js") == "/home/web/app/node_modules/react/index.js"

    @pytest.mark.parametrize(
        ("specifier", "expected"),
        [
            ("react", True),
            ("react/jsx-runtime", True),
            ("@scope/pkg", True),
            ("./a", False),
            ("../a", False),
            ("/a", False),
            ("", False),
        ],
    )
    def test_is_bare_specifier(self, specifier, expected):
        assert is_bare_specifier(specifier) is expected

    @pytest.mark.parametrize(
        ("specifier", "expected"),
        [
            ("react", ("react", "")),
            ("react/jsx-runtime", ("react", "jsx-runtime")),
            ("lodash/fp/map", ("lodash", "fp/map")),
            ("@scope/pkg", ("@scope/pkg", "")),
            ("@scope/pkg/sub/path", ("@scope/pkg", "sub/path")),
        ],
    )
    def test_split_package_specifier(self, specifier, expected):
        assert split_package_specifier(specifier) == expected
