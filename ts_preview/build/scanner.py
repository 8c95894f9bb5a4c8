"""Discover the import specifiers of a JavaScript/TypeScript module.

This is not a parser. It finds the string literals a bundler would hand to
its resolve hook: static imports and re-exports, side-effect imports, dynamic
``import("...")`` with a literal argument, and ``require("...")``. Type-only
imports are skipped since they are erased before bundling.
"""

import re
from collections.abc import Callable

# Strings are matched first so comment markers inside them are left alone.
_STRINGS_OR_COMMENTS = re.compile(
    r"""("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)|(/\*.*?\*/|//[^\n]*)""",
    re.DOTALL,
)

# Text that may directly precede a module specifier literal
_SPECIFIER_PREFIX = re.compile(r"(?:\bfrom|\bimport|\b(?:import|require)\s*\()\s*$")
_PREFIX_WINDOW = 64

_IMPORT_PATTERN = re.compile(
    r"""
    \b(?:import|export)\s+(?P<type_only>type\s+)?(?:(?:(?!\b(?:import|export)\b)[\w$*{}\s,])+?\s+from\s*)?
        (?P<q1>["'])(?P<static>[^"'\n]+)(?P=q1)
    |
    \b(?:import|require)\s*\(\s*(?P<q2>["'])(?P<dynamic>[^"'\n]+)(?P=q2)\s*\)
    """,
    re.VERBOSE,
)


def _mask(code: str, keep_string: Callable[[re.Match], bool]) -> str:
    def replace(match: re.Match) -> str:
        literal = match.group(1)
        if literal is None:
            return " "
        if keep_string(match):
            return literal
        return literal[0] * 2

    return _STRINGS_OR_COMMENTS.sub(replace, code)


def strip_comments(code: str) -> str:
    """Blank out ``//`` and ``/* */`` comments, keeping string literals intact."""
    return _mask(code, lambda match: True)


def mask_source(code: str) -> str:
    """Blank out comments and every string literal that is not a module specifier."""

    def is_specifier(match: re.Match) -> bool:
        if match.group(1)[0] == "`":
            return False
        start = match.start()
        return _SPECIFIER_PREFIX.search(code[max(0, start - _PREFIX_WINDOW) : start]) is not None

    return _mask(code, is_specifier)


def scan_imports(code: str) -> list[str]:
    """Return import specifiers in order of first appearance, without duplicates."""
    specifiers: list[str] = []
    seen: set[str] = set()

    for match in _IMPORT_PATTERN.finditer(mask_source(code)):
        if match.group("type_only"):
            continue
        specifier = match.group("static") or match.group("dynamic")
        if specifier not in seen:
            seen.add(specifier)
            specifiers.append(specifier)

    return specifiers
