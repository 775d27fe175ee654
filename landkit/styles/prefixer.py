"""Add vendor-prefixed copies of declarations that still need them."""

from __future__ import annotations

import re

PROPERTY_PREFIXES: dict[str, tuple[str, ...]] = {
    "appearance": ("-webkit-", "-moz-"),
    "backdrop-filter": ("-webkit-",),
    "background-clip": ("-webkit-",),
    "box-decoration-break": ("-webkit-",),
    "hyphens": ("-webkit-", "-ms-"),
    "mask": ("-webkit-",),
    "mask-image": ("-webkit-",),
    "mask-size": ("-webkit-",),
    "tab-size": ("-moz-",),
    "text-decoration-skip-ink": ("-webkit-",),
    "text-size-adjust": ("-webkit-", "-moz-", "-ms-"),
    "user-select": ("-webkit-", "-moz-", "-ms-"),
}
VALUE_PREFIXES: dict[tuple[str, str], tuple[str, ...]] = {
    ("position", "sticky"): ("-webkit-",),
}

DECLARATION_PATTERN = re.compile(
    r"(?P<lead>(?:^|(?<=[{;]))[ \t]*)"
    r"(?P<prop>[a-z][a-z-]*)[ \t]*:[ \t]*(?P<value>[^;{}]+?)[ \t]*"
    r"(?P<end>;|(?=\s*\}))",
    re.MULTILINE,
)


def add_vendor_prefixes(css: str) -> str:
    """Return ``css`` with prefixed declarations inserted before the originals.

    Declarations whose prefixed form already appears in the same rule block
    are left alone, so the function is idempotent.

    Examples
    --------
    >>> add_vendor_prefixes("a { user-select: none; }")
    'a { -webkit-user-select: none; -moz-user-select: none; -ms-user-select: none; user-select: none; }'
    """

    def _expand(match: re.Match[str]) -> str:
        prop = match.group("prop")
        value = match.group("value").strip()
        lead = match.group("lead")
        block = _enclosing_block(css, match.start(), match.end())
        extra: list[str] = []
        for prefix in PROPERTY_PREFIXES.get(prop, ()):
            if f"{prefix}{prop}" not in block:
                extra.append(f"{prefix}{prop}: {value};")
        for prefix in VALUE_PREFIXES.get((prop, value), ()):
            if f"{prefix}{value}" not in block:
                extra.append(f"{prop}: {prefix}{value};")
        if not extra:
            return match.group(0)
        line_start = match.start() == 0 or css[match.start() - 1] == "\n"
        separator = f"\n{lead}" if line_start else " "
        body = match.group(0)[len(lead) :]
        return lead + separator.join([*extra, body])

    return DECLARATION_PATTERN.sub(_expand, css)


def _enclosing_block(css: str, start: int, end: int) -> str:
    """Return the text of the innermost rule block around ``start``."""
    opening = max(css.rfind("{", 0, start), css.rfind("}", 0, start)) + 1
    closing = css.find("}", end)
    return css[opening : closing if closing != -1 else len(css)]


__all__ = ["PROPERTY_PREFIXES", "add_vendor_prefixes"]
