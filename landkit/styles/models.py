"""Style source descriptions consumed by :class:`StyleProcessor`."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ
from pathlib import Path

from landkit.errors import SiteConfigError, UnsupportedStyleError


class StyleDialect(enum.StrEnum):
    """Closed set of style languages landkit can compile to CSS."""

    PLAIN = "plain"
    PREPROCESSED = "preprocessed"
    UTILITY = "utility-first"

    @classmethod
    def parse(cls, value: StyleDialect | str) -> StyleDialect:
        """Return the dialect for ``value``, accepting common aliases.

        Raises
        ------
        UnsupportedStyleError
            If ``value`` names no known dialect.
        """
        if isinstance(value, StyleDialect):
            return value
        normalized = str(value).strip().lower()
        try:
            return cls(DIALECT_ALIASES.get(normalized, normalized))
        except ValueError as exc:
            raise UnsupportedStyleError(value) from exc


DIALECT_ALIASES: dict[str, str] = {
    "css": "plain",
    "scss": "preprocessed",
    "sass": "preprocessed",
    "tailwind": "utility-first",
    "utility": "utility-first",
}

CacheKey = tuple[str | None, str | None, str]


@dc.dataclass(frozen=True, slots=True)
class StyleSource:
    """Inline style text or a stylesheet path, tagged with its dialect."""

    dialect: StyleDialect | str = StyleDialect.PLAIN
    content: str | None = None
    path: Path | None = None

    def __post_init__(self) -> None:
        if self.content is None and self.path is None:
            msg = "A style source needs inline content or a path."
            raise SiteConfigError(msg)

    @property
    def cache_key(self) -> CacheKey:
        """Return the ``(path, content, dialect)`` tuple used for caching."""
        path = str(self.path) if self.path is not None else None
        return (path, self.content, str(self.dialect))

    @classmethod
    def inline(
        cls, content: str, dialect: StyleDialect | str = StyleDialect.PLAIN
    ) -> StyleSource:
        return cls(dialect=dialect, content=content)

    @classmethod
    def file(
        cls, path: Path | str, dialect: StyleDialect | str | None = None
    ) -> StyleSource:
        """Reference a stylesheet, inferring the dialect from its suffix."""
        location = Path(path)
        if dialect is None:
            dialect = (
                StyleDialect.PREPROCESSED
                if location.suffix.lower() in {".scss", ".sass"}
                else StyleDialect.PLAIN
            )
        return cls(dialect=dialect, path=location)

    @classmethod
    def coerce(cls, value: StyleSource | str | cabc.Mapping[str, typ.Any]) -> StyleSource:
        """Build a source from a config value.

        Strings ending in ``.css``/``.scss``/``.sass`` are paths, other strings
        are inline CSS; mappings use the ``type``/``dialect``, ``content`` and
        ``path`` keys.
        """
        match value:
            case StyleSource():
                return value
            case str() as text if Path(text).suffix.lower() in {".css", ".scss", ".sass"}:
                return cls.file(text)
            case str() as text:
                return cls.inline(text)
            case cabc.Mapping():
                dialect = value.get("dialect", value.get("type"))
                path = value.get("path")
                if path is not None:
                    return cls.file(path, dialect)
                content = value.get("content")
                if content is None:
                    msg = "Style entries require 'content' or 'path'."
                    raise SiteConfigError(msg)
                return cls.inline(str(content), dialect or StyleDialect.PLAIN)
            case _:
                msg = f"Cannot interpret style entry {value!r}."
                raise SiteConfigError(msg)


__all__ = ["CacheKey", "StyleDialect", "StyleSource"]
