"""Builders turning plain mappings into page configuration dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from landkit.errors import SiteConfigError
from landkit.styles import StyleSource

from .models import PageConfig, PageMeta, Section, SectionLayout

META_KEYS = frozenset({"title", "description", "lang", "meta"})
RESERVED_KEYS = META_KEYS | {"sections", "styles"}


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_classes(value: str | list[object] | None) -> str | None:
    """Collapse class definitions into one space-separated string."""
    match value:
        case str():
            segments = value.split()
        case list():
            segments = [str(segment).strip() for segment in value]
        case _:
            return None
    joined = " ".join(segment for segment in segments if segment)
    return joined or None


def _pick(payload: cabc.Mapping[str, typ.Any], *keys: str) -> typ.Any:
    """Return the first present key, accepting snake_case and camelCase names."""
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _build_layout(payload: object) -> SectionLayout | None:
    """Build a :class:`SectionLayout` from a ``layout`` mapping."""
    match payload:
        case None:
            return None
        case SectionLayout():
            return payload
        case cabc.Mapping():
            order = payload.get("order")
        case _:
            msg = "Section layout must be a mapping."
            raise SiteConfigError(msg)
    if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
        msg = f"Section layout order must be an integer, got {order!r}."
        raise SiteConfigError(msg)
    return SectionLayout(
        order=order,
        container_class=_normalize_classes(
            _pick(payload, "container_class", "containerClass")
        ),
        extra_class=_normalize_classes(_pick(payload, "extra_class", "extraClass")),
    )


def _build_styles(entries: object) -> list[StyleSource]:
    """Build style sources from a ``styles`` list."""
    match entries:
        case None:
            return []
        case str() | cabc.Mapping() | StyleSource():
            return [StyleSource.coerce(entries)]
        case list() | tuple():
            return [StyleSource.coerce(entry) for entry in entries]
        case _:
            msg = "Styles must be a list of style entries."
            raise SiteConfigError(msg)


def _build_props(component: object, value: object) -> dict[str, typ.Any] | None:
    match value:
        case None:
            return None
        case cabc.Mapping():
            return dict(value)
        case _:
            msg = f"Properties for component {component!s} must be a mapping."
            raise SiteConfigError(msg)


def _build_section(entry: object) -> Section:
    """Build a :class:`Section` from a ``sections`` list entry."""
    match entry:
        case Section():
            return entry
        case {"component": component, **rest}:
            pass
        case _:
            msg = "Section entries require a 'component' reference."
            raise SiteConfigError(msg)
    if not component:
        msg = "Section entries require a 'component' reference."
        raise SiteConfigError(msg)
    props = _build_props(component, rest["props"]) if "props" in rest else {}
    return Section(
        component=component,
        props=props,
        layout=_build_layout(rest.get("layout")),
        styles=_build_styles(rest.get("styles")),
    )


def _build_meta(payload: cabc.Mapping[str, typ.Any]) -> PageMeta:
    """Build page metadata from top-level keys and an optional ``meta`` block."""
    meta_block = payload.get("meta") or {}
    if not isinstance(meta_block, cabc.Mapping):
        msg = "Page 'meta' must be a mapping."
        raise SiteConfigError(msg)
    merged = dict(meta_block)
    for key in ("title", "description", "lang"):
        if key in payload:
            merged[key] = payload[key]
    base = PageMeta()
    extra = {
        str(key): str(value)
        for key, value in merged.items()
        if key not in {"title", "description", "lang"} and value is not None
    }
    return PageMeta(
        title=_optional_str(merged.get("title")) or base.title,
        description=_optional_str(merged.get("description")) or base.description,
        lang=_optional_str(merged.get("lang")) or base.lang,
        extra=extra,
    )


def build_page_config(payload: PageConfig | cabc.Mapping[str, typ.Any]) -> PageConfig:
    """Build a :class:`PageConfig` from a mapping.

    Two shapes are accepted and may be combined: an explicit ``sections``
    list, and shorthand keys where any non-reserved key names a component
    and maps to its properties (``hero: {title: Welcome}``). Shorthand
    sections follow the explicit list in declaration order. A ``null`` value
    omits the section.

    Examples
    --------
    >>> config = build_page_config({"title": "Home", "hero": {"title": "Hi"}})
    >>> [section.component for section in config.sections]
    ['hero']
    """
    match payload:
        case PageConfig():
            return payload
        case cabc.Mapping():
            pass
        case _:
            msg = "Page configuration must be a mapping."
            raise SiteConfigError(msg)

    sections_raw = payload.get("sections") or []
    if not isinstance(sections_raw, list | tuple):
        msg = "Page 'sections' must be a list."
        raise SiteConfigError(msg)
    sections = [_build_section(entry) for entry in sections_raw]
    for key, value in payload.items():
        if key in RESERVED_KEYS:
            continue
        sections.append(Section(component=key, props=_build_props(key, value)))

    return PageConfig(
        meta=_build_meta(payload),
        sections=sections,
        styles=_build_styles(payload.get("styles")),
    )


def _resolve_paths(root: Path, values: cabc.Iterable[StyleSource]) -> list[StyleSource]:
    """Anchor relative style paths at ``root``."""
    resolved: list[StyleSource] = []
    for source in values:
        if source.path is not None and not source.path.is_absolute():
            source = StyleSource(dialect=source.dialect, path=root / source.path)
        resolved.append(source)
    return resolved


__all__ = [
    "RESERVED_KEYS",
    "_build_layout",
    "_build_section",
    "_build_styles",
    "_normalize_classes",
    "_optional_str",
    "_resolve_paths",
    "build_page_config",
]
