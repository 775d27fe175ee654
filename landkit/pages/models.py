"""Typed dataclasses describing pages and their sections."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from landkit.components.resolvers import ComponentRef
    from landkit.styles import StyleSource


@dc.dataclass(slots=True)
class PageMeta:
    """Document-level metadata injected into the HTML shell."""

    title: str = "landkit"
    description: str = ""
    lang: str = "en"
    extra: dict[str, str] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class SectionLayout:
    """Ordering and container directives for one section.

    Sections without an ``order`` render after every ordered section, in the
    order they were declared.
    """

    order: int | None = None
    container_class: str | None = None
    extra_class: str | None = None


@dc.dataclass(slots=True)
class Section:
    """One component instance placed on a page.

    ``props`` set to ``None`` marks the section as omitted; an empty mapping
    renders the component with its defaults.
    """

    component: ComponentRef
    props: dict[str, typ.Any] | None = dc.field(default_factory=dict)
    layout: SectionLayout | None = None
    styles: list[StyleSource] = dc.field(default_factory=list)

    @property
    def omitted(self) -> bool:
        return self.props is None


@dc.dataclass(slots=True)
class PageConfig:
    """Route-independent description of a page."""

    meta: PageMeta = dc.field(default_factory=PageMeta)
    sections: list[Section] = dc.field(default_factory=list)
    styles: list[StyleSource] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Page:
    """A page registered under a route."""

    route: str
    meta: PageMeta
    sections: list[Section]
    styles: list[StyleSource]


__all__ = ["Page", "PageConfig", "PageMeta", "Section", "SectionLayout"]
