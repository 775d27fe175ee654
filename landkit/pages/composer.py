"""Compose registered components into complete HTML documents.

:class:`PageComposer` keeps the page definitions for an application, keyed by
route. Pages are stored as configuration rather than rendered strings, so each
:meth:`PageComposer.render_page` call re-resolves components and re-processes
styles; a component re-registered after ``create_page`` is picked up by the
next render.

Example
-------
>>> from landkit.components import ComponentRegistry, build_resolver
>>> from landkit.styles import StyleProcessor
>>> composer = PageComposer(build_resolver(ComponentRegistry()), StyleProcessor())
>>> _ = composer.create_page("/", {"title": "Home", "hero": {"title": "Hi"}})
>>> "<title>Home</title>" in composer.render_page("/")
True
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from landkit.components.models import merge_props
from landkit.errors import PageNotFoundError

from .builders import build_page_config
from .models import Page, PageConfig, Section, SectionLayout

if typ.TYPE_CHECKING:
    from landkit.components.resolvers import ComponentResolver
    from landkit.styles import StyleProcessor, StyleSource

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def normalize_route(route: str) -> str:
    """Return ``route`` with a leading slash and no trailing slash.

    >>> normalize_route("about/")
    '/about'
    >>> normalize_route("")
    '/'
    """
    stripped = route.strip().strip("/")
    return f"/{stripped}" if stripped else "/"


def order_sections(sections: cabc.Iterable[Section]) -> list[Section]:
    """Sort sections by ``layout.order``; unordered sections go last.

    ``sorted`` is stable, so ties keep their declaration order.
    """

    def _key(section: Section) -> tuple[bool, int]:
        order = section.layout.order if section.layout else None
        return (order is None, order if order is not None else 0)

    return sorted(sections, key=_key)


def wrap_section(markup: str, layout: SectionLayout | None) -> str:
    """Wrap ``markup`` in the layout's container element when one is set."""
    if layout is None or not layout.container_class:
        return markup
    classes = " ".join(
        value for value in (layout.container_class, layout.extra_class) if value
    )
    return f'<div class="{escape(classes)}">{markup}</div>'


class PageComposer:
    """Store page definitions and render them into HTML documents."""

    def __init__(
        self,
        resolver: ComponentResolver,
        styles: StyleProcessor,
        *,
        global_styles: cabc.Iterable[StyleSource] = (),
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the composer and its document template.

        Parameters
        ----------
        resolver : ComponentResolver
            Resolves section component references (names, paths, objects).
        styles : StyleProcessor
            Processor used for global, page, and section style sources.
        global_styles : Iterable[StyleSource], optional
            Styles emitted first on every page.
        templates_dir : Path, optional
            Directory holding ``page.jinja``; defaults to the package
            templates.
        """
        self.resolver = resolver
        self.styles = styles
        self.global_styles = list(global_styles)
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page.jinja")
        self._pages: dict[str, Page] = {}

    def create_page(
        self, route: str, config: PageConfig | cabc.Mapping[str, typ.Any]
    ) -> Page:
        """Register a page under ``route``, replacing any existing page.

        Every section's component is resolved immediately so broken
        references fail here instead of at request time. Sections whose
        ``props`` are ``None`` are dropped.

        Raises
        ------
        ComponentResolutionError
            If a section references a component that cannot be resolved.
        SiteConfigError
            If ``config`` is a malformed mapping.
        """
        page_config = build_page_config(config)
        sections = [section for section in page_config.sections if not section.omitted]
        for section in sections:
            self.resolver.resolve(section.component)
        page = Page(
            route=normalize_route(route),
            meta=page_config.meta,
            sections=sections,
            styles=list(page_config.styles),
        )
        if page.route in self._pages:
            logger.debug("replacing page %s", page.route)
        self._pages[page.route] = page
        return page

    def get_page(self, route: str) -> Page:
        try:
            return self._pages[normalize_route(route)]
        except KeyError as exc:
            raise PageNotFoundError(route) from exc

    def remove_page(self, route: str) -> None:
        self.get_page(route)
        del self._pages[normalize_route(route)]

    def routes(self) -> list[str]:
        """Return registered routes in creation order."""
        return list(self._pages)

    def __contains__(self, route: object) -> bool:
        return isinstance(route, str) and normalize_route(route) in self._pages

    def render_sections(self, page: Page) -> tuple[list[str], list[StyleSource]]:
        """Render ``page``'s sections in layout order.

        Returns the section markup and the section style sources, both in
        render order.
        """
        markup: list[str] = []
        section_styles: list[StyleSource] = []
        for section in order_sections(page.sections):
            component = self.resolver.resolve(section.component)
            props = merge_props(component.default_props, section.props)
            markup.append(wrap_section(component.render(props), section.layout))
            section_styles.extend(section.styles)
        return markup, section_styles

    def render_page(self, route: str) -> str:
        """Render the page at ``route`` into a complete HTML document.

        Styles are concatenated as global, then page-level, then per-section
        in render order.

        Raises
        ------
        PageNotFoundError
            If no page is registered under ``route``.
        """
        page = self.get_page(route)
        markup, section_styles = self.render_sections(page)
        css = self.styles.process_all(
            [*self.global_styles, *page.styles, *section_styles]
        )
        html = self.template.render(
            meta=page.meta,
            styles=Markup(css),
            body=Markup("\n".join(markup)),
        )
        if not html.endswith("\n"):
            html += "\n"
        return html

    def render_component_tree(self, route: str) -> str:
        """Render the page at ``route`` as JSX component-tree source.

        Sections whose component has no component-tree renderer become
        functions returning ``null`` so the tree keeps its shape.
        """
        page = self.get_page(route)
        bodies: list[Markup] = []
        for section in order_sections(page.sections):
            component = self.resolver.resolve(section.component)
            alt_render = getattr(component, "alt_render", None)
            source = alt_render(section.props) if alt_render is not None else None
            if source is None:
                logger.debug("no component tree for %s", section.component)
                label = _comment_text(section.component)
                source = f"return null; // {label} renders HTML only"
            bodies.append(Markup(source.rstrip()))
        tree = self.env.get_template("page.jsx.jinja").render(
            title=_comment_text(page.meta.title), sections=bodies
        )
        if not tree.endswith("\n"):
            tree += "\n"
        return tree


def _comment_text(value: object) -> Markup:
    """Return ``value`` as one line of raw text for a JavaScript comment."""
    return Markup(" ".join(str(value).split()))


__all__ = [
    "PageComposer",
    "normalize_route",
    "order_sections",
    "wrap_section",
]
