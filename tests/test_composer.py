"""Unit tests for :class:`landkit.pages.PageComposer`.

The composer is exercised with small marker components so section order,
container wrapping, omission and style concatenation can be read straight
from the rendered document with BeautifulSoup.
"""

from __future__ import annotations

import types

import pytest
from bs4 import BeautifulSoup

from landkit.components import Component, ComponentRegistry, build_resolver
from landkit.errors import ComponentResolutionError, PageNotFoundError, SiteConfigError
from landkit.pages import PageComposer, SectionLayout, order_sections
from landkit.pages.models import Section
from landkit.styles import StyleProcessor, StyleSource


def _marker(name: str) -> Component:
    return Component(
        name=name,
        renderer=lambda props: f'<p class="marker">{props["label"]}</p>',
        default_props={"label": name},
    )


def _composer(**kwargs: object) -> tuple[PageComposer, ComponentRegistry]:
    registry = ComponentRegistry()
    registry.register("marker", _marker("marker"))
    composer = PageComposer(build_resolver(registry), StyleProcessor(), **kwargs)
    return composer, registry


def _labels(html: str) -> list[str]:
    soup = BeautifulSoup(html, "html.parser")
    return [node.get_text() for node in soup.select("p.marker")]


def test_document_shell_contains_meta() -> None:
    composer, _ = _composer()
    composer.create_page(
        "/",
        {"title": "Acme & Co", "description": "Rockets", "meta": {"author": "Ada"}},
    )
    html = composer.render_page("/")
    assert html.startswith("<!DOCTYPE html>")
    assert html.endswith("\n")
    soup = BeautifulSoup(html, "html.parser")
    assert soup.title.get_text() == "Acme & Co"
    assert soup.find("meta", attrs={"name": "description"})["content"] == "Rockets"
    assert soup.find("meta", attrs={"name": "author"})["content"] == "Ada"
    assert soup.html["lang"] == "en"
    assert soup.select_one("div#root") is not None


def test_sections_follow_layout_order() -> None:
    """Ordered sections sort ascending, ties stay stable, unordered go last."""
    composer, _ = _composer()
    composer.create_page(
        "/",
        {
            "sections": [
                {"component": "marker", "props": {"label": "late"}, "layout": {"order": 2}},
                {"component": "marker", "props": {"label": "loose-1"}},
                {"component": "marker", "props": {"label": "first-a"}, "layout": {"order": 1}},
                {"component": "marker", "props": {"label": "loose-2"}},
                {"component": "marker", "props": {"label": "first-b"}, "layout": {"order": 1}},
            ]
        },
    )
    assert _labels(composer.render_page("/")) == [
        "first-a",
        "first-b",
        "late",
        "loose-1",
        "loose-2",
    ]


def test_order_sections_is_stable() -> None:
    sections = [
        Section(component="a", layout=SectionLayout(order=0)),
        Section(component="b"),
        Section(component="c", layout=SectionLayout(order=0)),
        Section(component="d", layout=SectionLayout(order=-1)),
    ]
    assert [s.component for s in order_sections(sections)] == ["d", "a", "c", "b"]


def test_container_class_wraps_section() -> None:
    composer, _ = _composer()
    composer.create_page(
        "/",
        {
            "sections": [
                {
                    "component": "marker",
                    "layout": {"containerClass": "wrap", "extraClass": ["wide", "dark"]},
                },
                {"component": "marker", "layout": {"extra_class": "ignored"}},
            ]
        },
    )
    soup = BeautifulSoup(composer.render_page("/"), "html.parser")
    wrappers = soup.select("div#root > div")
    assert len(wrappers) == 1
    assert wrappers[0]["class"] == ["wrap", "wide", "dark"]
    assert wrappers[0].select_one("p.marker") is not None


def test_null_props_omit_the_section() -> None:
    """A section whose props are ``None`` is left out of the page."""
    composer, _ = _composer()
    page = composer.create_page(
        "/",
        {
            "hero": {"title": "Welcome"},
            "cta": None,
            "sections": [{"component": "marker", "props": None}],
        },
    )
    assert [section.component for section in page.sections] == ["hero"]
    soup = BeautifulSoup(composer.render_page("/"), "html.parser")
    assert soup.select_one(".landkit-hero") is not None
    assert soup.select_one(".landkit-cta") is None
    assert soup.select_one("p.marker") is None


def test_empty_props_use_defaults() -> None:
    composer, _ = _composer()
    composer.create_page("/", {"marker": {}})
    assert _labels(composer.render_page("/")) == ["marker"]


def test_styles_are_ordered_global_page_section() -> None:
    composer, _ = _composer(global_styles=[StyleSource.inline(".global { color: red; }")])
    composer.create_page(
        "/",
        {
            "styles": [".page { color: green; }"],
            "sections": [
                {
                    "component": "marker",
                    "layout": {"order": 2},
                    "styles": [".second { color: blue; }"],
                },
                {
                    "component": "marker",
                    "layout": {"order": 1},
                    "styles": [".first { color: black; }"],
                },
            ],
        },
    )
    soup = BeautifulSoup(composer.render_page("/"), "html.parser")
    css = soup.head.style.get_text()
    positions = [css.index(name) for name in (".global", ".page", ".first", ".second")]
    assert positions == sorted(positions)


def test_unknown_route_raises_not_found() -> None:
    composer, _ = _composer()
    with pytest.raises(PageNotFoundError, match="'/nope'"):
        composer.render_page("/nope")


def test_unresolvable_component_names_the_component() -> None:
    composer, _ = _composer()
    with pytest.raises(ComponentResolutionError, match="pricing"):
        composer.create_page("/", {"sections": [{"component": "pricing"}]})
    assert "/" not in composer


def test_file_components_require_opt_in() -> None:
    composer, _ = _composer()
    with pytest.raises(ComponentResolutionError, match="dynamic component loading"):
        composer.create_page("/", {"sections": [{"component": "components/x.py"}]})


def test_component_objects_can_be_used_directly() -> None:
    composer, _ = _composer()
    composer.create_page(
        "/", {"sections": [{"component": _marker("inline"), "props": {}}]}
    )
    assert _labels(composer.render_page("/")) == ["inline"]


def test_objects_without_component_shape_are_rejected() -> None:
    def plain_banner(props: dict[str, object]) -> str:
        return "<p>banner</p>"

    composer, _ = _composer()
    with pytest.raises(ComponentResolutionError, match="plain_banner"):
        composer.create_page("/", {"sections": [{"component": plain_banner}]})
    bare = types.SimpleNamespace(name="bare", render=plain_banner)
    with pytest.raises(ComponentResolutionError, match="default_props must be a mapping"):
        composer.create_page("/", {"sections": [{"component": bare}]})
    assert "/" not in composer


def test_pages_re_resolve_components_on_render() -> None:
    """Re-registering a component after ``create_page`` changes the output."""
    composer, registry = _composer()
    composer.create_page("/", {"marker": {"label": "x"}})
    registry.register(
        "marker",
        Component(
            name="marker",
            renderer=lambda props: f'<p class="marker">new {props["label"]}</p>',
        ),
    )
    assert _labels(composer.render_page("/")) == ["new x"]


def test_routes_are_normalised_and_replaced() -> None:
    composer, _ = _composer()
    composer.create_page("about/", {"title": "One"})
    composer.create_page("/about", {"title": "Two"})
    assert composer.routes() == ["/about"]
    assert "Two" in composer.render_page("/about/")
    composer.remove_page("/about")
    assert composer.routes() == []


def test_malformed_layout_is_rejected() -> None:
    composer, _ = _composer()
    with pytest.raises(SiteConfigError, match="order must be an integer"):
        composer.create_page(
            "/", {"sections": [{"component": "marker", "layout": {"order": "1"}}]}
        )


def test_component_tree_rendering() -> None:
    composer, _ = _composer()
    composer.create_page("/", {"title": "Acme", "hero": {"title": "Welcome"}, "marker": {}})
    tree = composer.render_component_tree("/")
    assert tree.startswith("// Acme")
    assert "function Section1()" in tree
    assert '{"Welcome"}' in tree
    assert "return null; // marker renders HTML only" in tree
    assert "<Section2 />" in tree
    assert "&lt;" not in tree


def test_component_tree_header_stays_one_comment_line() -> None:
    composer, _ = _composer()
    composer.create_page("/", {"title": "Bob & <Co>\nLaunch", "marker": {}})
    tree = composer.render_component_tree("/")
    assert tree.splitlines()[0] == "// Bob & <Co> Launch"
    assert "\nLaunch" not in tree
