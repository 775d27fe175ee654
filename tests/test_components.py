"""Unit tests for the built-in components and property merging.

These tests cover ``merge_props`` and the ``hero``, ``cta`` and ``footer``
components: defaults are applied when properties are missing, explicit
values win, and every property value is HTML-escaped.

Usage
-----
Run ``pytest tests/test_components.py -v``.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from landkit import components
from landkit.components import CTA, FOOTER, HERO, Component, merge_props


def test_merge_props_is_right_biased_and_pure() -> None:
    """Overrides should win without mutating the defaults."""
    defaults = {"title": "a", "year": 2024}
    merged = merge_props(defaults, {"title": "b", "extra": None})
    assert merged == {"title": "b", "year": 2024, "extra": None}
    assert defaults == {"title": "a", "year": 2024}, "defaults must not change"
    assert merged is not defaults


def test_merge_props_keeps_explicit_empty_values() -> None:
    """An explicit empty string overrides the default value."""
    assert merge_props({"subtitle": "x"}, {"subtitle": ""}) == {"subtitle": ""}


def test_render_none_matches_render_defaults() -> None:
    """Rendering without properties equals rendering the defaults."""
    for component in (HERO, CTA, FOOTER):
        assert component.render(None) == component.render(dict(component.default_props))


def test_render_merges_partial_props_over_defaults() -> None:
    """A partial property bag renders like the merged bag."""
    props = {"title": "Welcome"}
    expected = HERO.render(merge_props(HERO.default_props, props))
    assert HERO.render(props) == expected
    soup = BeautifulSoup(HERO.render(props), "html.parser")
    assert soup.h1 is not None
    assert soup.h1.get_text() == "Welcome"
    assert soup.select_one("a.landkit-hero-cta").get_text() == "Get Started"


def test_component_values_are_escaped() -> None:
    """Property values must never inject markup."""
    html = HERO.render({"title": "<script>alert(1)</script>"})
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_cta_secondary_button_omitted_when_blank() -> None:
    """The secondary button disappears when its text is empty."""
    with_secondary = BeautifulSoup(CTA.render(), "html.parser")
    without = BeautifulSoup(CTA.render({"secondaryButtonText": ""}), "html.parser")
    assert with_secondary.select_one(".landkit-cta-secondary") is not None
    assert without.select_one(".landkit-cta-secondary") is None


def test_footer_renders_links_and_company() -> None:
    """Footer links and the copyright line come from the properties."""
    html = FOOTER.render(
        {
            "companyName": "Acme",
            "year": 2030,
            "links": [{"text": "About", "url": "/about"}],
        }
    )
    soup = BeautifulSoup(html, "html.parser")
    links = soup.select("a.landkit-footer-link")
    assert [(link["href"], link.get_text()) for link in links] == [("/about", "About")]
    copyright_text = soup.select_one(".landkit-footer-copyright").get_text()
    assert "2030 Acme" in copyright_text


def test_component_styles_use_props() -> None:
    """Colour properties flow into the component stylesheet."""
    html = HERO.render({"backgroundColor": "#123456"})
    assert "background-color: #123456;" in html


def test_alt_render_emits_jsx_source() -> None:
    """Built-ins provide a component-tree rendering of the same properties."""
    source = HERO.alt_render({"title": "Welcome"})
    assert source is not None
    assert 'className="landkit-hero"' in source
    assert '{"Welcome"}' in source


def test_alt_render_is_none_without_alt_renderer() -> None:
    """Components without an alternate renderer report ``None``."""
    plain = Component(name="plain", renderer=lambda props: "<p></p>")
    assert plain.alt_render() is None


def test_component_is_callable() -> None:
    """Calling a component is the same as rendering it."""
    assert HERO({"title": "Hi"}) == HERO.render({"title": "Hi"})


def test_lowercase_aliases_point_at_builtins() -> None:
    """``components.hero`` and friends are the built-in components."""
    assert components.hero is HERO
    assert components.cta is CTA
    assert components.footer is FOOTER
