"""Built-in landing page components: ``hero``, ``cta`` and ``footer``.

Each component renders a Jinja template from ``landkit/templates/components``
with autoescaping enabled, so property values are always HTML-escaped. The
component-tree renderers emit JSX source for the same properties, embedding
the component stylesheet as a string constant.

Examples
--------
>>> from landkit.components.builtins import HERO
>>> "Welcome" in HERO.render({"title": "Welcome"})
True
"""

from __future__ import annotations

import datetime as dt
import functools
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .models import Component

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


@functools.cache
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _template_renderer(name: str) -> typ.Callable[[dict[str, typ.Any]], str]:
    """Return a render function bound to ``components/<name>.jinja``."""

    def render(props: dict[str, typ.Any]) -> str:
        template = _environment().get_template(f"components/{name}.jinja")
        return template.render(**props)

    render.__name__ = f"render_{name}"
    return render


def _jsx_renderer(name: str) -> typ.Callable[[dict[str, typ.Any]], str]:
    """Return a renderer producing JSX source for ``name``."""

    def render(props: dict[str, typ.Any]) -> str:
        env = _environment()
        styles = env.get_template(f"components/{name}.css.jinja").render(**props)
        template = env.get_template(f"components/{name}.jsx.jinja")
        return template.render(styles=styles, **props)

    render.__name__ = f"render_{name}_jsx"
    return render


HERO = Component(
    name="hero",
    renderer=_template_renderer("hero"),
    default_props={
        "title": "Welcome to landkit",
        "subtitle": "Build fast landing pages with ease",
        "ctaText": "Get Started",
        "ctaUrl": "#",
        "backgroundColor": "#f8f9fa",
        "textColor": "#212529",
    },
    alt_renderer=_jsx_renderer("hero"),
)

CTA = Component(
    name="cta",
    renderer=_template_renderer("cta"),
    default_props={
        "title": "Ready to get started?",
        "description": "Join thousands of developers building landing pages with landkit",
        "primaryButtonText": "Get Started",
        "primaryButtonUrl": "#",
        "secondaryButtonText": "Learn More",
        "secondaryButtonUrl": "#docs",
        "backgroundColor": "#ffffff",
        "textColor": "#212529",
    },
    alt_renderer=_jsx_renderer("cta"),
)

FOOTER = Component(
    name="footer",
    renderer=_template_renderer("footer"),
    default_props={
        "companyName": "landkit",
        "year": dt.datetime.now(dt.UTC).year,
        "links": (
            {"text": "Documentation", "url": "#docs"},
            {"text": "GitHub", "url": "#github"},
            {"text": "Examples", "url": "#examples"},
            {"text": "Contact", "url": "#contact"},
        ),
        "backgroundColor": "#f8f9fa",
        "textColor": "#6c757d",
    },
    alt_renderer=_jsx_renderer("footer"),
)

BUILTIN_COMPONENTS: dict[str, Component] = {
    component.name: component for component in (HERO, CTA, FOOTER)
}

__all__ = ["BUILTIN_COMPONENTS", "CTA", "FOOTER", "HERO", "TEMPLATES_DIR"]
