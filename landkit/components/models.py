"""Component value types and the pure property-merging helper."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from landkit.errors import ComponentValidationError

Props = cabc.Mapping[str, typ.Any]
RenderFn = cabc.Callable[[dict[str, typ.Any]], str]


def merge_props(
    defaults: Props | None, overrides: Props | None = None
) -> dict[str, typ.Any]:
    """Return a new mapping with ``overrides`` applied over ``defaults``.

    The merge is shallow and right-biased; explicit values in ``overrides``
    always win, including ``""`` and ``None``. Neither argument is mutated.

    Examples
    --------
    >>> merge_props({"title": "a", "year": 1}, {"title": "b"})
    {'title': 'b', 'year': 1}
    """
    merged: dict[str, typ.Any] = dict(defaults or {})
    if overrides:
        merged.update(overrides)
    return merged


@dc.dataclass(frozen=True, slots=True)
class Component:
    """A named render function plus its default properties.

    Attributes
    ----------
    name : str
        Registry name (``"hero"``) or, for file components, the file stem.
    renderer : Callable
        Function receiving the merged property dict and returning HTML.
    default_props : Mapping
        Defaults merged under the caller's properties on every render.
    alt_renderer : Callable or None
        Optional function returning component-tree (JSX) source for the same
        merged properties.
    """

    name: str
    renderer: RenderFn
    default_props: Props = dc.field(default_factory=dict)
    alt_renderer: RenderFn | None = None

    def render(self, props: Props | None = None) -> str:
        """Render HTML for ``props`` merged over the defaults."""
        return self.renderer(merge_props(self.default_props, props))

    __call__ = render

    def alt_render(self, props: Props | None = None) -> str | None:
        """Render the component-tree source, or ``None`` when unsupported."""
        if self.alt_renderer is None:
            return None
        return self.alt_renderer(merge_props(self.default_props, props))


class ComponentLike(typ.Protocol):
    """Structural shape accepted by the registry."""

    default_props: Props

    def render(self, props: Props | None = None) -> str: ...


def validate_component(name: str, component: object) -> None:
    """Raise :class:`ComponentValidationError` unless ``component`` is usable.

    A component needs a callable ``render`` and a mapping ``default_props``;
    ``alt_render`` is optional but must be callable when present.
    """
    if not callable(getattr(component, "render", None)):
        raise ComponentValidationError(name, "render", "must be callable")
    if not isinstance(getattr(component, "default_props", None), cabc.Mapping):
        raise ComponentValidationError(name, "default_props", "must be a mapping")
    alt = getattr(component, "alt_render", None)
    if alt is not None and not callable(alt):
        raise ComponentValidationError(name, "alt_render", "must be callable")


__all__ = [
    "Component",
    "ComponentLike",
    "Props",
    "RenderFn",
    "merge_props",
    "validate_component",
]
