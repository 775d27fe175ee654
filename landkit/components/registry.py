"""Two-tier component registry: built-ins plus user registrations."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from landkit.errors import ComponentNotFoundError

from .builtins import BUILTIN_COMPONENTS
from .models import ComponentLike, validate_component

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Map component names to implementations.

    User registrations are looked up before built-ins, so registering
    ``"hero"`` shadows the built-in hero until :meth:`clear` is called. The
    registry is an ordinary value: construct one per application rather than
    sharing a process-wide instance.
    """

    def __init__(
        self, builtins: cabc.Mapping[str, ComponentLike] | None = None
    ) -> None:
        self._builtins: dict[str, ComponentLike] = dict(
            BUILTIN_COMPONENTS if builtins is None else builtins
        )
        self._custom: dict[str, ComponentLike] = {}

    def register(self, name: str, component: ComponentLike) -> None:
        """Validate and register ``component`` under ``name``.

        Raises
        ------
        ComponentValidationError
            If ``render`` is not callable or ``default_props`` is not a mapping.
        """
        validate_component(name, component)
        if name in self._custom:
            logger.debug("replacing custom component %s", name)
        self._custom[name] = component

    def get(self, name: str) -> ComponentLike:
        """Return the custom component for ``name``, else the built-in."""
        try:
            return self._custom[name]
        except KeyError:
            pass
        try:
            return self._builtins[name]
        except KeyError as exc:
            raise ComponentNotFoundError(name) from exc

    def __contains__(self, name: object) -> bool:
        return name in self._custom or name in self._builtins

    def names(self) -> list[str]:
        """Return every resolvable component name, sorted."""
        return sorted(set(self._builtins) | set(self._custom))

    def clear(self) -> None:
        """Drop all custom registrations, leaving built-ins intact."""
        self._custom.clear()

    @property
    def custom(self) -> typ.Mapping[str, ComponentLike]:
        return dict(self._custom)


__all__ = ["ComponentRegistry"]
