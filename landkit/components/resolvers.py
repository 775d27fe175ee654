"""Resolve section component references into renderable components."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from landkit.errors import (
    ComponentLoadError,
    ComponentNotFoundError,
    ComponentResolutionError,
    ComponentValidationError,
)

from .loader import DynamicComponentLoader, is_component_path
from .models import validate_component

if typ.TYPE_CHECKING:
    from .models import ComponentLike
    from .registry import ComponentRegistry

ComponentRef = typ.Union[str, Path, "ComponentLike"]


class ComponentResolver(typ.Protocol):
    """Turn a section's component reference into a component."""

    def resolve(self, reference: ComponentRef) -> ComponentLike: ...


class RegistryResolver:
    """Look names up in a :class:`ComponentRegistry`."""

    def __init__(self, registry: ComponentRegistry) -> None:
        self.registry = registry

    def resolve(self, reference: ComponentRef) -> ComponentLike:
        if not isinstance(reference, str):
            msg = "only component names can be looked up in the registry"
            raise ComponentResolutionError(reference, msg)
        try:
            return self.registry.get(reference)
        except ComponentNotFoundError as exc:
            raise ComponentResolutionError(reference, "not registered") from exc


class FileResolver:
    """Load file references through a :class:`DynamicComponentLoader`."""

    def __init__(self, loader: DynamicComponentLoader) -> None:
        self.loader = loader

    def resolve(self, reference: ComponentRef) -> ComponentLike:
        if not isinstance(reference, str | Path):
            msg = "file components must be referenced by path"
            raise ComponentResolutionError(reference, msg)
        try:
            return self.loader.load(reference)
        except (ComponentLoadError, FileNotFoundError) as exc:
            raise ComponentResolutionError(reference, str(exc)) from exc


class ChainResolver:
    """Dispatch references to the registry or, when enabled, to files.

    Component objects are validated and passed through; paths and names
    with a known component suffix go to the file resolver; everything else
    is a registry name. Without a file resolver, file references are
    rejected rather than executed.
    """

    def __init__(
        self, registry: RegistryResolver, files: FileResolver | None = None
    ) -> None:
        self.registry = registry
        self.files = files

    def resolve(self, reference: ComponentRef) -> ComponentLike:
        if not isinstance(reference, str | Path):
            name = getattr(reference, "name", None) or getattr(
                reference, "__name__", type(reference).__name__
            )
            try:
                validate_component(str(name), reference)
            except ComponentValidationError as exc:
                raise ComponentResolutionError(reference, str(exc)) from exc
            return reference
        if is_component_path(reference):
            if self.files is None:
                msg = "dynamic component loading is disabled"
                raise ComponentResolutionError(reference, msg)
            return self.files.resolve(reference)
        return self.registry.resolve(reference)


def build_resolver(
    registry: ComponentRegistry, loader: DynamicComponentLoader | None = None
) -> ChainResolver:
    """Return the resolver chain for ``registry`` and an optional loader."""
    files = FileResolver(loader) if loader is not None else None
    return ChainResolver(RegistryResolver(registry), files)


__all__ = [
    "ChainResolver",
    "ComponentRef",
    "ComponentResolver",
    "FileResolver",
    "RegistryResolver",
    "build_resolver",
]
