"""Component models, the registry, and component resolution.

Examples
--------
>>> from landkit.components import ComponentRegistry
>>> registry = ComponentRegistry()
>>> registry.get("hero").default_props["ctaText"]
'Get Started'
"""

from .builtins import BUILTIN_COMPONENTS, CTA, FOOTER, HERO
from .loader import ComponentDialect, DynamicComponentLoader
from .models import Component, merge_props, validate_component
from .registry import ComponentRegistry
from .resolvers import (
    ChainResolver,
    ComponentResolver,
    FileResolver,
    RegistryResolver,
    build_resolver,
)

hero = HERO
cta = CTA
footer = FOOTER

__all__ = [
    "BUILTIN_COMPONENTS",
    "CTA",
    "FOOTER",
    "HERO",
    "ChainResolver",
    "Component",
    "ComponentDialect",
    "ComponentRegistry",
    "ComponentResolver",
    "DynamicComponentLoader",
    "FileResolver",
    "RegistryResolver",
    "build_resolver",
    "cta",
    "footer",
    "hero",
    "merge_props",
    "validate_component",
]
