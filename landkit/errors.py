"""Exception hierarchy shared by the landkit packages.

Every error raised deliberately by landkit derives from :class:`LandkitError`
and from the closest builtin exception, so callers can either catch the whole
family (as the CLI does) or the builtin they already expect.
"""

from __future__ import annotations

from pathlib import Path


class LandkitError(Exception):
    """Base class for landkit failures reported to the user."""


class ComponentValidationError(LandkitError, ValueError):
    """Raised when a component does not expose the expected shape."""

    def __init__(self, name: str, field: str, reason: str) -> None:
        self.name = name
        self.field = field
        super().__init__(f"Failed to register component {name!r}: {field} {reason}")


class ComponentNotFoundError(LandkitError, LookupError):
    """Raised when a component name is neither custom nor built-in."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Component {name!r} not found")


class ComponentResolutionError(LandkitError, LookupError):
    """Raised when a section's component reference cannot be resolved."""

    def __init__(self, reference: object, reason: str) -> None:
        self.reference = reference
        super().__init__(f"Cannot resolve component {reference!s}: {reason}")


class ComponentLoadError(LandkitError, RuntimeError):
    """Raised when a file-based component cannot be loaded."""


class DisallowedImportError(ComponentLoadError):
    """Raised when a sandboxed component imports outside the allow-list."""


class UnsupportedStyleError(LandkitError, ValueError):
    """Raised for style dialects outside the closed enumeration."""

    def __init__(self, dialect: object) -> None:
        self.dialect = dialect
        super().__init__(f"Unsupported style type: {dialect!r}")


class StyleCompileError(LandkitError, RuntimeError):
    """Raised when an external style compiler fails."""


class PageNotFoundError(LandkitError, LookupError):
    """Raised when rendering a route that has no page."""

    def __init__(self, route: str) -> None:
        self.route = route
        super().__init__(f"Page {route!r} not found")


class SiteConfigError(LandkitError, ValueError):
    """Raised when project or page configuration is invalid or incomplete."""


class ProjectError(LandkitError, FileNotFoundError):
    """Raised when the working directory is not a landkit project."""


class BuildError(LandkitError, RuntimeError):
    """Raised when transforming a source file fails."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to build {path}: {reason}")


__all__ = [
    "BuildError",
    "ComponentLoadError",
    "ComponentNotFoundError",
    "ComponentResolutionError",
    "ComponentValidationError",
    "DisallowedImportError",
    "LandkitError",
    "PageNotFoundError",
    "ProjectError",
    "SiteConfigError",
    "StyleCompileError",
    "UnsupportedStyleError",
]
