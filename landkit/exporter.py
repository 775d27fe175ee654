"""Write registered pages, or a single component, to a static file tree."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from .errors import ComponentValidationError
from .pages.composer import normalize_route

if typ.TYPE_CHECKING:
    from .components.models import ComponentLike
    from .pages import PageComposer

logger = logging.getLogger(__name__)


def route_to_path(route: str) -> Path:
    """Map a route to its output file relative to the export root.

    >>> route_to_path("/")
    PosixPath('index.html')
    >>> route_to_path("/docs/intro")
    PosixPath('docs/intro.html')
    """
    normalized = normalize_route(route)
    if normalized == "/":
        return Path("index.html")
    return Path(f"{normalized.lstrip('/')}.html")


class StaticExporter:
    """Render each route of a :class:`PageComposer` into ``output_dir``."""

    def __init__(self, composer: PageComposer) -> None:
        self.composer = composer

    def run(self, output_dir: Path) -> list[Path]:
        """Render and write every page, returning the written paths.

        Parent directories are created as needed; existing files are
        overwritten. Rendering errors propagate without cleaning up files
        already written.
        """
        written: list[Path] = []
        for route in self.composer.routes():
            html = self.composer.render_page(route)
            output_path = output_dir / route_to_path(route)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            logger.debug("exported %s to %s", route, output_path)
            written.append(output_path)
        return written


def export_component(
    component: ComponentLike,
    name: str,
    output_dir: Path,
    props: cabc.Mapping[str, typ.Any] | None = None,
) -> Path:
    """Render one component on its own into ``output_dir/<name>.html``.

    The component receives ``props`` merged over its defaults; with no
    ``props`` it renders its default content.
    """
    if not name or Path(name).name != name:
        raise ComponentValidationError(name, "name", "cannot be used as a file name")
    html = component.render(props)
    output_path = output_dir / f"{name}.html"
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html if html.endswith("\n") else f"{html}\n", encoding="utf-8")
    logger.debug("exported component %s to %s", name, output_path)
    return output_path


__all__ = ["StaticExporter", "export_component", "route_to_path"]
