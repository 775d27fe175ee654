"""The application object a landkit project builds its pages with.

A project's ``pages/index.py`` creates one :class:`LandingApp` with
:func:`create_app`, registers custom components, and declares its pages:

>>> from landkit import create_app
>>> app = create_app(dynamic_components=False)  # doctest: +SKIP
>>> app.create_page("/", {
...     "title": "Acme",
...     "hero": {"title": "Welcome"},
...     "footer": {"companyName": "Acme"},
... })  # doctest: +SKIP

The CLI then calls :meth:`LandingApp.start` (``landkit serve``) or
:meth:`LandingApp.export_static_site` (``landkit build``). Each application
owns its own registry, style processor, and optional component loader;
nothing is shared between instances.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from .components import ComponentRegistry, DynamicComponentLoader, build_resolver
from .config import DEFAULT_HOST, DEFAULT_PORT, ProjectConfig, load_project_config
from .exporter import StaticExporter, export_component
from .pages import Page, PageComposer, PageConfig
from .server import PreviewServer
from .styles import StyleProcessor, StyleSource

if typ.TYPE_CHECKING:
    from .components.models import ComponentLike


class LandingApp:
    """Hold the registry, composer, and pages of one landkit site."""

    def __init__(
        self,
        *,
        config: ProjectConfig,
        registry: ComponentRegistry | None = None,
        styles: StyleProcessor | None = None,
        loader: DynamicComponentLoader | None = None,
        global_styles: cabc.Iterable[StyleSource] = (),
    ) -> None:
        """Wire the application's collaborators together.

        Parameters
        ----------
        config : ProjectConfig
            Project settings (root, server address, public directory).
        registry : ComponentRegistry, optional
            Component registry; a fresh one seeded with built-ins by default.
        styles : StyleProcessor, optional
            Style processor; a default processor rooted at the project.
        loader : DynamicComponentLoader, optional
            Enables file-path component references when supplied.
        global_styles : Iterable[StyleSource], optional
            Styles emitted first on every page.
        """
        self.config = config
        self.registry = registry or ComponentRegistry()
        self.styles = styles or StyleProcessor(root=config.root)
        self.loader = loader
        self.composer = PageComposer(
            build_resolver(self.registry, loader),
            self.styles,
            global_styles=global_styles,
        )
        self._server: PreviewServer | None = None

    @property
    def root(self) -> Path:
        return self.config.root

    def register_component(self, name: str, component: ComponentLike) -> None:
        self.registry.register(name, component)

    def get_component(self, name: str) -> ComponentLike:
        return self.registry.get(name)

    def clear_cache(self) -> None:
        """Drop custom components and every style and file-component cache."""
        self.registry.clear()
        self.invalidate_caches()

    def invalidate_caches(self) -> None:
        """Forget processed styles and loaded component files."""
        self.styles.clear_cache()
        if self.loader is not None:
            self.loader.invalidate()

    def create_page(
        self, route: str, config: PageConfig | cabc.Mapping[str, typ.Any]
    ) -> Page:
        return self.composer.create_page(route, config)

    def render_page(self, route: str) -> str:
        return self.composer.render_page(route)

    def render_component_tree(self, route: str) -> str:
        return self.composer.render_component_tree(route)

    def routes(self) -> list[str]:
        return self.composer.routes()

    def export_static_site(self, output_dir: Path | str | None = None) -> list[Path]:
        """Write every page under ``output_dir`` (default: configured output)."""
        target = Path(output_dir) if output_dir is not None else self.config.output_dir
        if not target.is_absolute():
            target = self.root / target
        return StaticExporter(self.composer).run(target)

    def export_component(
        self,
        name: str,
        output_dir: Path | str | None = None,
        props: cabc.Mapping[str, typ.Any] | None = None,
    ) -> Path:
        """Write the component ``name`` to ``<output_dir>/<name>.html``.

        ``output_dir`` defaults to the project root; relative paths resolve
        against it.

        Raises
        ------
        ComponentNotFoundError
            If ``name`` is neither a custom nor a built-in component.
        """
        target = Path(output_dir) if output_dir is not None else Path()
        if not target.is_absolute():
            target = self.root / target
        return export_component(self.get_component(name), name, target, props)

    @property
    def server(self) -> PreviewServer:
        if self._server is None:
            self._server = PreviewServer(self, public_dir=self.config.public_dir)
        return self._server

    def start(self, port: int | None = None, *, host: str | None = None) -> None:
        """Run the preview server until interrupted."""
        self.server.run(
            host=host or self.config.host or DEFAULT_HOST,
            port=port or self.config.port or DEFAULT_PORT,
        )

    def stop(self) -> None:
        if self._server is not None:
            self._server.stop()


def create_app(
    root: Path | str | None = None,
    *,
    dynamic_components: bool | None = None,
    global_styles: cabc.Iterable[StyleSource | str | cabc.Mapping[str, typ.Any]] = (),
    config: ProjectConfig | None = None,
) -> LandingApp:
    """Build a :class:`LandingApp` for the project at ``root``.

    Parameters
    ----------
    root : Path or str, optional
        Project root; defaults to the current directory. ``landkit.yaml`` is
        read from here unless ``config`` is given.
    dynamic_components : bool, optional
        Allow sections to reference component files. Overrides the
        ``dynamic_components`` setting in ``landkit.yaml``.
    global_styles : Iterable, optional
        Extra global styles, appended after those configured in
        ``landkit.yaml``. Strings ending in ``.css``/``.scss`` are paths.
    config : ProjectConfig, optional
        Pre-loaded settings.
    """
    project_root = Path(root).resolve() if root is not None else Path.cwd()
    settings = config or load_project_config(project_root)
    dynamic = settings.dynamic_components if dynamic_components is None else dynamic_components
    styles = StyleProcessor(
        root=settings.root,
        content_globs=settings.tailwind.content,
        tailwind_executable=settings.tailwind.executable,
    )
    loader = DynamicComponentLoader(settings.root) if dynamic else None
    return LandingApp(
        config=settings,
        styles=styles,
        loader=loader,
        global_styles=[
            *settings.styles,
            *(StyleSource.coerce(entry) for entry in global_styles),
        ],
    )


__all__ = ["LandingApp", "create_app"]
