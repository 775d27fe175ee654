"""Cyclopts CLI entrypoint for scaffolding, previewing and building landing pages.

The ``landkit`` console script defined here creates new projects, serves a
project's pages with live reload during development, and builds static
output. Options can also be supplied through ``LANDKIT_*`` environment
variables.

Examples
--------
Scaffold a project without prompting:

>>> from landkit.cli import main
>>> main(["create", "my-site", "--no-input"])  # doctest: +SKIP

Serve it with file watching:

>>> main(["serve", "--project", "my-site", "--watch"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from rich.prompt import Prompt

from ._constants import DEFAULT_BUILD_SOURCE, PROJECT_DIRECTORIES
from .app import create_app
from .build import BuildPipeline, BuildSettings
from .config import PROJECT_CONFIG_NAME
from .errors import LandkitError, ProjectError
from .project import find_entry, load_project
from .scaffold import ProjectScaffolder
from .watcher import FileWatcher

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "A landing page built with landkit"

app = App(name="landkit", config=cyclopts.config.Env("LANDKIT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _set_verbosity(verbose: bool) -> None:
    logging.getLogger("landkit").setLevel(logging.DEBUG if verbose else logging.INFO)


@app.command(help="Scaffold a new landing page project.")
def create(
    name: typ.Annotated[str, Parameter(help="Directory to create the project in")],
    *,
    title: typ.Annotated[
        str | None, Parameter(help="Project title (prompted when omitted)")
    ] = None,
    description: typ.Annotated[
        str | None, Parameter(help="Project description (prompted when omitted)")
    ] = None,
    no_input: typ.Annotated[
        bool, Parameter(help="Use defaults instead of prompting")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Create a project directory with starter pages, components and styles.

    Parameters
    ----------
    name : str
        Target directory; its final component names the project.
    title : str or None, optional
        Page title; prompted for unless ``no_input`` is set, in which case
        the directory name is used.
    description : str or None, optional
        Page description; prompted for unless ``no_input`` is set.
    no_input : bool, optional
        Skip interactive prompts.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    ProjectError
        If the target directory exists and is not empty.
    """
    _set_verbosity(verbose)
    target = Path(name)
    if title is None:
        title = target.name if no_input else Prompt.ask("Project title", default=target.name)
    if description is None:
        description = (
            DEFAULT_DESCRIPTION
            if no_input
            else Prompt.ask("Project description", default=DEFAULT_DESCRIPTION)
        )
    for path in ProjectScaffolder(target, title=title, description=description).run():
        print(f"wrote {_format_path(path)}")
    print(f"next: cd {_format_path(target)} && landkit serve --watch")


@app.command(help="Serve the project's pages for local preview.")
def serve(
    *,
    watch: typ.Annotated[
        bool, Parameter(help="Reload pages when project files change")
    ] = False,
    port: typ.Annotated[
        int | None, Parameter(help="Port to listen on (default from landkit.yaml)")
    ] = None,
    host: typ.Annotated[
        str | None, Parameter(help="Interface to bind (default from landkit.yaml)")
    ] = None,
    project: typ.Annotated[Path, Parameter(help="Project root")] = Path("."),
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Run the preview server until interrupted.

    With ``watch`` enabled, edits under ``pages/``, ``components/``,
    ``styles/`` and ``public/`` (and to ``landkit.yaml``) reload the project
    entry and rebind the server's routes.
    """
    _set_verbosity(verbose)
    root = project.resolve()
    landing = load_project(root)
    server = landing.server

    watcher: FileWatcher | None = None
    if watch:

        def reload(changed: list[Path]) -> None:
            server.refresh(load_project(root))

        watch_paths = [root / directory for directory in PROJECT_DIRECTORIES]
        watch_paths.append(root / PROJECT_CONFIG_NAME)
        watcher = FileWatcher(watch_paths, reload)
        watcher.start()

    bind_host = host or landing.config.host
    bind_port = port or landing.config.port
    print(f"serving {len(landing.routes())} page(s) at http://{bind_host}:{bind_port}")
    try:
        landing.start(bind_port, host=bind_host)
    finally:
        if watcher is not None:
            watcher.stop()


@app.command(help="Build static output for a project or a package source tree.")
def build(
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Output directory (default: dist)")
    ] = None,
    project: typ.Annotated[Path, Parameter(help="Project root")] = Path("."),
    source: typ.Annotated[
        Path | None,
        Parameter(help="Source tree for a package build (default: src)"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Build the project at ``project``.

    When the project has a pages entry (and no ``source`` is given), the
    ``public/`` assets are run through the build pipeline and every page is
    exported as static HTML; one ``manifest.json`` then covers both.
    Otherwise the ``source`` tree is built as a package, with templates and
    packaging metadata alongside. The build mode follows ``LANDKIT_ENV``.
    """
    _set_verbosity(verbose)
    root = project.resolve()
    settings = BuildSettings.from_env()
    try:
        find_entry(root)
    except ProjectError:
        has_entry = False
    else:
        has_entry = source is None

    if not has_entry:
        source_dir = root / (source or DEFAULT_BUILD_SOURCE)
        result = BuildPipeline(
            source_dir,
            output or root / "dist",
            settings=settings,
            templates_dir=root / "templates",
            project_root=root,
        ).run()
        for path in result.outputs:
            print(f"wrote {_format_path(path)}")
        if result.manifest is not None:
            print(f"wrote {_format_path(result.manifest)}")
        return

    landing = load_project(root)
    output_dir = landing.root / landing.config.output_dir
    if output is not None:
        output_dir = output.resolve()
    pipeline = BuildPipeline(
        landing.config.public_dir,
        output_dir,
        settings=settings,
        styles=landing.styles,
        project_root=root,
        include_metadata=False,
        manifest=False,
    )
    outputs = pipeline.run().outputs if landing.config.public_dir.is_dir() else []
    outputs.extend(landing.export_static_site(output_dir))
    outputs.append(pipeline.write_manifest(outputs))
    for path in outputs:
        print(f"wrote {_format_path(path)}")


@app.command(help="Write one component to <name>.html.")
def add(
    name: typ.Annotated[str, Parameter(help="Registered or built-in component name")],
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Directory to write into (default: project root)")
    ] = None,
    project: typ.Annotated[Path, Parameter(help="Project root")] = Path("."),
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Render component ``name`` with its default properties.

    Components registered by the project entry are available when the
    project has one; otherwise only the built-in components are.
    """
    _set_verbosity(verbose)
    root = project.resolve()
    try:
        find_entry(root)
    except ProjectError:
        landing = create_app(root)
    else:
        landing = load_project(root)
    target = output.resolve() if output is not None else None
    print(f"wrote {_format_path(landing.export_component(name, target))}")


def main(tokens: typ.Sequence[str] | None = None) -> int:
    """Run the ``landkit`` console command and return its exit code.

    Parameters
    ----------
    tokens : Sequence[str] or None, optional
        Arguments to parse instead of ``sys.argv[1:]``.

    Returns
    -------
    int
        ``0`` on success, ``1`` when a command fails; the error is printed to
        stderr as ``error: <message>``.

    Examples
    --------
    >>> main(["build", "--project", "my-site"])  # doctest: +SKIP
    0
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        command, bound, _ = app.parse_args(tokens)
        command(*bound.args, **bound.kwargs)
    except (LandkitError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    sys.exit(main())
