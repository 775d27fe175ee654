"""Locate and load a landkit project's entry point.

A project is a directory holding ``pages/index.py`` (a Python module defining
``app``) or ``pages/index.yaml`` (page definitions read with ruamel.yaml).
Python entries are imported as a fresh module on every call, so the watcher
can reload a project after an edit.
"""

from __future__ import annotations

import importlib.util
import itertools
import logging
from pathlib import Path

from ._constants import ENTRY_NAMES
from .app import LandingApp, create_app
from .config import load_pages_config, load_project_config
from .errors import ProjectError

logger = logging.getLogger(__name__)

_module_counter = itertools.count()


def find_entry(root: Path) -> Path:
    """Return the project's entry file under ``root / "pages"``.

    Raises
    ------
    ProjectError
        If none of ``index.py``, ``index.yaml`` or ``index.yml`` exists.
    """
    pages_dir = root / "pages"
    for name in ENTRY_NAMES:
        candidate = pages_dir / name
        if candidate.is_file():
            return candidate
    msg = (
        f"Could not find pages/index.py or pages/index.yaml under {root}. "
        "Are you in a landkit project?"
    )
    raise ProjectError(msg)


def load_project(root: Path | str) -> LandingApp:
    """Load the :class:`LandingApp` described by the project at ``root``.

    Raises
    ------
    ProjectError
        If the project has no entry, or a Python entry defines no ``app``.
    SiteConfigError
        If a YAML entry is malformed.
    """
    project_root = Path(root).resolve()
    entry = find_entry(project_root)
    logger.debug("loading project entry %s", entry)
    if entry.suffix == ".py":
        return _load_python_entry(entry)
    app = create_app(project_root, config=load_project_config(project_root))
    for route, page_config in load_pages_config(entry).items():
        app.create_page(route, page_config)
    return app


def _load_python_entry(entry: Path) -> LandingApp:
    module_name = f"landkit_project_{next(_module_counter)}"
    spec = importlib.util.spec_from_file_location(module_name, entry)
    if spec is None or spec.loader is None:
        msg = f"Cannot import project entry {entry}"
        raise ProjectError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    app = getattr(module, "app", None)
    if not isinstance(app, LandingApp):
        msg = f"{entry} must define 'app' created with landkit.create_app()"
        raise ProjectError(msg)
    return app


__all__ = ["find_entry", "load_project"]
