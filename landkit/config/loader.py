"""Load ``landkit.yaml`` and ``pages/index.yaml`` into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from landkit.errors import SiteConfigError
from landkit.pages.builders import _build_styles, _resolve_paths, build_page_config
from landkit.pages.models import PageConfig

from .models import DEFAULT_HOST, DEFAULT_PORT, ProjectConfig, TailwindConfig

PROJECT_CONFIG_NAME = "landkit.yaml"


def _read_yaml(path: Path) -> dict[str, typ.Any]:
    """Return the top-level mapping stored in ``path``."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise SiteConfigError(msg)
    return dict(loaded)


def _build_tailwind_config(payload: object) -> TailwindConfig:
    base = TailwindConfig()
    match payload:
        case None:
            return base
        case cabc.Mapping():
            content = payload.get("content", base.content)
        case _:
            msg = "The 'tailwind' block must be a mapping."
            raise SiteConfigError(msg)
    if isinstance(content, str):
        content = [content]
    if not isinstance(content, list) or not all(isinstance(g, str) for g in content):
        msg = "tailwind.content must be a list of glob strings."
        raise SiteConfigError(msg)
    return TailwindConfig(
        content=list(content),
        executable=str(payload.get("executable", base.executable)),
    )


def load_project_config(root: Path) -> ProjectConfig:
    """Load project settings from ``<root>/landkit.yaml``.

    A missing file yields the defaults, so bare projects need no
    configuration.

    Parameters
    ----------
    root : Path
        Project root directory.

    Returns
    -------
    ProjectConfig
        Parsed settings with style paths anchored at ``root``.

    Raises
    ------
    SiteConfigError
        If the file is not a mapping or holds invalid values.
    YAMLError
        If the YAML content cannot be parsed.
    """
    path = root / PROJECT_CONFIG_NAME
    if not path.exists():
        return ProjectConfig(root=root)
    raw = _read_yaml(path)
    port = raw.get("port", DEFAULT_PORT)
    if isinstance(port, bool) or not isinstance(port, int):
        msg = f"'port' must be an integer in '{path}'."
        raise SiteConfigError(msg)
    return ProjectConfig(
        root=root,
        port=port,
        host=str(raw.get("host", DEFAULT_HOST)),
        output_dir=Path(raw.get("output_dir", "dist")),
        dynamic_components=bool(raw.get("dynamic_components", False)),
        tailwind=_build_tailwind_config(raw.get("tailwind")),
        styles=_resolve_paths(root, _build_styles(raw.get("styles"))),
    )


def load_pages_config(path: Path) -> dict[str, PageConfig]:
    """Load page definitions keyed by route from a YAML file.

    The file holds a ``pages`` mapping of route to page payload (see
    :func:`landkit.pages.build_page_config`). Page and section style paths
    are anchored at the project root (the parent of ``pages/``).

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    SiteConfigError
        If no pages are defined or a page payload is malformed.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)
    raw = _read_yaml(path)
    pages_raw = raw.get("pages") or {}
    if not isinstance(pages_raw, dict) or not pages_raw:
        msg = f"No pages defined in '{path}'."
        raise SiteConfigError(msg)
    root = path.parent.parent
    pages: dict[str, PageConfig] = {}
    for route, payload in pages_raw.items():
        if not isinstance(payload, dict):
            msg = f"Page '{route}' must be a mapping."
            raise SiteConfigError(msg)
        config = build_page_config(payload)
        config.styles = _resolve_paths(root, config.styles)
        for section in config.sections:
            section.styles = _resolve_paths(root, section.styles)
        pages[str(route)] = config
    return pages


__all__ = ["PROJECT_CONFIG_NAME", "load_pages_config", "load_project_config"]
