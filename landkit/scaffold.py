"""Create the file tree for a new landkit project (``landkit create``)."""

from __future__ import annotations

import dataclasses as dc
import logging
import re
from pathlib import Path

import tomlkit
from jinja2 import Environment, FileSystemLoader

from ._constants import LANDKIT_VERSION, PROJECT_DIRECTORIES
from .config import DEFAULT_PORT
from .errors import ProjectError

logger = logging.getLogger(__name__)

SCAFFOLD_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates" / "scaffold"

SCAFFOLD_FILES: dict[str, str] = {
    "pages/index.py": "index.py.jinja",
    "components/custom_hero.py": "custom_hero.py.jinja",
    "components/custom_cta.jinja": "custom_cta.jinja.jinja",
    "styles/main.css": "main.css.jinja",
    "README.md": "README.md.jinja",
    "landkit.yaml": "landkit.yaml.jinja",
}


def project_slug(name: str) -> str:
    """Return a distribution-safe project name.

    >>> project_slug("My Landing Page!")
    'my-landing-page'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "landing-page"


@dc.dataclass(slots=True)
class ProjectScaffolder:
    """Write a starter project into ``target``."""

    target: Path
    title: str
    description: str
    port: int = DEFAULT_PORT

    def run(self) -> list[Path]:
        """Create directories and starter files, returning the written files.

        Raises
        ------
        ProjectError
            If ``target`` exists and is not an empty directory.
        """
        if self.target.exists() and (
            not self.target.is_dir() or any(self.target.iterdir())
        ):
            msg = f"Directory '{self.target}' already exists and is not empty."
            raise ProjectError(msg)
        for directory in PROJECT_DIRECTORIES:
            (self.target / directory).mkdir(parents=True, exist_ok=True)

        env = Environment(
            loader=FileSystemLoader(SCAFFOLD_TEMPLATES_DIR),
            autoescape=False,  # noqa: S701 - renders Python, CSS and Markdown
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.filters["pyrepr"] = repr
        context = {
            "name": self.target.name,
            "title": self.title,
            "description": self.description,
            "port": self.port,
        }
        written: list[Path] = []
        for relative, template_name in SCAFFOLD_FILES.items():
            content = env.get_template(template_name).render(**context)
            written.append(self._write(relative, content))
        written.append(self._write("pyproject.toml", self.render_pyproject()))
        logger.info("created project %s", self.target)
        return written

    def render_pyproject(self) -> str:
        doc = tomlkit.document()
        project = tomlkit.table()
        project.add("name", project_slug(self.target.name))
        project.add("version", "0.1.0")
        project.add("description", self.description)
        project.add("requires-python", ">=3.12")
        project.add("dependencies", [f"landkit>={LANDKIT_VERSION}"])
        doc.add("project", project)
        return tomlkit.dumps(doc)

    def _write(self, relative: str, content: str) -> Path:
        path = self.target / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if not content.endswith("\n"):
            content += "\n"
        path.write_text(content, encoding="utf-8")
        return path


__all__ = ["ProjectScaffolder", "SCAFFOLD_FILES", "project_slug"]
