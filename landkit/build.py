"""Asset and package build pipeline behind ``landkit build``.

:class:`BuildPipeline` walks a source tree and writes a transformed copy:

- ``.js`` and ``.mjs`` files are copied in development; production strips
  ``console.log``/``info``/``debug`` calls and ``debugger`` statements and
  minifies the result with rjsmin;
- ``.css`` files are vendor-prefixed and, in production, minified with rcssmin;
- ``.scss`` and ``.sass`` files are compiled with libsass to ``.css``
  (partials starting with ``_`` are only imported, never emitted);
- ``.py`` files are syntax-checked and copied;
- everything else is copied unchanged.

After the walk the pipeline copies a templates directory, writes a cleaned
``pyproject.toml`` (development extras, dependency groups and ``[tool]``
tables removed), copies ``README.md``, and records a ``manifest.json`` of
content hashes. The build mode comes from ``LANDKIT_ENV``.

Examples
--------
>>> from pathlib import Path
>>> settings = BuildSettings.for_mode("production")
>>> settings.minify, settings.drop_console
(True, True)
>>> BuildPipeline(Path("src"), Path("dist"), settings=settings).run()  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import hashlib
import json
import logging
import os
import shutil
import typing as typ
from pathlib import Path

import rcssmin
import rjsmin
import tomlkit

from ._constants import ENV_VAR, MANIFEST_NAME
from .errors import BuildError, LandkitError
from .script_cleaner import strip_console_calls
from .styles import StyleProcessor, StyleSource, add_vendor_prefixes

logger = logging.getLogger(__name__)

SCRIPT_SUFFIXES = frozenset({".js", ".mjs"})
STYLE_SUFFIXES = frozenset({".css"})
PREPROCESSED_SUFFIXES = frozenset({".scss", ".sass"})
DEV_EXTRAS = frozenset({"dev", "docs", "test", "tests"})
HASH_LENGTH = 8


class BuildMode(enum.StrEnum):
    """Build flavours selected through ``LANDKIT_ENV``."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


@dc.dataclass(frozen=True, slots=True)
class BuildSettings:
    """Transform switches for one build mode."""

    mode: BuildMode
    minify: bool
    drop_console: bool

    @classmethod
    def for_mode(cls, mode: BuildMode | str) -> BuildSettings:
        """Return the settings for ``mode``; anything but production is dev."""
        production = str(mode).strip().lower() == BuildMode.PRODUCTION
        return cls(
            mode=BuildMode.PRODUCTION if production else BuildMode.DEVELOPMENT,
            minify=production,
            drop_console=production,
        )

    @classmethod
    def from_env(cls, environ: cabc.Mapping[str, str] | None = None) -> BuildSettings:
        env = os.environ if environ is None else environ
        return cls.for_mode(env.get(ENV_VAR, BuildMode.DEVELOPMENT))


@dc.dataclass(slots=True)
class BuildResult:
    """Files written by a :class:`BuildPipeline` run."""

    output_dir: Path
    outputs: list[Path] = dc.field(default_factory=list)
    manifest: Path | None = None


def content_hash(data: bytes) -> str:
    """Return the short MD5 digest used in the manifest."""
    return hashlib.md5(data, usedforsecurity=False).hexdigest()[:HASH_LENGTH]


class BuildPipeline:
    """Transform ``source_dir`` into ``output_dir``."""

    def __init__(
        self,
        source_dir: Path,
        output_dir: Path,
        *,
        settings: BuildSettings | None = None,
        styles: StyleProcessor | None = None,
        templates_dir: Path | None = None,
        project_root: Path | None = None,
        clean: bool = True,
        include_metadata: bool = True,
        manifest: bool = True,
    ) -> None:
        """Configure the pipeline.

        Parameters
        ----------
        source_dir : Path
            Tree to transform.
        output_dir : Path
            Destination; removed first when ``clean`` is true.
        settings : BuildSettings, optional
            Defaults to :meth:`BuildSettings.from_env`.
        styles : StyleProcessor, optional
            Compiles preprocessed stylesheets.
        templates_dir : Path, optional
            Copied to ``output_dir / "templates"`` when it exists outside
            ``source_dir``.
        project_root : Path, optional
            Where ``pyproject.toml`` and ``README.md`` are read from;
            defaults to the parent of ``source_dir``.
        clean : bool, optional
            Remove ``output_dir`` before building.
        include_metadata : bool, optional
            Write packaging metadata and the README next to the build.
        manifest : bool, optional
            Write ``manifest.json`` at the end of :meth:`run`. Callers that add
            files of their own pass ``False`` and call :meth:`write_manifest`.
        """
        self.source_dir = source_dir
        self.output_dir = output_dir
        self.settings = settings or BuildSettings.from_env()
        self.styles = styles or StyleProcessor(root=source_dir)
        self.templates_dir = templates_dir
        self.project_root = project_root or source_dir.parent
        self.clean = clean
        self.include_metadata = include_metadata
        self.manifest = manifest

    def run(self) -> BuildResult:
        """Build every file and return what was written.

        Raises
        ------
        BuildError
            If a file cannot be transformed, with the source path attached, or
            if ``output_dir`` overlaps the source tree or the project root.
        FileNotFoundError
            If ``source_dir`` does not exist.
        """
        if not self.source_dir.is_dir():
            msg = f"Source directory '{self.source_dir}' not found."
            raise FileNotFoundError(msg)
        self._check_output_dir()
        if self.clean and self.output_dir.exists():
            shutil.rmtree(self.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info("building %s (%s)", self.source_dir, self.settings.mode)

        result = BuildResult(output_dir=self.output_dir)
        for source in sorted(self.source_dir.rglob("*")):
            if not source.is_file() or _is_skipped(source.relative_to(self.source_dir)):
                continue
            result.outputs.append(self.build_file(source))
        result.outputs.extend(self._copy_templates())
        if self.include_metadata:
            result.outputs.extend(self._write_metadata())
        if self.manifest:
            result.manifest = self.write_manifest(result.outputs)
        logger.info("built %d files into %s", len(result.outputs), self.output_dir)
        return result

    def _check_output_dir(self) -> None:
        output = self.output_dir.resolve()
        source = self.source_dir.resolve()
        for protected in (source, self.project_root.resolve()):
            if protected.is_relative_to(output):
                msg = f"output directory would replace {protected}"
                raise BuildError(self.output_dir, msg)
        if output.is_relative_to(source):
            msg = f"output directory lies inside the source tree {source}"
            raise BuildError(self.output_dir, msg)

    def build_file(self, source: Path) -> Path:
        """Transform one file from the source tree and return its output path."""
        relative = source.relative_to(self.source_dir)
        target = self.output_dir / relative
        suffix = source.suffix.lower()
        try:
            match suffix:
                case _ if suffix in SCRIPT_SUFFIXES:
                    text = self.transform_script(source.read_text(encoding="utf-8"))
                case _ if suffix in STYLE_SUFFIXES:
                    text = self.transform_stylesheet(source.read_text(encoding="utf-8"))
                case _ if suffix in PREPROCESSED_SUFFIXES:
                    target = target.with_suffix(".css")
                    css = self.styles.process(StyleSource.file(source))
                    text = self._minify_css(css)
                case ".py":
                    text = source.read_text(encoding="utf-8")
                    compile(text, str(source), "exec")
                case _:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(source, target)
                    return target
        except (SyntaxError, UnicodeDecodeError, LandkitError) as exc:
            raise BuildError(relative, str(exc)) from exc
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        logger.debug("built %s -> %s", source, target)
        return target

    def transform_script(self, source: str) -> str:
        if self.settings.drop_console:
            source = strip_console_calls(source)
        if self.settings.minify:
            return rjsmin.jsmin(source)
        return source

    def transform_stylesheet(self, source: str) -> str:
        return self._minify_css(add_vendor_prefixes(source))

    def _minify_css(self, css: str) -> str:
        return rcssmin.cssmin(css) if self.settings.minify else css

    def _copy_templates(self) -> list[Path]:
        templates = self.templates_dir
        if templates is None or not templates.is_dir():
            return []
        if templates.resolve().is_relative_to(self.source_dir.resolve()):
            return []
        target_root = self.output_dir / "templates"
        written: list[Path] = []
        for source in sorted(templates.rglob("*")):
            if not source.is_file():
                continue
            target = target_root / source.relative_to(templates)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
            written.append(target)
        return written

    def _write_metadata(self) -> list[Path]:
        written: list[Path] = []
        pyproject = self.project_root / "pyproject.toml"
        if pyproject.is_file():
            target = self.output_dir / "pyproject.toml"
            target.write_text(
                clean_pyproject(pyproject.read_text(encoding="utf-8")),
                encoding="utf-8",
            )
            written.append(target)
        readme = self.project_root / "README.md"
        if readme.is_file():
            target = self.output_dir / "README.md"
            shutil.copy2(readme, target)
            written.append(target)
        return written

    def write_manifest(self, outputs: cabc.Iterable[Path]) -> Path:
        """Record a content hash for every path in ``outputs``."""
        files = {
            path.relative_to(self.output_dir).as_posix(): content_hash(path.read_bytes())
            for path in sorted(outputs)
        }
        manifest = self.output_dir / MANIFEST_NAME
        manifest.parent.mkdir(parents=True, exist_ok=True)
        payload = {"mode": str(self.settings.mode), "files": files}
        manifest.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return manifest


def clean_pyproject(text: str) -> str:
    """Drop development-only tables from a ``pyproject.toml`` document.

    Removes ``[tool]``, ``[dependency-groups]`` and the development extras
    (``dev``, ``docs``, ``test``, ``tests``) while preserving formatting.
    """
    doc = tomlkit.parse(text)
    for key in ("tool", "dependency-groups"):
        if key in doc:
            del doc[key]
    project = doc.get("project")
    extras = project.get("optional-dependencies") if project is not None else None
    if extras is not None:
        for name in [name for name in extras if name in DEV_EXTRAS]:
            del extras[name]
        if not extras:
            del project["optional-dependencies"]
    return tomlkit.dumps(doc)


def _is_skipped(relative: Path) -> bool:
    """Return whether a source file is build input only."""
    if "__pycache__" in relative.parts:
        return True
    return relative.suffix.lower() in PREPROCESSED_SUFFIXES and relative.name.startswith("_")


__all__ = [
    "BuildMode",
    "BuildPipeline",
    "BuildResult",
    "BuildSettings",
    "clean_pyproject",
    "content_hash",
    "strip_console_calls",
]
