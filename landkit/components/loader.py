"""Load components from project files.

File components are an explicit opt-in: Python component scripts are executed
in-process, so an application only resolves file references when it was built
with a :class:`DynamicComponentLoader`. Three dialects are understood:

``script``
    A ``.py`` file executed in an isolated namespace. Imports are limited to
    :data:`ALLOWED_IMPORTS`; the file publishes its component through
    ``export(...)`` (usable as a decorator), a ``default`` binding, a
    single-entry ``__all__`` or a single public callable.
``template``
    A Jinja template (``.jinja``, ``.j2``, ``.html``) rendered with the
    component properties as context. Defaults may be declared with a
    top-level ``{% set default_props = {...} %}``.
``markup``
    A Markdown file (``.md``) rendered once to static HTML.

Examples
--------
>>> from pathlib import Path
>>> loader = DynamicComponentLoader(Path("site"))  # doctest: +SKIP
>>> loader.render("components/banner.jinja", {"title": "Hi"})  # doctest: +SKIP
'<div class="banner">Hi</div>'
"""

from __future__ import annotations

import builtins
import dataclasses as dc
import enum
import importlib
import json
import logging
import types
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, nodes

from landkit.errors import ComponentLoadError, DisallowedImportError

from .markup import MarkupRenderer
from .models import Component, Props

logger = logging.getLogger(__name__)

ALLOWED_IMPORTS: frozenset[str] = frozenset(
    {
        "datetime",
        "html",
        "landkit.components",
        "markupsafe",
        "string",
        "textwrap",
    }
)
SANDBOX_EXPORTS: dict[str, tuple[str, ...]] = {
    "landkit.components": ("Component", "cta", "footer", "hero", "merge_props"),
}
BLOCKED_BUILTINS: frozenset[str] = frozenset(
    {
        "__import__",
        "breakpoint",
        "compile",
        "eval",
        "exec",
        "exit",
        "help",
        "input",
        "open",
        "quit",
    }
)


class ComponentDialect(enum.StrEnum):
    """Source dialects understood by :class:`DynamicComponentLoader`."""

    SCRIPT = "script"
    TEMPLATE = "template"
    MARKUP = "markup"

    @classmethod
    def from_path(cls, path: Path) -> ComponentDialect:
        """Infer the dialect from ``path``'s suffix."""
        try:
            return SUFFIX_DIALECTS[path.suffix.lower()]
        except KeyError as exc:
            msg = f"{path}: no component dialect for suffix {path.suffix!r}"
            raise ComponentLoadError(msg) from exc


SUFFIX_DIALECTS: dict[str, ComponentDialect] = {
    ".py": ComponentDialect.SCRIPT,
    ".jinja": ComponentDialect.TEMPLATE,
    ".j2": ComponentDialect.TEMPLATE,
    ".html": ComponentDialect.TEMPLATE,
    ".md": ComponentDialect.MARKUP,
    ".markdown": ComponentDialect.MARKUP,
}


def is_component_path(reference: object) -> bool:
    """Return whether ``reference`` looks like a file component reference."""
    match reference:
        case Path():
            return True
        case str() as text:
            return Path(text).suffix.lower() in SUFFIX_DIALECTS
        case _:
            return False


def _resolve_dialect(
    path: Path, dialect: ComponentDialect | str | None
) -> ComponentDialect:
    """Return the requested dialect, or the one implied by ``path``."""
    if not dialect:
        return ComponentDialect.from_path(path)
    try:
        return ComponentDialect(dialect)
    except ValueError as exc:
        msg = f"{path}: unknown component dialect {dialect!r}"
        raise ComponentLoadError(msg) from exc


@dc.dataclass(slots=True)
class _LoadedSource:
    renderer: typ.Callable[[dict[str, typ.Any]], str]
    default_props: dict[str, typ.Any]


class DynamicComponentLoader:
    """Turn component files into :class:`Component` values, with caching."""

    def __init__(
        self,
        root: Path | None = None,
        *,
        allowed_imports: typ.Iterable[str] = ALLOWED_IMPORTS,
        markup_renderer: MarkupRenderer | None = None,
    ) -> None:
        """Initialize the loader.

        Parameters
        ----------
        root : Path, optional
            Base directory for relative component paths; defaults to the
            current working directory at resolution time.
        allowed_imports : Iterable[str], optional
            Exact module names component scripts may import. Scripts receive a
            view holding only the public, non-module names of each module.
        markup_renderer : MarkupRenderer, optional
            Renderer used for the ``markup`` dialect.
        """
        self.root = root
        self.allowed_imports = frozenset(allowed_imports)
        self.markup_renderer = markup_renderer or MarkupRenderer()
        self._sources: dict[tuple[Path, ComponentDialect], _LoadedSource] = {}
        self._rendered: dict[tuple[Path, ComponentDialect, str], str] = {}

    def resolve_path(self, path: str | Path) -> Path:
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = (self.root or Path.cwd()) / candidate
        return candidate.resolve()

    def load(
        self, path: str | Path, dialect: ComponentDialect | str | None = None
    ) -> Component:
        """Return a :class:`Component` backed by the file at ``path``.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        ComponentLoadError
            If the file cannot be compiled or does not export a callable or a
            string.
        DisallowedImportError
            If a component script imports a module outside the allow-list.
        """
        resolved = self.resolve_path(path)
        kind = _resolve_dialect(resolved, dialect)
        source = self._load_source(resolved, kind)

        def render(props: dict[str, typ.Any]) -> str:
            return self.render(resolved, props, kind)

        return Component(
            name=resolved.stem,
            renderer=render,
            default_props=dict(source.default_props),
        )

    def render(
        self,
        path: str | Path,
        props: Props | None = None,
        dialect: ComponentDialect | str | None = None,
    ) -> str:
        """Render the component at ``path``, cached per dialect and properties."""
        resolved = self.resolve_path(path)
        kind = _resolve_dialect(resolved, dialect)
        source = self._load_source(resolved, kind)
        merged = {**source.default_props, **(props or {})}
        key = (resolved, kind, json.dumps(merged, sort_keys=True, default=repr))
        try:
            return self._rendered[key]
        except KeyError:
            pass
        html = source.renderer(merged)
        if not isinstance(html, str):
            msg = f"{resolved}: component returned {type(html).__name__}, not str"
            raise ComponentLoadError(msg)
        self._rendered[key] = str(html)
        return self._rendered[key]

    def invalidate(self, path: str | Path | None = None) -> None:
        """Forget cached sources and renders for ``path``, or for every file."""
        if path is None:
            self._sources.clear()
            self._rendered.clear()
            return
        resolved = self.resolve_path(path)
        for source_key in [key for key in self._sources if key[0] == resolved]:
            del self._sources[source_key]
        for key in [key for key in self._rendered if key[0] == resolved]:
            del self._rendered[key]

    def _load_source(self, path: Path, kind: ComponentDialect) -> _LoadedSource:
        cached = self._sources.get((path, kind))
        if cached is not None:
            return cached
        text = path.read_text(encoding="utf-8")
        logger.debug("loading %s component %s", kind, path)
        match kind:
            case ComponentDialect.SCRIPT:
                loaded = self._load_script(path, text)
            case ComponentDialect.TEMPLATE:
                loaded = self._load_template(path, text)
            case ComponentDialect.MARKUP:
                html = self.markup_renderer.render(text)
                if 'class="codehilite"' in html:
                    html = f"<style>{self.markup_renderer.stylesheet}</style>\n{html}"
                loaded = _LoadedSource(renderer=lambda _props: html, default_props={})
        self._sources[path, kind] = loaded
        return loaded

    def _load_script(self, path: Path, text: str) -> _LoadedSource:
        exports: list[object] = []

        def export(value: object) -> object:
            exports.append(value)
            return value

        module_name = f"landkit_component_{path.stem}"
        namespace: dict[str, typ.Any] = {
            "__builtins__": self._sandbox_builtins(path),
            "__name__": module_name,
            "__file__": str(path),
            "export": export,
        }
        try:
            code = compile(text, str(path), "exec")
            exec(code, namespace)  # noqa: S102 - opt-in component scripts
        except ComponentLoadError:
            raise
        except Exception as exc:
            msg = f"{path}: {type(exc).__name__}: {exc}"
            raise ComponentLoadError(msg) from exc

        value = _extract_export(path, namespace, exports, module_name)
        defaults = getattr(value, "default_props", None)
        if defaults is None:
            defaults = namespace.get("default_props", {})
        if not isinstance(defaults, typ.Mapping):
            msg = f"{path}: default_props must be a mapping"
            raise ComponentLoadError(msg)
        match value:
            case str() as markup:
                renderer = lambda _props: markup  # noqa: E731
            case _ if callable(value):
                renderer = value
            case _:
                msg = (
                    f"{path}: export must be a callable or a string, "
                    f"got {type(value).__name__}"
                )
                raise ComponentLoadError(msg)
        return _LoadedSource(renderer=renderer, default_props=dict(defaults))

    def _load_template(self, path: Path, text: str) -> _LoadedSource:
        search_path = [str(path.parent)]
        if self.root is not None:
            search_path.append(str(self.root))
        env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        try:
            defaults = _template_defaults(path, env, text)
            template = env.from_string(text)
        except TemplateError as exc:
            msg = f"{path}: {exc}"
            raise ComponentLoadError(msg) from exc

        def render(props: dict[str, typ.Any]) -> str:
            return template.render(**props)

        return _LoadedSource(renderer=render, default_props=defaults)

    def _sandbox_builtins(self, path: Path) -> dict[str, typ.Any]:
        allowed = self.allowed_imports

        def guarded_import(
            name: str,
            globals: typ.Mapping[str, object] | None = None,  # noqa: A002
            locals: typ.Mapping[str, object] | None = None,  # noqa: A002
            fromlist: typ.Sequence[str] | None = None,
            level: int = 0,
        ) -> object:
            if level != 0 or name not in allowed:
                msg = f"{path}: import of {name!r} is not allowed in components"
                raise DisallowedImportError(msg)
            view = _module_view(name)
            if not fromlist:
                return _package_chain(name, view)
            for item in fromlist:
                if item != "*" and not hasattr(view, item):
                    msg = f"{path}: import of {item!r} from {name!r} is not allowed"
                    raise DisallowedImportError(msg)
            return view

        sandbox = {
            key: value
            for key, value in vars(builtins).items()
            if key not in BLOCKED_BUILTINS
        }
        sandbox["__import__"] = guarded_import
        return sandbox


def _module_view(name: str) -> types.ModuleType:
    """Return a stand-in for module ``name`` exposing only what scripts may use.

    Submodules and private names are left out so a script cannot reach
    modules outside the allow-list through attributes.
    """
    module = importlib.import_module(name)
    names = SANDBOX_EXPORTS.get(name) or [
        key
        for key, value in vars(module).items()
        if not key.startswith("_") and not isinstance(value, types.ModuleType)
    ]
    view = types.ModuleType(name, module.__doc__)
    for key in names:
        setattr(view, key, getattr(module, key))
    return view


def _package_chain(name: str, view: types.ModuleType) -> types.ModuleType:
    """Wrap ``view`` in parent stand-ins, as ``import a.b`` binds ``a``."""
    parts = name.split(".")
    top = view
    for depth in range(len(parts) - 1, 0, -1):
        parent = types.ModuleType(".".join(parts[:depth]))
        setattr(parent, parts[depth], top)
        top = parent
    return top


def _extract_export(
    path: Path,
    namespace: typ.Mapping[str, typ.Any],
    exports: list[object],
    module_name: str,
) -> object:
    """Pick the default export from an executed component script."""
    if len(exports) > 1:
        msg = f"{path}: export() called {len(exports)} times; expected one"
        raise ComponentLoadError(msg)
    if exports:
        return exports[0]
    if "default" in namespace:
        return namespace["default"]
    names = namespace.get("__all__")
    if isinstance(names, list | tuple) and len(names) == 1:
        return namespace[names[0]]
    candidates = [
        value
        for key, value in namespace.items()
        if not key.startswith("_")
        and key != "export"
        and callable(value)
        and getattr(value, "__module__", None) == module_name
    ]
    if len(candidates) == 1:
        return candidates[0]
    msg = f"{path}: no default export found"
    raise ComponentLoadError(msg)


def _template_defaults(path: Path, env: Environment, text: str) -> dict[str, typ.Any]:
    """Read a constant top-level ``default_props`` assignment, if any."""
    for node in env.parse(text).body:
        match node:
            case nodes.Assign(target=nodes.Name(name="default_props")):
                try:
                    value = node.node.as_const()
                except nodes.Impossible as exc:
                    msg = f"{path}: default_props must be a constant mapping"
                    raise ComponentLoadError(msg) from exc
                if not isinstance(value, dict):
                    msg = f"{path}: default_props must be a mapping"
                    raise ComponentLoadError(msg)
                return value
    return {}


__all__ = [
    "ALLOWED_IMPORTS",
    "ComponentDialect",
    "DynamicComponentLoader",
    "is_component_path",
]
