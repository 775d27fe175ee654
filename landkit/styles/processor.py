"""Turn :class:`StyleSource` descriptions into plain, prefixed CSS."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from .compilers import StyleCompiler, TailwindCompiler, compile_scss
from .models import CacheKey, StyleDialect, StyleSource
from .prefixer import add_vendor_prefixes

logger = logging.getLogger(__name__)


class StyleProcessor:
    """Compile style sources per dialect and cache the resulting CSS.

    Results are cached on ``(path, content, dialect)``; processing the same
    source twice returns the cached string without invoking a compiler
    again. Path-based sources are read relative to ``root``. The cache is
    not invalidated when a file changes on disk; call :meth:`clear_cache`
    from a watcher.
    """

    def __init__(
        self,
        *,
        root: Path | None = None,
        compilers: cabc.Mapping[StyleDialect, StyleCompiler] | None = None,
        content_globs: typ.Sequence[str] | None = None,
        tailwind_executable: str = "tailwindcss",
    ) -> None:
        """Initialize the processor.

        Parameters
        ----------
        root : Path, optional
            Directory that relative stylesheet paths resolve against.
        compilers : Mapping[StyleDialect, StyleCompiler], optional
            Overrides for the preprocessed or utility-first compilers.
        content_globs : Sequence[str], optional
            Files the utility-class generator scans for class names.
        tailwind_executable : str, optional
            Name or path of the Tailwind CLI.
        """
        self.root = root
        tailwind_kwargs: dict[str, typ.Any] = {
            "executable": tailwind_executable,
            "cwd": root,
        }
        if content_globs is not None:
            tailwind_kwargs["content"] = content_globs
        self.compilers: dict[StyleDialect, StyleCompiler] = {
            StyleDialect.PREPROCESSED: compile_scss,
            StyleDialect.UTILITY: TailwindCompiler(**tailwind_kwargs),
        }
        if compilers:
            self.compilers.update(compilers)
        self._cache: dict[CacheKey, str] = {}

    def process(self, source: StyleSource) -> str:
        """Return CSS for ``source``.

        Raises
        ------
        UnsupportedStyleError
            If the source's dialect is not one of :class:`StyleDialect`.
        StyleCompileError
            If an external compiler rejects the source.
        FileNotFoundError
            If a path-based source does not exist.
        """
        dialect = StyleDialect.parse(source.dialect)
        key = source.cache_key
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        path = self._resolve(source.path)
        text = source.content
        if text is None and path is not None:
            text = path.read_text(encoding="utf-8")
        css = self._compile(dialect, text or "", path)
        result = add_vendor_prefixes(css)
        self._cache[key] = result
        return result

    def process_all(self, sources: typ.Iterable[StyleSource]) -> str:
        """Process ``sources`` in order and join the non-empty results."""
        chunks = [self.process(source) for source in sources]
        return "\n".join(chunk.strip() for chunk in chunks if chunk.strip())

    def clear_cache(self) -> None:
        self._cache.clear()

    def _compile(self, dialect: StyleDialect, text: str, path: Path | None) -> str:
        if dialect is StyleDialect.PLAIN:
            return text
        logger.debug("compiling %s style %s", dialect, path or "<inline>")
        return self.compilers[dialect](text, path)

    def _resolve(self, path: Path | None) -> Path | None:
        if path is None or path.is_absolute() or self.root is None:
            return path
        return self.root / path


__all__ = ["StyleProcessor"]
