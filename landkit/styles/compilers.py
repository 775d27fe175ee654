"""Adapters around the external style compilers.

``compile_scss`` wraps libsass for the preprocessed dialect. The utility-first
dialect shells out to the standalone Tailwind CSS CLI, which must be available
on ``PATH`` (or configured explicitly) when such sources are processed.
"""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import typing as typ
from pathlib import Path

import sass

from landkit.errors import StyleCompileError

StyleCompiler = typ.Callable[[str, Path | None], str]

DEFAULT_CONTENT_GLOBS: tuple[str, ...] = (
    "pages/**/*.{py,yaml}",
    "components/**/*",
    "public/**/*.html",
)


def compile_scss(source: str, path: Path | None = None) -> str:
    """Compile SCSS ``source`` to CSS, resolving imports next to ``path``."""
    include_paths = [str(path.parent)] if path is not None else []
    indented = path is not None and path.suffix.lower() == ".sass"
    try:
        return sass.compile(
            string=source,
            include_paths=include_paths,
            output_style="expanded",
            indented=indented,
        )
    except sass.CompileError as exc:
        location = f" in {path}" if path else ""
        msg = f"SCSS compilation failed{location}: {exc}"
        raise StyleCompileError(msg) from exc


class TailwindCompiler:
    """Generate utility CSS with the Tailwind CLI for the configured content."""

    def __init__(
        self,
        content: typ.Sequence[str] = DEFAULT_CONTENT_GLOBS,
        *,
        executable: str = "tailwindcss",
        cwd: Path | None = None,
    ) -> None:
        self.content = tuple(content)
        self.executable = executable
        self.cwd = cwd

    def __call__(self, source: str, path: Path | None = None) -> str:
        binary = shutil.which(self.executable)
        if not binary:
            msg = f"Unable to locate '{self.executable}' on PATH"
            raise StyleCompileError(msg)
        with tempfile.TemporaryDirectory(prefix="landkit-tw-") as tmp:
            input_path = Path(tmp) / "input.css"
            output_path = Path(tmp) / "output.css"
            input_path.write_text(source, encoding="utf-8")
            command = [
                binary,
                "--input",
                str(input_path),
                "--output",
                str(output_path),
                "--content",
                ",".join(self.content),
            ]
            result = subprocess.run(  # noqa: S603 - fixed argv, no shell
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
            if result.returncode != 0:
                location = f" for {path}" if path else ""
                msg = f"Tailwind failed{location}: {result.stderr.strip()}"
                raise StyleCompileError(msg)
            return output_path.read_text(encoding="utf-8")


__all__ = [
    "DEFAULT_CONTENT_GLOBS",
    "StyleCompiler",
    "TailwindCompiler",
    "compile_scss",
]
