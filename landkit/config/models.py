"""Typed dataclasses describing landkit project configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from landkit.styles import StyleSource
from landkit.styles.compilers import DEFAULT_CONTENT_GLOBS

DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"


@dc.dataclass(slots=True)
class TailwindConfig:
    """Settings for the utility-first style dialect."""

    content: list[str] = dc.field(default_factory=lambda: list(DEFAULT_CONTENT_GLOBS))
    executable: str = "tailwindcss"


@dc.dataclass(slots=True)
class ProjectConfig:
    """Project-wide settings sourced from ``landkit.yaml``."""

    root: Path
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    output_dir: Path = Path("dist")
    dynamic_components: bool = False
    tailwind: TailwindConfig = dc.field(default_factory=TailwindConfig)
    styles: list[StyleSource] = dc.field(default_factory=list)

    @property
    def pages_dir(self) -> Path:
        return self.root / "pages"

    @property
    def public_dir(self) -> Path:
        return self.root / "public"


__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "ProjectConfig", "TailwindConfig"]
