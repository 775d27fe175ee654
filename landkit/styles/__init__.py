"""Style sources, dialects, and the caching style processor."""

from .compilers import TailwindCompiler, compile_scss
from .models import StyleDialect, StyleSource
from .prefixer import add_vendor_prefixes
from .processor import StyleProcessor

__all__ = [
    "StyleDialect",
    "StyleProcessor",
    "StyleSource",
    "TailwindCompiler",
    "add_vendor_prefixes",
    "compile_scss",
]
