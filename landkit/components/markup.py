"""Render Markdown component files with highlighted code blocks.

Highlighted blocks are tagged with the language of their fence, so component
styles can target ``div.codehilite[data-language="python"]``.
"""

from __future__ import annotations

import collections.abc as cabc
import re

from markdown import Markdown
from markupsafe import escape
from pygments.formatters.html import HtmlFormatter

FENCE_LINE = re.compile(
    r"^[ ]{0,3}(?P<marker>`{3,}|~{3,})[ \t]*\{?[ \t]*\.?(?P<lang>[\w+#.-]*)"
)
HIGHLIGHT_OPEN_TAG = re.compile(r'<div class="codehilite">')
MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")


def fence_languages(text: str) -> list[str]:
    """List the language of each fenced code block in ``text``, in order.

    Fences without a language count as ``text``.

    >>> fence_languages("```python\\nx = 1\\n```\\n~~~\\nplain\\n~~~\\n")
    ['python', 'text']
    """
    languages: list[str] = []
    open_marker: str | None = None
    for line in text.splitlines():
        match = FENCE_LINE.match(line)
        if match is None:
            continue
        marker, lang = match.group("marker", "lang")
        if open_marker is None:
            open_marker = marker
            languages.append(lang or "text")
        elif (
            marker[0] == open_marker[0]
            and len(marker) >= len(open_marker)
            and not lang
        ):
            open_marker = None
    return languages


def annotate_languages(html: str, languages: cabc.Sequence[str]) -> str:
    """Add ``data-language`` to the first ``len(languages)`` highlighted blocks."""
    if not languages:
        return html
    remaining = iter(languages)

    def _tag(_match: re.Match[str]) -> str:
        lang = escape(next(remaining, "text"))
        return f'<div class="codehilite" data-language="{lang}">'

    return HIGHLIGHT_OPEN_TAG.sub(_tag, html, count=len(languages))


class MarkupRenderer:
    """Convert Markdown into HTML fragments for markup components."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str) -> str:
        """Render ``text`` into HTML, returning ``""`` for blank input."""
        if not text.strip():
            return ""
        md = Markdown(
            extensions=list(MARKDOWN_EXTENSIONS),
            extension_configs={
                "codehilite": {
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return annotate_languages(md.convert(text), fence_languages(text))


__all__ = ["MarkupRenderer", "annotate_languages", "fence_languages"]
