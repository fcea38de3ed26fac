"""Markdown to HTML conversion for bibliography notes.

The :class:`MarkdownConverter` wraps ``markdown.Markdown`` and keeps TeX math
out of Markdown's reach: math segments are swapped for placeholders before
conversion and restored afterwards as the ``<span class="math ...">``
elements MathJax looks for.  Code spans (any number of backticks), fenced
blocks and indented blocks are left alone so a literal ``$`` inside code is
never treated as math.
"""

from __future__ import annotations

import html as html_lib
import logging
import re
from typing import Sequence

import markdown

from biblionotes.common.errors import BiblioNotesError

logger = logging.getLogger(__name__)

_MATH_SEGMENT_RE = re.compile(
    r"(?P<fence>^[ \t]*(?:```|~~~).*?^[ \t]*(?:```|~~~)[ \t]*$)"
    r"|(?P<indented>(?:\A|(?<=\n\n))(?:(?: {4}|\t)[^\n]*(?:\n|\Z))+)"
    r"|(?P<code>(?P<ticks>`+)[^\n]*?(?<!`)(?P=ticks)(?!`))"
    r"|\$\$(?P<display>.+?)\$\$"
    r"|\\\[(?P<display_bracket>.+?)\\\]"
    r"|(?<![\\$])\$(?=[^\s$])(?P<inline>[^$\n`]*?[^$\s\\`])\$(?!\d)"
    r"|\\\((?P<inline_paren>.+?)\\\)",
    re.DOTALL | re.MULTILINE,
)

_PLACEHOLDER = "@@MATH{}@@"


class MarkdownConversionError(BiblioNotesError):
    """Raised when a note cannot be converted to HTML."""


def _math_span(tex: str, display: bool) -> str:
    safe = html_lib.escape(tex, quote=False)
    if display:
        return f'<span class="math display">\\[{safe}\\]</span>'
    return f'<span class="math inline">\\({safe}\\)</span>'


def mask_math_segments(text: str) -> tuple[str, list[str]]:
    """Replace math in *text* with placeholders.

    Returns:
        The masked text and the rendered math spans, where the span at
        position ``i`` belongs to placeholder ``@@MATHi@@``.
    """
    spans: list[str] = []

    def replace(match: re.Match[str]) -> str:
        if any(match.group(name) is not None for name in ("fence", "indented", "code")):
            return match.group(0)
        display = match.group("display")
        if display is None:
            display = match.group("display_bracket")
        if display is not None:
            spans.append(_math_span(display.strip(), display=True))
        else:
            inline = match.group("inline")
            if inline is None:
                inline = match.group("inline_paren")
            spans.append(_math_span(inline, display=False))
        return _PLACEHOLDER.format(len(spans) - 1)

    return _MATH_SEGMENT_RE.sub(replace, text), spans


def unmask_math_segments(html_text: str, spans: Sequence[str]) -> str:
    restored = html_text
    for idx, span in enumerate(spans):
        restored = restored.replace(_PLACEHOLDER.format(idx), span)
    return restored


class MarkdownConverter:
    """Reusable Markdown converter with optional math passthrough."""

    def __init__(
        self,
        extensions: Sequence[str] = ("extra",),
        *,
        math_rendering: bool = True,
    ) -> None:
        self._md = markdown.Markdown(extensions=list(extensions), output_format="html")
        self.math_rendering = math_rendering

    def convert(self, text: str) -> str:
        """Return the HTML rendering of the Markdown *text*.

        Raises:
            MarkdownConversionError: If Python-Markdown fails on the input.
        """
        spans: list[str] = []
        if self.math_rendering:
            text, spans = mask_math_segments(text)
        try:
            body = self._md.reset().convert(text)
        except Exception as exc:
            logger.error("Markdown conversion failed: %s", exc)
            raise MarkdownConversionError(f"Could not convert markdown: {exc}") from exc
        return unmask_math_segments(body, spans)
