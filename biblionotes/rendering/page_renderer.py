"""Render one bibliography entry into a complete HTML page.

Workflow
--------
1. Convert the entry's Markdown note to HTML (math passed through).
2. Prepend a header carrying the title, author and year.
3. Expand the page template with ``title`` and the combined ``content``.
"""

from __future__ import annotations

import html as html_lib

from biblionotes.bibliography.entities import BibliographyRecord, RenderedPage
from biblionotes.rendering.markdown_html import MarkdownConverter
from biblionotes.rendering.templates import PageTemplate


def render_header(record: BibliographyRecord | RenderedPage) -> str:
    """Return the citation header shown above a note."""
    title = html_lib.escape(record.title)
    author = html_lib.escape(record.author)
    year = html_lib.escape(record.year)
    # the title is repeated on purpose: once as heading, once in the citation
    return (
        f"<header><h1>{title}</h1>"
        f"<cite>{author} ({year}) <em>{title}</em></cite></header>"
    )


def render_entry(
    key: str,
    record: BibliographyRecord,
    markdown_text: str,
    converter: MarkdownConverter,
    *,
    output_suffix: str = ".html",
) -> RenderedPage:
    """Convert the note of *key* and bundle it with its metadata."""
    return RenderedPage(
        key=key,
        html_filename=f"{key}{output_suffix}",
        body_html=converter.convert(markdown_text),
        title=record.title,
        author=record.author,
        year=record.year,
    )


def page_content(page: RenderedPage) -> str:
    return f"{render_header(page)}\n{page.body_html}"


def expand_page(page: RenderedPage, template: PageTemplate) -> str:
    """Run the page template over an already converted entry."""
    return template.render(title=page.title, content=page_content(page))


def render_page(
    record: BibliographyRecord,
    markdown_text: str,
    template: PageTemplate,
    *,
    converter: MarkdownConverter | None = None,
    key: str = "",
) -> str:
    """Produce the final HTML document for a single entry.

    Args:
        record: Metadata of the entry.
        markdown_text: The raw Markdown note.
        template: Page template shared across the build.
        converter: Markdown converter to reuse; a default one (``extra``,
            math enabled) is created when omitted.
        key: Citation key of the entry.

    Raises:
        MarkdownConversionError: If the note cannot be converted.
        TemplateExpansionError: If the template fails to render.
    """
    if converter is None:
        converter = MarkdownConverter()
    return expand_page(render_entry(key, record, markdown_text, converter), template)
