"""Listing page for all rendered entries."""

from __future__ import annotations

import html as html_lib
from typing import Iterable

from biblionotes.bibliography.entities import IndexRecord
from biblionotes.common.settings import DEFAULT_INDEX_INTRO
from biblionotes.rendering.templates import PageTemplate

INDEX_TITLE = "Annotated bibliography"


def _index_item(record: IndexRecord) -> str:
    esc = html_lib.escape
    return (
        f"<li>{esc(record.author)} ({esc(record.year)}) "
        f'<a href="{esc(record.filename)}">{esc(record.title)}</a></li>\n'
    )


def build_index_content(
    records: Iterable[IndexRecord],
    *,
    heading: str = INDEX_TITLE,
    intro: str = DEFAULT_INDEX_INTRO,
) -> str:
    """Return the HTML fragment listing *records* in the given order."""
    parts = [
        f"<h1>{html_lib.escape(heading)}</h1>\n",
        f"<p>{html_lib.escape(intro)}</p>\n",
        '<ul class="nonetype">\n',
    ]
    parts.extend(_index_item(record) for record in records)
    parts.append("</ul>")
    return "".join(parts)


def render_index(
    records: Iterable[IndexRecord],
    template: PageTemplate,
    *,
    title: str = INDEX_TITLE,
    intro: str = DEFAULT_INDEX_INTRO,
) -> str:
    """Expand the page template around the listing of *records*."""
    content = build_index_content(records, heading=title, intro=intro)
    return template.render(title=title, content=content)
