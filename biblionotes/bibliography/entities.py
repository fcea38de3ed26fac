"""entities.py
Shared value types passed between the build stages.
"""

from __future__ import annotations

from typing import NamedTuple, Optional


class BibliographyRecord(NamedTuple):
    """Display metadata of one BibTeX entry."""

    title: str
    author: str
    year: str


class BibliographyEntry(NamedTuple):
    """A citation key and its record (``None`` if the entry is unusable)."""

    key: str
    record: Optional[BibliographyRecord]


class IndexRecord(NamedTuple):
    """One line of the listing page."""

    filename: str
    author: str
    year: str
    title: str


class RenderedPage(NamedTuple):
    """A converted note together with the metadata it is published under."""

    key: str
    html_filename: str
    body_html: str
    title: str
    author: str
    year: str

    def index_record(self) -> IndexRecord:
        return IndexRecord(
            filename=self.html_filename,
            author=self.author,
            year=self.year,
            title=self.title,
        )
