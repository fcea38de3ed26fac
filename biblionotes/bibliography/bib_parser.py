"""bib_parser.py
Utility helpers for converting LaTeX-encoded metadata to plain Unicode and
loading BibTeX files into ordered BibliographyEntry sequences.
"""

from __future__ import annotations

import codecs
import logging
import re
from pathlib import Path

import latexcodec  # noqa: F401  registers the "ulatex" codec
from pybtex.database import Entry, Person, parse_string
from pybtex.exceptions import PybtexError

from biblionotes.bibliography.entities import BibliographyEntry, BibliographyRecord
from biblionotes.common.errors import BiblioNotesError

logger = logging.getLogger(__name__)

_LATEX_PATTERN = re.compile(r"[{}]")
_LATEX_COMMAND_WITH_ARG = re.compile(r"\\[A-Za-z]+\s*(?=\{)")
_MATH_PATTERN = re.compile(r"(\\\[.*?\\\]|\\\(.*?\\\)|\$\$.*?\$\$|\$.*?\$)", re.DOTALL)
_SURROUNDING_SPACE = re.compile(r"^(\s*)(.*?)(\s*)$", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")


class BibliographyError(BiblioNotesError):
    """Raised when the bibliography file cannot be read or parsed."""


def _decode_latex(text: str) -> str:
    # the codec trims surrounding whitespace, which glues words to math segments
    leading, core, trailing = _SURROUNDING_SPACE.match(text).groups()
    try:
        decoded = codecs.decode(core, "ulatex")
    except Exception:
        decoded = core
    # formatting commands the codec does not know (\emph{..}, \textbf{..}) keep their argument
    decoded = _LATEX_COMMAND_WITH_ARG.sub("", decoded)
    return leading + _LATEX_PATTERN.sub("", decoded) + trailing


def latex_to_unicode(text: str | None) -> str | None:
    """Convert LaTeX escape sequences to plain Unicode.

    Math segments are kept verbatim so they can still be typeset on the
    generated pages.

    Args:
        text: A string that may contain LaTeX escapes or None.

    Returns:
        The decoded Unicode string, or None if *text* is None.
    """
    if text is None:
        return None
    # split() with a capturing group puts the math segments at odd indices
    parts = _MATH_PATTERN.split(text)
    decoded = "".join(
        part if i % 2 else _decode_latex(part) for i, part in enumerate(parts)
    )
    return _WHITESPACE.sub(" ", decoded).strip()


def _person_name(person: Person) -> str:
    parts = (
        person.first_names
        + person.middle_names
        + person.prelast_names
        + person.last_names
        + person.lineage_names
    )
    return latex_to_unicode(" ".join(parts)) or ""


def format_authors(persons: list[Person]) -> str:
    """Join author names for display: ``A``, ``A and B``, ``A, B and C``."""
    names = [name for name in (_person_name(p) for p in persons) if name]
    if len(names) <= 2:
        return " and ".join(names)
    return ", ".join(names[:-1]) + " and " + names[-1]


def entry_to_record(entry: Entry) -> BibliographyRecord | None:
    """Build the display record for *entry*.

    Returns:
        The record, or None when the title, author list or year is missing.
    """
    title = latex_to_unicode(entry.fields.get("title"))
    author = format_authors(list(entry.persons.get("author", [])))
    year = (entry.fields.get("year") or "").strip()
    if not title or not author or not year:
        return None
    return BibliographyRecord(title=title, author=author, year=year)


def load_bibliography(path: Path, *, encoding: str = "utf-8") -> list[BibliographyEntry]:
    """Load a BibTeX file as ordered (key, record) pairs.

    Args:
        path: Filesystem path to a .bib file.
        encoding: Text encoding of the file.

    Returns:
        One BibliographyEntry per entry, in file order.  Entries lacking a
        title, author or year carry ``record=None``.

    Raises:
        BibliographyError: If the file cannot be read or is not valid BibTeX.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise BibliographyError(f"Could not open bibliography {path}: {exc}") from exc

    try:
        bib_data = parse_string(raw.decode(encoding), bib_format="bibtex")
    except (PybtexError, UnicodeDecodeError) as exc:
        raise BibliographyError(f"Could not parse bibliography {path}: {exc}") from exc

    entries = [
        BibliographyEntry(key=key, record=entry_to_record(entry))
        for key, entry in bib_data.entries.items()
    ]
    logger.info("Loaded %d entries from %s", len(entries), path)
    return entries
