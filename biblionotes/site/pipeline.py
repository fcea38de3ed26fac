"""BibTeX + Markdown notes → static HTML pipeline.

Workflow
---------
1. Read the BibTeX file and keep every entry in file order.
2. Read the page template once.
3. For each entry with a usable record *and* a note ``<key>.md``: convert
   the note, wrap it with its citation header and the template, and write
   ``<key>.html``.
4. Write ``index.html`` listing every page produced in step 3, in
   bibliography order.  The index is written even when nothing was rendered.

Any failure aborts the run immediately; pages already written are left in
place.  Configuration is consumed via :pyfile:`biblionotes.common.settings`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from biblionotes.bibliography.bib_parser import load_bibliography
from biblionotes.bibliography.entities import IndexRecord
from biblionotes.common.errors import BiblioNotesError
from biblionotes.common.settings import Settings, settings
from biblionotes.rendering.index_builder import render_index
from biblionotes.rendering.markdown_html import MarkdownConverter
from biblionotes.rendering.page_renderer import expand_page, render_entry
from biblionotes.rendering.templates import PageTemplate
from biblionotes.site.content import ContentReadError, resolve_content

logger = logging.getLogger(__name__)


class OutputWriteError(BiblioNotesError):
    """Raised when an output file or directory cannot be written."""


@dataclass
class BuildReport:
    """What a build produced, keys listed in bibliography order."""

    index_path: Path
    rendered: list[str] = field(default_factory=list)
    missing_record: list[str] = field(default_factory=list)
    missing_content: list[str] = field(default_factory=list)


def _write_html(path: Path, html: str, encoding: str) -> None:
    try:
        path.write_text(html + "\n", encoding=encoding)
    except OSError as exc:
        raise OutputWriteError(f"Could not write output file {path}: {exc}") from exc


def build_site(
    bib_file: Path,
    template_file: Path,
    markdown_dir: Path,
    output_dir: Path,
    *,
    config: Settings = settings,
) -> BuildReport:
    """Render every annotated bibliography entry and the index page.

    Args:
        bib_file: BibTeX file listing the entries.
        template_file: Jinja2 template receiving ``title`` and ``content``.
        markdown_dir: Directory holding ``<key>.md`` notes.
        output_dir: Directory receiving the generated pages (created if
            missing).
        config: Build settings; defaults to the environment-backed instance.

    Returns:
        A :class:`BuildReport` describing rendered and skipped entries.

    Raises:
        BiblioNotesError: On the first unrecoverable failure.
    """
    markdown_dir = Path(markdown_dir)
    output_dir = Path(output_dir)
    encoding = config.file_encoding

    entries = load_bibliography(Path(bib_file), encoding=encoding)
    template = PageTemplate.from_file(
        Path(template_file), encoding=encoding, strict=config.strict_templates
    )
    converter = MarkdownConverter(
        config.markdown_extensions, math_rendering=config.math_rendering
    )

    if markdown_dir.exists() and not markdown_dir.is_dir():
        raise ContentReadError(f"Markdown directory {markdown_dir} is not a directory")
    if not markdown_dir.exists():
        logger.warning("Markdown directory %s does not exist; no notes will be rendered", markdown_dir)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"Could not create output directory {output_dir}: {exc}") from exc

    report = BuildReport(index_path=output_dir / config.index_filename)
    index: list[IndexRecord] = []

    for key, record in tqdm(
        entries, desc="Rendering notes", unit="entry", disable=not config.show_progress
    ):
        if record is None:
            logger.debug("Skipping %s: incomplete bibliography record", key)
            report.missing_record.append(key)
            continue

        markdown_text = resolve_content(
            markdown_dir, key, suffix=config.content_suffix, encoding=encoding
        )
        if markdown_text is None:
            logger.debug("Skipping %s: no note found", key)
            report.missing_content.append(key)
            continue

        page = render_entry(
            key, record, markdown_text, converter, output_suffix=config.output_suffix
        )
        _write_html(output_dir / page.html_filename, expand_page(page, template), encoding)
        index.append(page.index_record())
        report.rendered.append(key)

    index_html = render_index(
        index, template, title=config.index_title, intro=config.index_intro
    )
    _write_html(report.index_path, index_html, encoding)
    logger.info("Wrote index with %d entries to %s", len(index), report.index_path)

    logger.info(
        "Rendered %d of %d entries (%d without a usable record, %d without a note)",
        len(report.rendered),
        len(entries),
        len(report.missing_record),
        len(report.missing_content),
    )
    return report
