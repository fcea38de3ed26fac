"""build_cli.py
Command-line entry point for rendering an annotated bibliography.

This module only handles CLI parsing, logging setup and the exit status; all
heavy lifting is delegated to :pyfunc:`biblionotes.site.pipeline.build_site`.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from biblionotes.common.errors import BiblioNotesError
from biblionotes.common.settings import settings
from biblionotes.site.pipeline import build_site

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="biblionotes",
        description="Render Markdown notes on BibTeX entries into static HTML pages.",
        epilog=(
            "All four paths are required; otherwise the usage is printed to "
            "stderr and nothing is read or written (exit status 2)."
        ),
    )
    parser.add_argument("bibliography", type=Path, help="Path to .bib file")
    parser.add_argument("template", type=Path, help="Jinja2 page template")
    parser.add_argument("markdown_dir", type=Path, help="Directory of <key>.md notes")
    parser.add_argument("output_dir", type=Path, help="Directory for generated HTML")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity",
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Hide the progress bar"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:  # noqa: D401
    """Parse CLI options and run the build."""

    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = settings
    if args.no_progress:
        config = settings.model_copy(update={"show_progress": False})

    try:
        build_site(
            args.bibliography,
            args.template,
            args.markdown_dir,
            args.output_dir,
            config=config,
        )
    except BiblioNotesError as exc:
        logger.error("Build aborted: %s", exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
