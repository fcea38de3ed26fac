"""Settings shared by every stage of the site build.

All values are sourced from environment variables prefixed with
``BIBLIONOTES_`` (or a ``.env`` file loaded at import time).  Command-line
arguments only cover the four input/output paths; everything else that
shapes the generated pages lives here.
"""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv(override=True)

DEFAULT_INDEX_INTRO = (
    "This is an annotated bibliography of various papers I find interesting. "
    "It is automatically generated from a BibTeX file and an archive of "
    "Markdown files."
)


class Settings(BaseSettings):
    """Site build configuration.

    Fields
    ------
    content_suffix
        Extension of the per-entry Markdown notes (``<key><suffix>``).
    output_suffix
        Extension of the generated per-entry pages.
    index_filename
        Name of the listing page written next to the entry pages.
    index_title
        Title passed to the template for the listing page; also used as its
        heading.
    index_intro
        Paragraph shown above the listing.
    markdown_extensions
        Python-Markdown extensions enabled for note conversion.
    math_rendering
        If *true*, TeX math in notes is preserved for MathJax instead of
        being fed through Markdown.
    file_encoding
        Encoding used for every file read or written.
    strict_templates
        If *true*, a template referencing an unknown variable fails the build.
    show_progress
        Display a progress bar while rendering entries.
    log_level
        Default logging level for the command-line tool.
    """

    content_suffix: str = ".md"
    output_suffix: str = ".html"
    index_filename: str = "index.html"
    index_title: str = "Annotated bibliography"
    index_intro: str = DEFAULT_INDEX_INTRO

    markdown_extensions: list[str] = Field(default_factory=lambda: ["extra"])
    math_rendering: bool = True

    file_encoding: str = "utf-8"
    strict_templates: bool = True

    show_progress: bool = True
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BIBLIONOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
