"""Locate and load the Markdown note belonging to a citation key."""

from __future__ import annotations

from pathlib import Path

from biblionotes.common.errors import BiblioNotesError


class ContentReadError(BiblioNotesError):
    """Raised when a note exists but cannot be read."""


def content_path(base_dir: Path, key: str, suffix: str = ".md") -> Path:
    return Path(base_dir) / f"{key}{suffix}"


def resolve_content(
    base_dir: Path, key: str, *, suffix: str = ".md", encoding: str = "utf-8"
) -> str | None:
    """Return the note for *key*, or None if there is no such file.

    A missing note is the normal case for entries nobody has written about
    yet.  Any other failure to read it is fatal.

    Raises:
        ContentReadError: If the file exists but cannot be read or decoded.
    """
    path = content_path(base_dir, key, suffix)
    try:
        return path.read_text(encoding=encoding)
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentReadError(f"Could not read markdown file {path}: {exc}") from exc
