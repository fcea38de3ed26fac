"""Page template shared by the entry pages and the index page.

A :class:`PageTemplate` owns a private Jinja2 environment holding exactly
one template.  It is created once per build and handed to every renderer
that needs it; nothing is registered globally.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError, Undefined
from markupsafe import Markup

from biblionotes.common.errors import BiblioNotesError

logger = logging.getLogger(__name__)


class TemplateLoadError(BiblioNotesError):
    """Raised when the template file cannot be read or compiled."""


class TemplateExpansionError(BiblioNotesError):
    """Raised when rendering the template fails."""


class PageTemplate:
    """Jinja2 page skeleton expanded with ``title`` and ``content``.

    ``title`` is plain text and gets escaped; ``content`` is already HTML and
    is inserted as-is.
    """

    NAME = "page"

    def __init__(self, source: str, *, strict: bool = True) -> None:
        env = Environment(
            loader=DictLoader({self.NAME: source}),
            autoescape=True,
            undefined=StrictUndefined if strict else Undefined,
        )
        try:
            self._template = env.get_template(self.NAME)
        except TemplateError as exc:
            raise TemplateLoadError(f"Could not register template: {exc}") from exc

    @classmethod
    def from_file(
        cls, path: Path, *, encoding: str = "utf-8", strict: bool = True
    ) -> "PageTemplate":
        """Read and compile the template stored at *path*."""
        try:
            source = Path(path).read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateLoadError(f"Could not read template file {path}: {exc}") from exc
        logger.debug("Loaded template %s", path)
        return cls(source, strict=strict)

    def render(self, title: str, content: str) -> str:
        try:
            return self._template.render(title=title, content=Markup(content))
        except TemplateError as exc:
            raise TemplateExpansionError(f"Template failed to render {title!r}: {exc}") from exc
