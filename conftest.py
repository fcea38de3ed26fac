from __future__ import annotations

from pathlib import Path

import pytest

from biblionotes.common.settings import Settings

TEMPLATE = """<!DOCTYPE html>
<html><head><title>{{ title }}</title></head>
<body>{{ content }}</body></html>"""

BIBLIOGRAPHY = """
@article{A,
  title = {T1},
  author = {X},
  year = {2020},
}

@misc{B,
  title = {Untitled draft},
}
"""


@pytest.fixture
def quiet_settings() -> Settings:
    return Settings(show_progress=False)


@pytest.fixture
def site_inputs(tmp_path: Path) -> dict[str, Path]:
    """Bibliography with one complete (A) and one incomplete (B) entry."""
    bib = tmp_path / "refs.bib"
    bib.write_text(BIBLIOGRAPHY, encoding="utf-8")
    template = tmp_path / "page.html"
    template.write_text(TEMPLATE, encoding="utf-8")
    notes = tmp_path / "notes"
    notes.mkdir()
    (notes / "A.md").write_text("Some *notes* on $x^2$.\n", encoding="utf-8")
    return {
        "bib": bib,
        "template": template,
        "notes": notes,
        "output": tmp_path / "out",
    }
