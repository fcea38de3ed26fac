from __future__ import annotations

from pathlib import Path

import pytest

from biblionotes.bibliography.entities import BibliographyRecord, IndexRecord
from biblionotes.rendering.index_builder import build_index_content, render_index
from biblionotes.rendering.markdown_html import MarkdownConverter, mask_math_segments
from biblionotes.rendering.page_renderer import (
    expand_page,
    render_entry,
    render_header,
    render_page,
)
from biblionotes.rendering.templates import (
    PageTemplate,
    TemplateExpansionError,
    TemplateLoadError,
)

SIMPLE_TEMPLATE = "<title>{{ title }}</title><main>{{ content }}</main>"


def test_markdown_is_converted() -> None:
    html = MarkdownConverter().convert("# Heading\n\nSome *text*.")

    assert "<h1>Heading</h1>" in html
    assert "<em>text</em>" in html


def test_inline_math_is_protected_from_markdown() -> None:
    html = MarkdownConverter().convert("Product $a_1 * b_2 * c$ here.")

    assert r'<span class="math inline">\(a_1 * b_2 * c\)</span>' in html
    assert "<em>" not in html


def test_display_math_is_wrapped_and_escaped() -> None:
    html = MarkdownConverter().convert("$$\n\\sum_i x_i < y\n$$\n")

    assert r'<span class="math display">\[\sum_i x_i &lt; y\]</span>' in html


def test_bracket_delimiters_are_recognised() -> None:
    html = MarkdownConverter().convert(r"Inline \(x\) and display \[y\].")

    assert r'<span class="math inline">\(x\)</span>' in html
    assert r'<span class="math display">\[y\]</span>' in html


def test_dollar_amounts_and_code_are_not_math() -> None:
    masked, spans = mask_math_segments("It cost $5 and $10, see `$HOME$`.")

    assert spans == []
    assert masked == "It cost $5 and $10, see `$HOME$`."


def test_fenced_code_is_not_math() -> None:
    html = MarkdownConverter().convert("```\necho $PATH$\n```\n")

    assert "math" not in html
    assert "echo $PATH$" in html


def test_math_rendering_can_be_disabled() -> None:
    html = MarkdownConverter(math_rendering=False).convert("Value $x$.")

    assert html == "<p>Value $x$.</p>"


def test_converter_output_does_not_leak_between_documents() -> None:
    converter = MarkdownConverter()
    first = converter.convert("Note[^1].\n\n[^1]: Footnote.")
    converter.convert("Something else.")

    assert converter.convert("Note[^1].\n\n[^1]: Footnote.") == first


def test_template_escapes_title_but_not_content() -> None:
    template = PageTemplate(SIMPLE_TEMPLATE)

    html = template.render(title="A & B", content="<p>body</p>")

    assert html == "<title>A &amp; B</title><main><p>body</p></main>"


def test_strict_template_rejects_unknown_variables() -> None:
    template = PageTemplate("{{ title }} {{ author }}")

    with pytest.raises(TemplateExpansionError):
        template.render(title="T", content="")


def test_lenient_template_renders_unknown_variables_empty() -> None:
    template = PageTemplate("{{ title }}|{{ author }}", strict=False)

    assert template.render(title="T", content="") == "T|"


def test_template_syntax_error_is_a_load_error() -> None:
    with pytest.raises(TemplateLoadError, match="Could not register template"):
        PageTemplate("{{ title ")


def test_missing_template_file_is_a_load_error(tmp_path: Path) -> None:
    with pytest.raises(TemplateLoadError, match="Could not read template file"):
        PageTemplate.from_file(tmp_path / "missing.html")


def test_header_repeats_title_and_escapes_metadata() -> None:
    record = BibliographyRecord(title="Graphs & Trees", author="X", year="2020")

    assert render_header(record) == (
        "<header><h1>Graphs &amp; Trees</h1>"
        "<cite>X (2020) <em>Graphs &amp; Trees</em></cite></header>"
    )


def test_render_page_wraps_header_and_body_in_template() -> None:
    record = BibliographyRecord(title="T1", author="X", year="2020")
    template = PageTemplate(SIMPLE_TEMPLATE)

    html = render_page(record, "Great *paper*.", template)

    assert html.startswith("<title>T1</title><main><header><h1>T1</h1>")
    assert "<cite>X (2020) <em>T1</em></cite></header>\n<p>Great <em>paper</em>.</p>" in html


def test_render_entry_names_page_after_key() -> None:
    record = BibliographyRecord(title="T1", author="X", year="2020")

    page = render_entry("smith2020", record, "Text", MarkdownConverter())

    assert page.html_filename == "smith2020.html"
    assert page.index_record() == IndexRecord(
        filename="smith2020.html", author="X", year="2020", title="T1"
    )


def test_index_content_lists_records_in_given_order() -> None:
    records = [
        IndexRecord(filename="b.html", author="Zed", year="2001", title="Later"),
        IndexRecord(filename="a.html", author="Amy", year="1999", title="Earlier"),
    ]

    content = build_index_content(records, heading="Notes", intro="Intro.")

    assert content == (
        "<h1>Notes</h1>\n"
        "<p>Intro.</p>\n"
        '<ul class="nonetype">\n'
        '<li>Zed (2001) <a href="b.html">Later</a></li>\n'
        '<li>Amy (1999) <a href="a.html">Earlier</a></li>\n'
        "</ul>"
    )


def test_empty_index_still_has_heading_and_list() -> None:
    template = PageTemplate(SIMPLE_TEMPLATE)

    html = render_index([], template)

    assert "<title>Annotated bibliography</title>" in html
    assert "<h1>Annotated bibliography</h1>" in html
    assert '<ul class="nonetype">\n</ul>' in html
    assert "<li>" not in html


def test_indented_code_block_is_not_math() -> None:
    html = MarkdownConverter().convert("Text\n\n    echo $PATH$ here\n")

    assert "math" not in html
    assert "echo $PATH$ here" in html


def test_multi_backtick_code_span_is_not_math() -> None:
    masked, spans = mask_math_segments("See ``a `$x$` b`` and $y$.")

    assert masked == "See ``a `$x$` b`` and @@MATH0@@."
    assert spans == [r'<span class="math inline">\(y\)</span>']


def test_render_page_matches_pipeline_rendering() -> None:
    record = BibliographyRecord(title="T1", author="X", year="2020")
    template = PageTemplate(SIMPLE_TEMPLATE)
    converter = MarkdownConverter()

    page = render_entry("A", record, "Body $x$.", converter)

    assert render_page(record, "Body $x$.", template, converter=converter, key="A") == (
        expand_page(page, template)
    )
