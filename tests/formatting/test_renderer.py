from __future__ import annotations

from xml.parsers.expat import ExpatError

import pytest
import yaml

from code_beautifier.formatting.config import StyleConfig
from code_beautifier.formatting.dispatcher import format_code
from code_beautifier.formatting.errors import FormatError
from code_beautifier.formatting.renderer import BeautifierRenderer, Grammar, RenderOptions


@pytest.fixture
def renderer() -> BeautifierRenderer:
    return BeautifierRenderer()


def test_script_indent_size(renderer: BeautifierRenderer) -> None:
    out = renderer.render("function f(){return 1;}", Grammar.BABEL, RenderOptions(tab_width=4))
    assert "\n    return 1;\n" in out


def test_script_tabs(renderer: BeautifierRenderer) -> None:
    out = renderer.render("if(a){b()}", Grammar.TYPESCRIPT, RenderOptions(use_tabs=True))
    assert "\n\tb()" in out


def test_css(renderer: BeautifierRenderer) -> None:
    out = renderer.render("a{color:red;}", Grammar.CSS, RenderOptions(tab_width=2))
    assert "\n  color: red;\n" in out


def test_html_uses_indent_unit(renderer: BeautifierRenderer) -> None:
    out = renderer.render("<div><p>hi</p></div>", Grammar.HTML, RenderOptions(tab_width=3))
    lines = out.split("\n")
    assert lines[0] == "<div>"
    assert lines[1] == "   <p>"


def test_xml_pretty_and_declaration_only_when_present(renderer: BeautifierRenderer) -> None:
    out = renderer.render("<a><b>x</b><c/></a>", Grammar.XML, RenderOptions(tab_width=2))
    assert out == "<a>\n  <b>x</b>\n  <c/>\n</a>\n"

    with_decl = renderer.render('<?xml version="1.0"?><a/>', Grammar.XML, RenderOptions())
    assert with_decl.startswith("<?xml")
    assert with_decl.rstrip().endswith("<a/>")


def test_xml_keeps_blank_lines_between_nodes(renderer: BeautifierRenderer) -> None:
    out = renderer.render("<a>\n  <b/>\n\n  <c/>\n</a>", Grammar.XML, RenderOptions(tab_width=2))
    assert out == "<a>\n  <b/>\n\n  <c/>\n</a>\n"


def test_xml_blank_runs_capped_at_two(renderer: BeautifierRenderer) -> None:
    out = renderer.render("<a><b/>\n\n\n\n\n<c/></a>", Grammar.XML, RenderOptions(tab_width=2))
    assert out == "<a>\n  <b/>\n\n\n  <c/>\n</a>\n"


def test_xml_fragment_with_several_roots(renderer: BeautifierRenderer) -> None:
    out = renderer.render("<a>1</a>\n<b><c/></b>", Grammar.XML, RenderOptions(use_tabs=True))
    assert out == "<a>1</a>\n<b>\n\t<c/>\n</b>\n"


def test_xml_malformed_raises(renderer: BeautifierRenderer) -> None:
    with pytest.raises(ExpatError):
        renderer.render("<a><b></a>", Grammar.XML, RenderOptions())


def test_yaml_keeps_key_order(renderer: BeautifierRenderer) -> None:
    out = renderer.render("b: 1\na: {c: 2}\n", Grammar.YAML, RenderOptions(tab_width=4))
    assert out == "b: 1\na:\n    c: 2\n"


def test_yaml_malformed_raises(renderer: BeautifierRenderer) -> None:
    with pytest.raises(yaml.YAMLError):
        renderer.render("a: [1, 2\n", Grammar.YAML, RenderOptions())


def test_markdown(renderer: BeautifierRenderer) -> None:
    out = renderer.render("# Title\n\n\n\n* a\n* b\n", Grammar.MARKDOWN, RenderOptions())
    assert out.startswith("# Title\n\n")
    assert "\n\n\n" not in out


def test_dispatcher_wraps_real_library_failures() -> None:
    with pytest.raises(FormatError) as ei:
        format_code("a: [1, 2\n", "yaml", StyleConfig())
    assert ei.value.message.startswith("Formatting failed: ")

    with pytest.raises(FormatError) as ei:
        format_code("<a><b></a>", "xml", StyleConfig())
    assert ei.value.message.startswith("Formatting failed: ")


def test_html_keeps_entities_escaped(renderer: BeautifierRenderer) -> None:
    out = renderer.render("<p>a &lt; b</p>", Grammar.HTML, RenderOptions())
    assert "a &lt; b" in out


def test_format_code_accepts_xml_fragment() -> None:
    assert format_code("<a>1</a>\n<b>2</b>", "xml", StyleConfig()) == "<a>1</a>\n<b>2</b>\n"


def test_markdown_keeps_paragraph_line_breaks(renderer: BeautifierRenderer) -> None:
    text = "one short line\nanother short line that runs past the print width\n"
    assert renderer.render(text, Grammar.MARKDOWN, RenderOptions(print_width=20)) == text
