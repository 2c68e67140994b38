from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol
from xml.dom import minidom
from xml.parsers.expat import ExpatError

import cssbeautifier
import jsbeautifier
import mdformat
import yaml
from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter


class Grammar(StrEnum):
    BABEL = "babel"
    TYPESCRIPT = "typescript"
    HTML = "html"
    CSS = "css"
    YAML = "yaml"
    MARKDOWN = "markdown"
    XML = "xml"


SCRIPT_GRAMMARS = frozenset({Grammar.BABEL, Grammar.TYPESCRIPT})


@dataclass(frozen=True)
class RenderOptions:
    tab_width: int = 2
    use_tabs: bool = False
    print_width: int = 80

    # Script grammars only; None elsewhere.
    semi: bool | None = None
    single_quote: bool | None = None
    trailing_comma: str | None = None

    @property
    def indent_unit(self) -> str:
        return "\t" if self.use_tabs else " " * max(1, int(self.tab_width))


class Renderer(Protocol):
    def render(self, text: str, grammar: Grammar, options: RenderOptions) -> str: ...


_blank_run_re = re.compile(r"\n(?:[ \t]*\n){3,}")
_xml_decl_re = re.compile(r"^\s*<\?xml[^>]*\?>")

_MAX_BLANK_LINES = 2
# Placeholder comment standing in for a run of blank lines while minidom prints.
_BLANK_MARK = "code-beautifier-blank:"
_blank_mark_re = re.compile(rf"^[ \t]*<!--{_BLANK_MARK}(\d)-->\n", re.MULTILINE)
_FRAGMENT_ROOT = "code-beautifier-fragment"


def _mark_blank_runs(doc: minidom.Document, node: minidom.Node) -> None:
    for child in list(node.childNodes):
        if child.nodeType == child.TEXT_NODE and not child.data.strip():
            blanks = min(child.data.count("\n") - 1, _MAX_BLANK_LINES)
            if blanks > 0:
                node.replaceChild(doc.createComment(f"{_BLANK_MARK}{blanks}"), child)
            else:
                node.removeChild(child)
        elif child.hasChildNodes():
            _mark_blank_runs(doc, child)


def _parse_xml(text: str) -> tuple[minidom.Document, bool]:
    """Parse a document, or a fragment with several top-level nodes.

    Returns the DOM and whether it was wrapped in a synthetic root.
    """
    try:
        return minidom.parseString(text), False
    except ExpatError as e:
        error = e
    body = _xml_decl_re.sub("", text, count=1)
    try:
        return minidom.parseString(f"<{_FRAGMENT_ROOT}>{body}</{_FRAGMENT_ROOT}>"), True
    except ExpatError:
        raise error from None


class BeautifierRenderer:
    """Default renderer backed by jsbeautifier, cssbeautifier, BeautifulSoup, minidom, PyYAML and mdformat.

    Options a library has no knob for (statement terminators, quote style,
    trailing commas) are accepted and ignored.
    """

    def render(self, text: str, grammar: Grammar, options: RenderOptions) -> str:
        grammar = Grammar(grammar)
        if grammar in SCRIPT_GRAMMARS:
            return self._render_script(text, options)
        if grammar == Grammar.CSS:
            return self._render_css(text, options)
        if grammar == Grammar.HTML:
            return self._render_html(text, options)
        if grammar == Grammar.XML:
            return self._render_xml(text, options)
        if grammar == Grammar.YAML:
            return self._render_yaml(text, options)
        if grammar == Grammar.MARKDOWN:
            return self._render_markdown(text, options)
        raise ValueError(f"unsupported grammar: {grammar}")

    def _render_script(self, text: str, options: RenderOptions) -> str:
        opts = jsbeautifier.default_options()
        opts.indent_size = int(options.tab_width)
        opts.indent_char = "\t" if options.use_tabs else " "
        opts.indent_with_tabs = bool(options.use_tabs)
        opts.wrap_line_length = int(options.print_width)
        opts.preserve_newlines = True
        opts.max_preserve_newlines = 2
        opts.end_with_newline = True
        return jsbeautifier.beautify(text, opts)

    def _render_css(self, text: str, options: RenderOptions) -> str:
        opts = cssbeautifier.default_options()
        opts.indent_size = int(options.tab_width)
        opts.indent_char = "\t" if options.use_tabs else " "
        opts.indent_with_tabs = bool(options.use_tabs)
        opts.end_with_newline = True
        return cssbeautifier.beautify(text, opts)

    def _render_html(self, text: str, options: RenderOptions) -> str:
        soup = BeautifulSoup(text, "html.parser")
        formatter = HTMLFormatter(entity_substitution=EntitySubstitution.substitute_xml, indent=options.indent_unit)
        return soup.prettify(formatter=formatter)

    def _render_xml(self, text: str, options: RenderOptions) -> str:
        # ExpatError on malformed input.
        source = text.strip()
        dom, fragment = _parse_xml(source)
        _mark_blank_runs(dom, dom)
        unit = options.indent_unit
        if fragment:
            pretty = "".join(child.toprettyxml(indent=unit) for child in dom.documentElement.childNodes)
            decl = _xml_decl_re.match(source)
            if decl:
                pretty = decl.group(0).strip() + "\n" + pretty
        else:
            pretty = dom.toprettyxml(indent=unit)
            if not source.startswith("<?xml"):
                pretty = pretty.split("\n", 1)[1] if "\n" in pretty else ""
        pretty = _blank_mark_re.sub(lambda m: "\n" * int(m.group(1)), pretty)
        return _blank_run_re.sub("\n\n\n", pretty)

    def _render_yaml(self, text: str, options: RenderOptions) -> str:
        # YAMLError on malformed input; comments are not kept by PyYAML.
        docs = list(yaml.safe_load_all(text))
        return yaml.safe_dump_all(
            docs,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            indent=int(options.tab_width),
            width=int(options.print_width),
        )

    def _render_markdown(self, text: str, options: RenderOptions) -> str:
        # Existing line breaks in paragraphs are kept as written.
        return mdformat.text(text, options={"wrap": "keep"})
