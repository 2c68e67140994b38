from __future__ import annotations

import logging

from code_beautifier.formatting.blocks import reindent_blocks
from code_beautifier.formatting.canonical import canonicalize_json
from code_beautifier.formatting.config import StyleConfig
from code_beautifier.formatting.errors import FORMAT_FAILED_PREFIX, FormatError
from code_beautifier.formatting.query import reindent_query
from code_beautifier.formatting.renderer import (
    SCRIPT_GRAMMARS,
    BeautifierRenderer,
    Grammar,
    Renderer,
    RenderOptions,
)
from code_beautifier.languages import Language, parse_language

logger = logging.getLogger(__name__)

DELEGATED_GRAMMARS: dict[Language, Grammar] = {
    Language.JAVASCRIPT: Grammar.BABEL,
    Language.TYPESCRIPT: Grammar.TYPESCRIPT,
    Language.HTML: Grammar.HTML,
    Language.CSS: Grammar.CSS,
    Language.YAML: Grammar.YAML,
    Language.MARKDOWN: Grammar.MARKDOWN,
    Language.XML: Grammar.XML,
}

DEFAULT_RENDERER: Renderer = BeautifierRenderer()


def render_options_for(grammar: Grammar, style: StyleConfig) -> RenderOptions:
    is_script = grammar in SCRIPT_GRAMMARS
    return RenderOptions(
        tab_width=int(style.tab_width),
        use_tabs=bool(style.use_tabs),
        print_width=int(style.print_width),
        semi=bool(style.semicolons) if is_script else None,
        single_quote=bool(style.single_quote) if is_script else None,
        trailing_comma=str(style.trailing_comma) if is_script else None,
    )


def format_code(
    text: str,
    language: str | Language,
    style: StyleConfig,
    *,
    renderer: Renderer | None = None,
) -> str:
    """Reformat ``text`` as ``language`` using ``style``.

    Raises FormatError for malformed JSON ("Invalid JSON syntax") and for any
    failure of the delegated renderer ("Formatting failed: ..."). Blank input
    and unknown languages come back unchanged.
    """

    if not text.strip():
        return text

    lang = parse_language(language)
    if lang is None:
        logger.debug("unknown language %r; returning input unchanged", language)
        return text

    logger.debug("format: language=%s chars=%s", lang, len(text))
    unit = style.indent_unit

    try:
        if lang == Language.JSON:
            return canonicalize_json(text, unit)
        if lang == Language.PYTHON:
            return reindent_blocks(text, unit)
        if lang == Language.SQL:
            return reindent_query(text, unit)

        grammar = DELEGATED_GRAMMARS[lang]
        return (renderer or DEFAULT_RENDERER).render(text, grammar, render_options_for(grammar, style))
    except FormatError:
        raise
    except Exception as e:
        message = str(e) or "Unknown error"
        logger.info("format failed: language=%s error=%s", lang, message)
        raise FormatError(FORMAT_FAILED_PREFIX + message) from e
