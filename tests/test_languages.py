from __future__ import annotations

import pytest

from code_beautifier.formatting.config import StyleConfig
from code_beautifier.languages import (
    Language,
    download_filename,
    file_extension,
    language_from_filename,
    parse_language,
)


@pytest.mark.parametrize(
    ("lang", "ext"),
    [
        ("javascript", "js"),
        ("typescript", "ts"),
        ("html", "html"),
        ("css", "css"),
        ("json", "json"),
        ("python", "py"),
        ("xml", "xml"),
        ("sql", "sql"),
        ("yaml", "yaml"),
        ("markdown", "md"),
        ("brainfuck", "txt"),
        (None, "txt"),
    ],
)
def test_file_extension_table(lang: str | None, ext: str) -> None:
    assert file_extension(lang) == ext


def test_download_filename() -> None:
    assert download_filename(Language.PYTHON) == "formatted-code.py"
    assert download_filename("unknown") == "formatted-code.txt"


def test_language_from_filename() -> None:
    assert language_from_filename("query.SQL") == Language.SQL
    assert language_from_filename("docker-compose.yml") == Language.YAML
    assert language_from_filename("App.tsx") == Language.TYPESCRIPT
    assert language_from_filename("notes") is None
    assert language_from_filename("archive.tar.gz") is None


def test_parse_language() -> None:
    assert parse_language("Python") == Language.PYTHON
    assert parse_language(Language.CSS) is Language.CSS
    assert parse_language("") is None
    assert parse_language(None) is None


def test_indent_unit() -> None:
    assert StyleConfig(tab_width=3).indent_unit == "   "
    assert StyleConfig(tab_width=3, use_tabs=True).indent_unit == "\t"
