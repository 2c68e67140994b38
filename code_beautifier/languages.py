from __future__ import annotations

from enum import StrEnum
from pathlib import PurePath


class Language(StrEnum):
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    HTML = "html"
    CSS = "css"
    JSON = "json"
    PYTHON = "python"
    XML = "xml"
    SQL = "sql"
    YAML = "yaml"
    MARKDOWN = "markdown"


LANGUAGE_LABELS: dict[Language, str] = {
    Language.JAVASCRIPT: "JavaScript",
    Language.TYPESCRIPT: "TypeScript",
    Language.HTML: "HTML",
    Language.CSS: "CSS",
    Language.JSON: "JSON",
    Language.PYTHON: "Python",
    Language.XML: "XML",
    Language.SQL: "SQL",
    Language.YAML: "YAML",
    Language.MARKDOWN: "Markdown",
}

FILE_EXTENSIONS: dict[Language, str] = {
    Language.JAVASCRIPT: "js",
    Language.TYPESCRIPT: "ts",
    Language.HTML: "html",
    Language.CSS: "css",
    Language.JSON: "json",
    Language.PYTHON: "py",
    Language.XML: "xml",
    Language.SQL: "sql",
    Language.YAML: "yaml",
    Language.MARKDOWN: "md",
}

_SUFFIX_TO_LANGUAGE: dict[str, Language] = {
    ".js": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".cjs": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT,
    ".tsx": Language.TYPESCRIPT,
    ".html": Language.HTML,
    ".htm": Language.HTML,
    ".css": Language.CSS,
    ".json": Language.JSON,
    ".py": Language.PYTHON,
    ".xml": Language.XML,
    ".sql": Language.SQL,
    ".yaml": Language.YAML,
    ".yml": Language.YAML,
    ".md": Language.MARKDOWN,
    ".markdown": Language.MARKDOWN,
}

DOWNLOAD_STEM = "formatted-code"


def parse_language(value: str | Language | None) -> Language | None:
    """Return the matching Language, or None for anything outside the closed set."""

    if isinstance(value, Language):
        return value
    raw = str(value or "").strip().lower()
    try:
        return Language(raw)
    except ValueError:
        return None


def file_extension(language: str | Language | None) -> str:
    lang = parse_language(language)
    if lang is None:
        return "txt"
    return FILE_EXTENSIONS[lang]


def download_filename(language: str | Language | None) -> str:
    return f"{DOWNLOAD_STEM}.{file_extension(language)}"


def language_from_filename(filename: str) -> Language | None:
    suffix = PurePath(str(filename or "")).suffix.lower()
    return _SUFFIX_TO_LANGUAGE.get(suffix)
