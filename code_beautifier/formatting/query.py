from __future__ import annotations

import re

# Order matters: each pass runs over the output of the previous one.
QUERY_KEYWORDS = (
    "SELECT",
    "FROM",
    "WHERE",
    "JOIN",
    "INNER JOIN",
    "LEFT JOIN",
    "RIGHT JOIN",
    "GROUP BY",
    "ORDER BY",
    "HAVING",
    "INSERT",
    "UPDATE",
    "DELETE",
    "CREATE",
    "ALTER",
    "DROP",
    "INDEX",
    "TABLE",
    "DATABASE",
    "VIEW",
    "PROCEDURE",
    "FUNCTION",
)

_keyword_res = tuple(
    (kw, re.compile(rf"\b{re.escape(kw)}\b", re.IGNORECASE)) for kw in QUERY_KEYWORDS
)

_connective_break_re = re.compile(r"[ \t]+\b(AND|OR)\b", re.IGNORECASE)
_connective_start_re = re.compile(r"^(AND|OR)\b", re.IGNORECASE)


def _relocate_keywords(text: str) -> str:
    for kw, pattern in _keyword_res:
        text = pattern.sub("\n" + kw, text)
    # Connectives keep their original casing.
    return _connective_break_re.sub(lambda m: "\n" + m.group(1), text)


def reindent_query(text: str, indent_unit: str) -> str:
    """Put each major SQL clause on its own line and indent AND/OR continuations.

    Keywords are uppercased and blank lines are dropped, so the original
    layout is not preserved. AND/OR always start a new line, even in text
    with no clause keyword: ``a = 1 and b = 2`` becomes two lines. Only text
    with neither keywords nor connectives comes back as one trimmed line.
    """

    lines = [line.strip() for line in _relocate_keywords(text).split("\n")]
    lines = [line for line in lines if line]

    out: list[str] = []
    for i, line in enumerate(lines):
        if i > 0 and _connective_start_re.match(line):
            out.append(indent_unit + line)
        else:
            out.append(line)
    return "\n".join(out)
