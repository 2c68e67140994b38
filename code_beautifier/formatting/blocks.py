from __future__ import annotations

import re

_dedent_re = re.compile(r"^(except|elif|else|finally)\b")
_flow_re = re.compile(r"^(return|break|continue|pass|raise)\b")
_opens_block_re = re.compile(r":\s*$")


def reindent_blocks(text: str, indent_unit: str) -> str:
    """Recompute indentation of colon-delimited block code (Python-like).

    The pass only looks at trimmed line content: a trailing colon opens a
    block, ``except``/``elif``/``else``/``finally`` sit one level out from the
    block they close, and everything else stays at the current depth. There
    is no way to detect the end of a block, so bodies never dedent on their
    own; the output is best-effort and the function accepts any text.
    """

    level = 0
    out: list[str] = []

    for line in text.split("\n"):
        stripped = line.strip()

        if not stripped or stripped.startswith("#"):
            out.append(stripped)
            continue

        if _dedent_re.match(stripped):
            # Its own colon reopens the block at the depth it just closed.
            out.append(indent_unit * max(0, level - 1) + stripped)
            continue

        if _flow_re.match(stripped):
            out.append(indent_unit * level + stripped)
            continue

        out.append(indent_unit * level + stripped)
        if _opens_block_re.search(stripped):
            level += 1

    return "\n".join(out)
