from __future__ import annotations

import json
import math
import re
from typing import Any

from code_beautifier.formatting.errors import JSON_SYNTAX_MESSAGE, FormatError

_lone_surrogate_re = re.compile(r"[\ud800-\udfff]")


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are accepted by the json module but are not JSON.
    raise ValueError(f"non-standard JSON constant: {name}")


def _finite_or_null(raw: str) -> float | None:
    # Literals past the float range (1e400) overflow to inf; they print as null.
    value = float(raw)
    return value if math.isfinite(value) else None


def _escape_surrogate(m: re.Match[str]) -> str:
    return f"\\u{ord(m.group(0)):04x}"


def canonicalize_json(text: str, indent_unit: str) -> str:
    """Parse ``text`` and print it back with ``indent_unit`` per level.

    Key order is kept and non-ASCII characters are written as-is. Unpaired
    surrogates, which cannot be encoded as UTF-8, stay ``\\uXXXX`` escapes.
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant, parse_float=_finite_or_null)
    except (ValueError, RecursionError) as e:
        raise FormatError(JSON_SYNTAX_MESSAGE) from e
    out = json.dumps(data, indent=indent_unit, ensure_ascii=False, allow_nan=False)
    return _lone_surrogate_re.sub(_escape_surrogate, out)
