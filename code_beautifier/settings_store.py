from __future__ import annotations

import os
import re
import threading
import uuid
from dataclasses import dataclass
from pathlib import Path

from code_beautifier.formatting.config import TRAILING_COMMA_MODES, StyleConfig

_DOTENV_ASSIGN_RE = re.compile(r"^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)\s*$")

_LOCK = threading.Lock()


def dotenv_path(*, workdir: Path) -> Path:
    override = str(os.getenv("CODE_BEAUTIFIER_DOTENV_PATH", "") or "").strip()
    if override:
        return Path(override)
    return workdir / ".env"


def _parse_assignment(line: str) -> tuple[str, str] | None:
    raw = str(line or "")
    stripped = raw.strip()
    if not stripped or stripped.startswith("#"):
        return None
    m = _DOTENV_ASSIGN_RE.match(raw)
    if not m:
        return None
    key = str(m.group(1) or "").strip()
    if not key:
        return None
    return key, str(m.group(2) or "")


def _decode_value(raw: str) -> str:
    v = str(raw or "").strip()
    if not v:
        return ""
    if (v.startswith('"') and v.endswith('"')) or (v.startswith("'") and v.endswith("'")):
        return v[1:-1]
    return v


def _atomic_write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + f".{uuid.uuid4().hex}.tmp")
    tmp.write_text(content, encoding="utf-8")
    tmp.replace(path)


@dataclass(frozen=True)
class StyleDefaults:
    tab_width: int | None = None
    use_tabs: bool | None = None
    semicolons: bool | None = None
    single_quote: bool | None = None
    trailing_comma: str | None = None
    print_width: int | None = None
    auto_format: bool | None = None


_ENV_TAB_WIDTH = "CODE_BEAUTIFIER_TAB_WIDTH"
_ENV_USE_TABS = "CODE_BEAUTIFIER_USE_TABS"
_ENV_SEMICOLONS = "CODE_BEAUTIFIER_SEMICOLONS"
_ENV_SINGLE_QUOTE = "CODE_BEAUTIFIER_SINGLE_QUOTE"
_ENV_TRAILING_COMMA = "CODE_BEAUTIFIER_TRAILING_COMMA"
_ENV_PRINT_WIDTH = "CODE_BEAUTIFIER_PRINT_WIDTH"
_ENV_AUTO_FORMAT = "CODE_BEAUTIFIER_AUTO_FORMAT"

_FIELD_TO_ENV = {
    "tab_width": _ENV_TAB_WIDTH,
    "use_tabs": _ENV_USE_TABS,
    "semicolons": _ENV_SEMICOLONS,
    "single_quote": _ENV_SINGLE_QUOTE,
    "trailing_comma": _ENV_TRAILING_COMMA,
    "print_width": _ENV_PRINT_WIDTH,
    "auto_format": _ENV_AUTO_FORMAT,
}

_STYLE_ENV_KEYS = tuple(_FIELD_TO_ENV.values())

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off"}


def _parse_int_value(key: str, raw: str | None, *, lo: int, hi: int) -> int | None:
    if not raw:
        return None
    try:
        value = int(raw)
    except Exception as e:
        raise ValueError(f"{key} must be an int") from e
    if not lo <= value <= hi:
        raise ValueError(f"{key} must be between {lo} and {hi}")
    return value


def _parse_bool_value(key: str, raw: str | None) -> bool | None:
    if not raw:
        return None
    v = raw.strip().lower()
    if v in _TRUE_VALUES:
        return True
    if v in _FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be a boolean")


def read_style_defaults(path: Path) -> StyleDefaults:
    if not path.exists():
        return StyleDefaults()

    raw_values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_assignment(line)
        if parsed is None:
            continue
        k, v = parsed
        if k in _STYLE_ENV_KEYS:
            raw_values[k] = _decode_value(v)

    trailing_comma = raw_values.get(_ENV_TRAILING_COMMA) or None
    if trailing_comma is not None:
        trailing_comma = trailing_comma.strip().lower()
        if trailing_comma not in TRAILING_COMMA_MODES:
            raise ValueError(f"{_ENV_TRAILING_COMMA} must be one of: {', '.join(TRAILING_COMMA_MODES)}")

    return StyleDefaults(
        tab_width=_parse_int_value(_ENV_TAB_WIDTH, raw_values.get(_ENV_TAB_WIDTH), lo=1, hi=8),
        use_tabs=_parse_bool_value(_ENV_USE_TABS, raw_values.get(_ENV_USE_TABS)),
        semicolons=_parse_bool_value(_ENV_SEMICOLONS, raw_values.get(_ENV_SEMICOLONS)),
        single_quote=_parse_bool_value(_ENV_SINGLE_QUOTE, raw_values.get(_ENV_SINGLE_QUOTE)),
        trailing_comma=trailing_comma,
        print_width=_parse_int_value(_ENV_PRINT_WIDTH, raw_values.get(_ENV_PRINT_WIDTH), lo=40, hi=200),
        auto_format=_parse_bool_value(_ENV_AUTO_FORMAT, raw_values.get(_ENV_AUTO_FORMAT)),
    )


def update_style_defaults(path: Path, *, updates: dict[str, str | None]) -> None:
    """Update managed style keys in a dotenv file, preserving unknown lines.

    Notes:
    - Only keys present in `updates` are modified/added.
    - `None` means "clear" (write as KEY=).
    """

    for k in updates:
        if k not in _STYLE_ENV_KEYS:
            raise ValueError(f"unsupported key: {k}")

    with _LOCK:
        lines: list[str] = []
        if path.exists():
            lines = path.read_text(encoding="utf-8").splitlines()

        key_to_index: dict[str, int] = {}
        for i, line in enumerate(lines):
            parsed = _parse_assignment(line)
            if parsed is None:
                continue
            k, _v = parsed
            if k in updates and k not in key_to_index:
                key_to_index[k] = i

        for key in updates:
            value = updates[key]
            new_line = f"{key}={'' if value is None else value}"
            if key in key_to_index:
                lines[key_to_index[key]] = new_line
            else:
                lines.append(new_line)

        content = "\n".join(lines).rstrip("\n") + "\n"
        _atomic_write_text(path, content)


def style_env_updates_from_patch(patch: StyleDefaults, *, fields_set: set[str]) -> dict[str, str | None]:
    """Convert a StyleDefaults patch into dotenv updates; only fields in `fields_set` are included."""

    updates: dict[str, str | None] = {}
    for field, key in _FIELD_TO_ENV.items():
        if field not in fields_set:
            continue
        value = getattr(patch, field)
        if value is None:
            updates[key] = None
        elif isinstance(value, bool):
            updates[key] = "true" if value else "false"
        else:
            updates[key] = str(value)
    return updates


def style_config_from_defaults(defaults: StyleDefaults) -> StyleConfig:
    base = StyleConfig()
    return StyleConfig(
        tab_width=base.tab_width if defaults.tab_width is None else int(defaults.tab_width),
        use_tabs=base.use_tabs if defaults.use_tabs is None else bool(defaults.use_tabs),
        semicolons=base.semicolons if defaults.semicolons is None else bool(defaults.semicolons),
        single_quote=base.single_quote if defaults.single_quote is None else bool(defaults.single_quote),
        trailing_comma=base.trailing_comma if defaults.trailing_comma is None else str(defaults.trailing_comma),
        print_width=base.print_width if defaults.print_width is None else int(defaults.print_width),
        auto_format=base.auto_format if defaults.auto_format is None else bool(defaults.auto_format),
    )
