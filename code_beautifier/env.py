from __future__ import annotations

import os


def env_truthy(name: str) -> bool:
    v = str(os.getenv(name, "")).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    raw = str(os.getenv(name, "")).strip()
    if not raw:
        return default
    try:
        return int(raw)
    except Exception:
        return default


def max_upload_bytes() -> int:
    return max(1, env_int("CODE_BEAUTIFIER_MAX_UPLOAD_BYTES", 5 * 1024 * 1024))


def max_text_chars() -> int:
    return max(1, env_int("CODE_BEAUTIFIER_MAX_TEXT_CHARS", 2_000_000))
