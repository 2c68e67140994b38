from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure the repo root (containing `code_beautifier/`) is importable when pytest
# picks `tests/` as the rootdir (e.g., single-file runs).
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

# Keep test runs from writing logs/ under the repo.
os.environ.setdefault("CODE_BEAUTIFIER_DISABLE_FILE_LOG", "1")


@pytest.fixture
def dotenv_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the settings store at a throwaway dotenv file."""

    path = tmp_path / ".env"
    monkeypatch.setenv("CODE_BEAUTIFIER_DOTENV_PATH", str(path))
    return path
