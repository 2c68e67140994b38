from __future__ import annotations

import re

from fastapi.testclient import TestClient

import code_beautifier.api as api


def test_index_has_side_by_side_editors():
    client = TestClient(api.app)
    r = client.get("/")
    assert r.status_code == 200, r.text

    html = r.text
    assert re.search(r"<textarea[^>]*\bid=[\"']input[\"']", html)
    m = re.search(r"<textarea[^>]*\bid=[\"']output[\"'][^>]*>", html)
    assert m, "missing output editor"
    assert "readonly" in m.group(0).lower()
    assert re.search(r"<button[^>]*\bid=[\"']btnFormat[\"']", html)


def test_index_missing_template_is_500(monkeypatch, tmp_path):
    monkeypatch.setattr(api, "TEMPLATES_DIR", tmp_path)
    client = TestClient(api.app)
    r = client.get("/")
    assert r.status_code == 500
    assert r.json()["error"]["message"] == "missing templates/index.html"
