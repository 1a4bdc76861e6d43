# tests/conftest.py
from __future__ import annotations

import pytest

from spotplane import runtime
from spotplane.labels import load_glyph_table


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Every test gets an empty workspace and a fresh runtime."""
    ws = tmp_path / "workspace"
    monkeypatch.setenv("SPOTPLANE_HOME", str(ws))
    runtime._current_runtime.set(None)
    load_glyph_table.cache_clear()
    yield ws
    load_glyph_table.cache_clear()
