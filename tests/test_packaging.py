from __future__ import annotations

from pathlib import Path

import pytest


def test_project_metadata_has_no_readme_file_reference():
    tomllib = pytest.importorskip("tomllib")
    root = Path(__file__).resolve().parents[1]
    meta = tomllib.loads((root / "pyproject.toml").read_text(encoding="utf-8"))["project"]
    assert meta["name"] == "ccal"
    readme = meta.get("readme")
    assert readme is None or (root / readme).exists()
