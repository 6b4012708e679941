"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'flagwatch' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def make_tree(tmp_path):
    """Write {relative_path: content} under tmp_path and return tmp_path."""

    def _make(files):
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def sample_repo(make_tree):
    return make_tree({
        "src/app.ts": (
            "if (process.env.FEATURE_NEW_UI === 'true') {\n"
            "  renderNewUI();\n"
            "}\n"
            "\n"
            "if (process.env.FEATURE_MISSING === 'true') {\n"
            "  renderMissing();\n"
            "}\n"
        ),
        ".env": "FEATURE_NEW_UI=true\nFEATURE_UNUSED=false\n",
    })
