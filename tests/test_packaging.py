"""
Tests for the project metadata.
"""

import re
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent


class TestPyproject:
    """Tests for pyproject.toml."""

    def test_readme_points_at_package_documentation(self):
        """Test a declared readme exists and is not the design notes."""
        text = (ROOT / "pyproject.toml").read_text(encoding='utf-8')
        match = re.search(r'^readme\s*=\s*"([^"]+)"', text, re.MULTILINE)
        if match is None:
            return
        assert match.group(1) != "DESIGN.md"
        assert (ROOT / match.group(1)).is_file()
