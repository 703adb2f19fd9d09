"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree for search and copy tests.

    Layout (4 files, 3 directories):
        root/a.txt
        root/b.md
        root/empty/
        root/sub/c.txt
        root/sub/deep/d.txt
    """
    root = tmp_path / "root"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_text("alpha")
    (root / "b.md").write_text("beta contents")
    (root / "sub" / "c.txt").write_text("gamma needle")
    (root / "sub" / "deep" / "d.txt").write_text("delta")
    return root


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home
