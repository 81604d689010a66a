"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A small temp-like folder with nested files and folders.

    Layout (sizes in bytes)::

        root/
            a.tmp           10
            b.log           20
            cache/
                c.bin       30
                deep/
                    d.dat   40
            empty/
    """
    root = tmp_path / "root"
    (root / "cache" / "deep").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.tmp").write_bytes(b"x" * 10)
    (root / "b.log").write_bytes(b"x" * 20)
    (root / "cache" / "c.bin").write_bytes(b"x" * 30)
    (root / "cache" / "deep" / "d.dat").write_bytes(b"x" * 40)
    return root


@pytest.fixture
def temp_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point %TEMP% and %SYSTEMROOT% at throwaway folders."""
    user_temp = tmp_path / "user_temp"
    user_temp.mkdir()
    system_root = tmp_path / "Windows"
    (system_root / "Temp").mkdir(parents=True)
    monkeypatch.setenv("TEMP", str(user_temp))
    monkeypatch.setenv("SYSTEMROOT", str(system_root))
    return user_temp
