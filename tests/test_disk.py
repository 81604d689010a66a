"""Unit tests for free-space helpers."""

import errno
import os
import shutil
from pathlib import Path
from types import SimpleNamespace

import pytest

import disk
from disk import free_space, freed_between, system_drive


class TestFreeSpace:
    """Tests for free_space()."""

    def test_existing_path(self, tmp_path: Path) -> None:
        assert free_space(str(tmp_path)) == shutil.disk_usage(str(tmp_path)).free

    def test_missing_path_uses_ancestor(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        probed = []
        monkeypatch.setattr(
            disk.shutil, "disk_usage",
            lambda p: probed.append(p) or SimpleNamespace(total=100, used=40, free=60),
        )

        assert free_space(str(tmp_path / "a" / "b")) == 60
        assert probed == [str(tmp_path)]

    def test_unreadable_volume_is_zero(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken(path):
            raise OSError(errno.EIO, "I/O error", path)

        monkeypatch.setattr(disk.shutil, "disk_usage", broken)

        assert free_space(str(tmp_path)) == 0


class TestFreedBetween:
    """Tests for freed_between()."""

    @pytest.mark.parametrize(
        "before, after, expected",
        [(100, 400, 300), (400, 400, 0), (400, 100, 0)],
    )
    def test_delta(self, before: int, after: int, expected: int) -> None:
        assert freed_between(before, after) == expected


def test_system_drive_exists() -> None:
    assert os.path.isdir(system_drive())
