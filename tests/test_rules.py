"""Unit tests for the cleanup rules."""

from pathlib import Path

import pytest

from config import AppConfig
from rules import ALL_RULES, get_rule_names, recycle_bin, temp_files


def test_registry_order() -> None:
    assert get_rule_names() == ["temp_files", "recycle_bin"]
    for rule in ALL_RULES:
        assert callable(rule.run)
        assert rule.display_name


class TestTempFiles:
    """Tests for the temp_files rule."""

    def test_purges_every_target(self, temp_env: Path, tmp_path: Path) -> None:
        (temp_env / "setup.log").write_bytes(b"x" * 64)
        (temp_env / "unpack").mkdir()
        (temp_env / "unpack" / "payload.cab").write_bytes(b"x" * 36)
        system_temp = tmp_path / "Windows" / "Temp"
        (system_temp / "old.etl").write_bytes(b"x" * 5)

        outcome = temp_files.run(AppConfig())

        assert outcome.error is None
        assert [t.label for t in outcome.targets] == ["User temp", "System temp"]
        user, system = outcome.targets
        assert (user.result.files_deleted, user.result.dirs_deleted) == (2, 1)
        assert user.result.bytes_removed == 100
        assert system.result.files_deleted == 1
        assert list(temp_env.iterdir()) == []
        assert temp_env.is_dir()

    def test_freed_is_sum_of_targets(
        self, temp_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        readings = iter([1000, 1500, 2000, 1900])
        monkeypatch.setattr(temp_files, "free_space", lambda path: next(readings))

        outcome = temp_files.run(AppConfig())

        assert [t.freed for t in outcome.targets] == [500, 0]
        assert outcome.freed_bytes == 500

    def test_missing_target_is_empty_result(self, temp_env: Path, tmp_path: Path) -> None:
        config = AppConfig(
            include_system_temp=False,
            extra_targets=[str(tmp_path / "not-there")],
        )

        outcome = temp_files.run(config)

        assert outcome.targets[1].result.items_deleted == 0
        assert outcome.targets[1].result.errors == 0


class TestRecycleBin:
    """Tests for the recycle_bin rule."""

    def test_disabled(self) -> None:
        outcome = recycle_bin.run(AppConfig(empty_recycle_bin=False))

        assert outcome.skipped == "disabled"
        assert outcome.error is None

    def test_skipped_off_windows(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(recycle_bin, "is_windows", lambda: False)

        outcome = recycle_bin.run(AppConfig())

        assert outcome.skipped == "not supported on this platform"

    @pytest.mark.parametrize("hresult", [0, recycle_bin.E_UNEXPECTED])
    def test_empty_succeeds(self, monkeypatch: pytest.MonkeyPatch, hresult: int) -> None:
        readings = iter([10_000, 25_000])
        monkeypatch.setattr(recycle_bin, "is_windows", lambda: True)
        monkeypatch.setattr(recycle_bin, "free_space", lambda path: next(readings))
        monkeypatch.setattr(recycle_bin, "empty_recycle_bin", lambda: hresult)

        outcome = recycle_bin.run(AppConfig())

        assert outcome.error is None
        assert outcome.skipped is None
        assert outcome.freed_bytes == 15_000

    def test_failure_hresult_recorded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(recycle_bin, "is_windows", lambda: True)
        monkeypatch.setattr(recycle_bin, "free_space", lambda path: 0)
        monkeypatch.setattr(recycle_bin, "empty_recycle_bin", lambda: 0x80004005)

        outcome = recycle_bin.run(AppConfig())

        assert outcome.error == "SHEmptyRecycleBinW failed with HRESULT 0x80004005"
