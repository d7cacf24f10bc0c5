import os
import sys
from pathlib import Path

from geno.localappdata import local_app_data_dir


def _linux(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.delenv("XDG_DATA_DIRS", raising=False)


def test_xdg_data_home(tmp_path, monkeypatch):
    _linux(monkeypatch)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    result = local_app_data_dir()
    assert result == tmp_path / "geno"
    assert result.is_dir()


def test_existing_directory_is_reused(tmp_path, monkeypatch):
    _linux(monkeypatch)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    first = local_app_data_dir()
    assert local_app_data_dir() == first


def test_xdg_data_dirs_first_entry(tmp_path, monkeypatch):
    _linux(monkeypatch)
    first = tmp_path / "first"
    first.mkdir()
    monkeypatch.setenv("XDG_DATA_DIRS", f"{first}{os.pathsep if False else ':'}{tmp_path / 'second'}")
    result = local_app_data_dir()
    assert result == first / "geno"
    assert not (tmp_path / "second").exists()


def test_no_location_on_linux(monkeypatch):
    _linux(monkeypatch)
    assert local_app_data_dir() is None


def test_windows_local_app_data(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
    result = local_app_data_dir()
    assert result == Path(os.path.normpath(tmp_path / "Geno"))
    assert result.is_dir()


def test_other_platform_has_none(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert local_app_data_dir() is None
    assert not (tmp_path / "geno").exists()