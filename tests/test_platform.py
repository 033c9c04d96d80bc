"""
Tests for platform path resolution and the process context.
"""

from pathlib import Path

import pytest

from epos_opensource.core import context
from epos_opensource.core.platform import Platform


class TestDetect:

    def test_linux_xdg(self, tmp_path: Path):
        p = Platform.detect(
            system="Linux",
            environ={"XDG_DATA_HOME": str(tmp_path / "data"), "XDG_CONFIG_HOME": str(tmp_path / "cfg")},
            home=tmp_path / "home",
        )
        assert p.data_dir == tmp_path / "data" / "epos-opensource"
        assert p.config_path == tmp_path / "cfg" / "epos-opensource.yaml"

    def test_linux_fallbacks(self, tmp_path: Path):
        home = tmp_path / "home"
        p = Platform.detect(system="Linux", environ={}, home=home)
        assert p.data_dir == home / ".local" / "share" / "epos-opensource"
        assert p.config_dir == home / ".config"

    def test_empty_xdg_is_ignored(self, tmp_path: Path):
        home = tmp_path / "home"
        p = Platform.detect(system="Linux", environ={"XDG_DATA_HOME": ""}, home=home)
        assert p.data_dir == home / ".local" / "share" / "epos-opensource"

    def test_darwin(self, tmp_path: Path):
        home = tmp_path / "home"
        p = Platform.detect(system="Darwin", environ={"XDG_DATA_HOME": "/ignored"}, home=home)
        assert p.data_dir == home / "Library" / "Application Support" / "epos-opensource"
        assert p.config_dir == home / ".config"
        assert p.is_darwin

    def test_windows(self, tmp_path: Path):
        appdata = tmp_path / "AppData" / "Roaming"
        p = Platform.detect(system="Windows", environ={"APPDATA": str(appdata)})
        assert p.data_dir == appdata / "epos-opensource"
        assert p.config_dir == appdata
        assert p.is_windows

    def test_windows_without_appdata(self):
        with pytest.raises(RuntimeError, match="APPDATA"):
            Platform.detect(system="Windows", environ={})

    def test_derived_files(self, tmp_path: Path):
        p = Platform(system="Linux", data_dir=tmp_path / "d", config_dir=tmp_path / "c")
        assert p.db_path == tmp_path / "d" / "db.db"
        assert p.log_path == tmp_path / "d" / "log.log"


class TestContext:

    def test_set_and_get(self, tmp_path: Path):
        p = Platform(system="Linux", data_dir=tmp_path, config_dir=tmp_path)
        context.set_platform(p)
        try:
            assert context.get_platform() is p
        finally:
            context.reset_platform()

    def test_detects_on_first_use(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
        monkeypatch.setattr("epos_opensource.core.platform._platform.system", lambda: "Linux")
        context.reset_platform()
        try:
            assert context.get_platform().data_dir == tmp_path / "xdg" / "epos-opensource"
        finally:
            context.reset_platform()
