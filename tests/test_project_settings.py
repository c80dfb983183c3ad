"""Tests for plugin path resolution."""
from pathlib import Path as _TestPath
import os
import sys

import pytest

ROOT = _TestPath(__file__).resolve().parents[1]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from packer_sdk_migrator.constants import DEFAULT_SDK_VERSION
from packer_sdk_migrator.errors import NotFoundError
from packer_sdk_migrator.project_settings import ProjectSettings, resolve_plugin_path, search_roots

PLUGIN = os.path.join("github.com", "example", "packer-plugin-foo")


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    cwd = tmp_path / 'cwd'
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.delenv("GOPATH", raising=False)
    monkeypatch.delenv("PACKER_SDK_MIGRATOR_SEARCH_PATH", raising=False)
    return tmp_path


def test_search_roots_order(workdir, monkeypatch):
    monkeypatch.setenv("GOPATH", os.pathsep.join([str(workdir / 'go1'), str(workdir / 'go2')]))
    monkeypatch.setenv("PACKER_SDK_MIGRATOR_SEARCH_PATH", str(workdir / 'extra'))

    assert search_roots() == [
        os.getcwd(),
        str(workdir / 'go1' / 'src'),
        str(workdir / 'go2' / 'src'),
        str(workdir / 'extra'),
    ]


def test_resolves_in_gopath(workdir, monkeypatch):
    plugin = workdir / 'go' / 'src' / PLUGIN
    plugin.mkdir(parents=True)
    monkeypatch.setenv("GOPATH", str(workdir / 'go'))

    assert resolve_plugin_path(PLUGIN) == str(plugin)


def test_working_directory_wins(workdir, monkeypatch):
    local = workdir / 'cwd' / PLUGIN
    local.mkdir(parents=True)
    (workdir / 'go' / 'src' / PLUGIN).mkdir(parents=True)
    monkeypatch.setenv("GOPATH", str(workdir / 'go'))

    assert resolve_plugin_path(PLUGIN) == os.path.abspath(PLUGIN)


def test_resolves_in_search_path(workdir, monkeypatch):
    plugin = workdir / 'extra' / PLUGIN
    plugin.mkdir(parents=True)
    monkeypatch.setenv("PACKER_SDK_MIGRATOR_SEARCH_PATH", str(workdir / 'extra'))

    assert resolve_plugin_path(PLUGIN) == str(plugin)


def test_file_is_not_a_plugin(workdir):
    (workdir / 'cwd' / 'go.mod').write_text("module example.com/p\n")

    with pytest.raises(NotFoundError, match="is not a directory"):
        resolve_plugin_path("go.mod")


def test_missing_plugin(workdir):
    with pytest.raises(NotFoundError, match="Could not find"):
        resolve_plugin_path(PLUGIN)


def test_settings_default_to_working_directory(workdir):
    settings = ProjectSettings.for_plugin(None, dry_run=True)

    assert settings.plugin_path == os.getcwd()
    assert settings.repo_name == ""
    assert settings.sdk_version == DEFAULT_SDK_VERSION
    assert settings.dry_run
    assert settings.display_name == "cwd"


def test_settings_for_named_plugin(workdir):
    (workdir / 'cwd' / PLUGIN).mkdir(parents=True)

    settings = ProjectSettings.for_plugin(PLUGIN)

    assert settings.repo_name == PLUGIN
    assert settings.display_name == PLUGIN
