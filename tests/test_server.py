"""Tests for the MCP tool functions."""
from pathlib import Path as _TestPath
import json
import sys

ROOT = _TestPath(__file__).resolve().parents[1]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from packer_sdk_migrator import server


def test_classify_one_to_one():
    response = server.classify_import("github.com/hashicorp/packer/helper/multistep")
    assert response == {
        "import_path": "github.com/hashicorp/packer/helper/multistep",
        "kind": "one_to_one",
        "new_path": "github.com/hashicorp/packer-plugin-sdk/multistep",
    }


def test_classify_rename():
    response = server.classify_import("github.com/hashicorp/packer/provisioner")
    assert response["kind"] == "rename"
    assert response["new_alias"] == "guestexec"


def test_classify_split():
    response = server.classify_import("github.com/hashicorp/packer/common")
    assert response["kind"] == "split"
    assert "github.com/hashicorp/packer-plugin-sdk/multistep/commonsteps" in response["new_paths"]


def test_classify_unrelated():
    assert server.classify_import("fmt")["kind"] == "unchanged"


def test_config_resource():
    config = json.loads(server.get_config())
    assert config["new_module"] == "github.com/hashicorp/packer-plugin-sdk"
    assert "github.com/hashicorp/packer/common" in config["split"]


def test_check_missing_plugin(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GOPATH", raising=False)
    monkeypatch.delenv("PACKER_SDK_MIGRATOR_SEARCH_PATH", raising=False)

    response = server.check_plugin("github.com/example/missing")

    assert response["error"].startswith("Operation failed: Could not find github.com/example/missing")
