"""Tests for go.mod reading and editing."""
from pathlib import Path as _TestPath
import sys

import pytest

ROOT = _TestPath(__file__).resolve().parents[2]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from packer_sdk_migrator.errors import GoModError
from packer_sdk_migrator.toolchain import GoModFile, rewrite_go_mod

BLOCK = """module github.com/example/packer-plugin-foo

go 1.15

require (
	github.com/aws/aws-sdk-go v1.36.0
	github.com/hashicorp/packer v1.6.6
	github.com/zclconf/go-cty v1.7.0 // indirect
)
"""


def test_reads_requirements():
    gomod = GoModFile("go.mod", BLOCK)
    assert gomod.module_path == "github.com/example/packer-plugin-foo"
    assert gomod.version_of("github.com/hashicorp/packer") == "v1.6.6"
    assert gomod.version_of("github.com/hashicorp/packer-plugin-sdk") is None
    indirect = [r.path for r in gomod.requirements() if r.indirect]
    assert indirect == ["github.com/zclconf/go-cty"]


def test_rewrite_in_block(tmp_path):
    (tmp_path / 'go.mod').write_text(BLOCK)

    rewrite_go_mod(tmp_path, "v0.0.11")

    assert (tmp_path / 'go.mod').read_text() == """module github.com/example/packer-plugin-foo

go 1.15

require (
	github.com/aws/aws-sdk-go v1.36.0
	github.com/hashicorp/packer-plugin-sdk v0.0.11
	github.com/zclconf/go-cty v1.7.0 // indirect
)
"""


def test_rewrite_single_line_require(tmp_path):
    (tmp_path / 'go.mod').write_text("module example.com/p\n\ngo 1.15\n\nrequire github.com/hashicorp/packer v1.6.6\n")

    rewrite_go_mod(tmp_path, "v0.0.12")

    assert (tmp_path / 'go.mod').read_text() == (
        "module example.com/p\n\ngo 1.15\n\nrequire github.com/hashicorp/packer-plugin-sdk v0.0.12\n"
    )


def test_existing_sdk_requirement_is_updated(tmp_path):
    (tmp_path / 'go.mod').write_text(
        "module example.com/p\n\nrequire (\n\tgithub.com/hashicorp/packer v1.6.6\n"
        "\tgithub.com/hashicorp/packer-plugin-sdk v0.0.5\n)\n"
    )

    gomod = rewrite_go_mod(tmp_path, "v0.0.11")

    assert gomod.version_of("github.com/hashicorp/packer-plugin-sdk") == "v0.0.11"
    assert gomod.version_of("github.com/hashicorp/packer") is None


def test_dry_run_leaves_file(tmp_path):
    (tmp_path / 'go.mod').write_text(BLOCK)
    gomod = rewrite_go_mod(tmp_path, "v0.0.11", dry_run=True)
    assert "packer-plugin-sdk v0.0.11" in gomod.text()
    assert (tmp_path / 'go.mod').read_text() == BLOCK


def test_missing_go_mod(tmp_path):
    with pytest.raises(GoModError):
        rewrite_go_mod(tmp_path, "v0.0.11")


def test_malformed_require():
    gomod = GoModFile("go.mod", "module x\n\nrequire github.com/hashicorp/packer\n")
    with pytest.raises(GoModError):
        gomod.version_of("github.com/hashicorp/packer")


def test_unterminated_block():
    gomod = GoModFile("go.mod", "module x\n\nrequire (\n\tgithub.com/hashicorp/packer v1.6.6\n")
    with pytest.raises(GoModError):
        list(gomod.requirements())
