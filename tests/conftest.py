"""Shared fixtures: plugin trees on disk and their go list records."""
from pathlib import Path as _TestPath
import sys

import pytest

ROOT = _TestPath(__file__).resolve().parents[1]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))
TESTS_PATH = ROOT / 'tests'
if str(TESTS_PATH) not in sys.path:
    sys.path.insert(0, str(TESTS_PATH))

from fakes import GO_MOD
from packer_sdk_migrator.analysis import PackageRecord

FIXTURES = TESTS_PATH / 'fixtures'


@pytest.fixture
def plugin_dir(tmp_path):
    """A plugin module requiring Packer core v1.6.6 with one Go file."""
    (tmp_path / 'go.mod').write_text(GO_MOD.format(packer_version="v1.6.6"))
    builder = tmp_path / 'builder' / 'foo'
    builder.mkdir(parents=True)
    (builder / 'builder.go').write_bytes((FIXTURES / 'sdk_migrate_basic' / 'input.go').read_bytes())
    return tmp_path


@pytest.fixture
def plugin_records(plugin_dir):
    """go list records matching plugin_dir."""
    return [
        PackageRecord(
            import_path="github.com/example/packer-plugin-foo/builder/foo",
            dir=str(plugin_dir / 'builder' / 'foo'),
            go_files=['builder.go'],
            imports=[
                "context",
                "fmt",
                "github.com/hashicorp/packer/common",
                "github.com/hashicorp/packer/helper/multistep",
                "github.com/hashicorp/packer/packer",
                "github.com/hashicorp/packer/provisioner",
            ],
        )
    ]
