"""Tests for the command line interface."""
from pathlib import Path as _TestPath
import sys

import pytest

ROOT = _TestPath(__file__).resolve().parents[1]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from fakes import FakeLister, FakeToolchain
from packer_sdk_migrator import cli
from packer_sdk_migrator.constants import DEFAULT_SDK_VERSION
from packer_sdk_migrator.errors import EligibilityCheckFailed
from packer_sdk_migrator.services import CheckService, MigrationService


def parse(*argv):
    return cli.build_parser().parse_args(list(argv))


def test_parser_defaults():
    args = parse("migrate")
    assert args.sdk_version == DEFAULT_SDK_VERSION
    assert not (args.force or args.strict or args.dry_run)
    assert args.path is None


def test_check_human_output(plugin_dir, plugin_records, capsys):
    checker = CheckService(toolchain=FakeToolchain(), lister=FakeLister(plugin_records), rules=())

    code = cli.run_check(parse("check", str(plugin_dir)), check_service=checker)

    out = capsys.readouterr().out
    assert code == 0
    assert "Checking Go runtime version ..." in out
    assert "All constraints satisfied." in out


def test_check_csv_output(plugin_dir, plugin_records, capsys):
    checker = CheckService(toolchain=FakeToolchain(), lister=FakeLister(plugin_records), rules=())

    code = cli.run_check(parse("check", "--csv", str(plugin_dir)), check_service=checker)

    out = capsys.readouterr().out
    assert code == 0
    assert out.splitlines()[1] == "1.21.5,true,true,v1.6.6,true,true,true"
    assert "Checking" not in out


def test_check_failure_exit_code(plugin_dir, plugin_records, capsys):
    plugin_records[0].imports.append("github.com/hashicorp/packer/command")
    checker = CheckService(toolchain=FakeToolchain(), lister=FakeLister(plugin_records), rules=())

    code = cli.run_check(parse("check", str(plugin_dir)), check_service=checker)

    err = capsys.readouterr().err
    assert code == 1
    assert "Deprecated SDK packages in use:" in err
    assert "Some constraints not satisfied." in err


def test_check_already_migrated_is_success(tmp_path, capsys):
    (tmp_path / 'go.mod').write_text("module example.com/p\n\nrequire github.com/hashicorp/packer-plugin-sdk v0.0.11\n")
    checker = CheckService(toolchain=FakeToolchain(), lister=FakeLister(), rules=())

    code = cli.run_check(parse("check", str(tmp_path)), check_service=checker)

    assert code == 0
    assert "plugin already migrated to SDK version v0.0.11" in capsys.readouterr().out


def test_migrate_refused_prints_check_messages(plugin_dir, plugin_records, capsys):
    plugin_records[0].imports.append("github.com/hashicorp/packer/command")
    toolchain = FakeToolchain()
    service = MigrationService(
        check_service=CheckService(toolchain=toolchain, lister=FakeLister(plugin_records), rules=()),
        tidier=toolchain,
    )

    with pytest.raises(EligibilityCheckFailed):
        cli.run_migrate(parse("migrate", str(plugin_dir)), migration_service=service)

    assert " * github.com/hashicorp/packer/command" in capsys.readouterr().err


def test_migrate_dry_run(plugin_dir, plugin_records, capsys):
    toolchain = FakeToolchain()
    service = MigrationService(
        check_service=CheckService(toolchain=toolchain, lister=FakeLister(plugin_records), rules=()),
        tidier=toolchain,
    )

    code = cli.run_migrate(parse("migrate", "--dry-run", str(plugin_dir)), migration_service=service)

    assert code == 0
    assert "Dry run: 1 files would be rewritten." in capsys.readouterr().out


def test_unknown_plugin(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GOPATH", raising=False)
    monkeypatch.delenv("PACKER_SDK_MIGRATOR_SEARCH_PATH", raising=False)

    code = cli.main(["check", "github.com/example/missing"])

    assert code == 1
    assert "Error finding plugin github.com/example/missing" in capsys.readouterr().err


def test_main_reports_migrator_errors(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("PACKER_SDK_MIGRATOR_GO", str(tmp_path / "no-such-go"))
    monkeypatch.chdir(tmp_path)

    code = cli.main(["migrate"])

    assert code == 1
    assert "Error:" in capsys.readouterr().err
