"""Tests for the import path classifier and its mapping tables."""
from pathlib import Path as _TestPath
import sys

import pytest

ROOT = _TestPath(__file__).resolve().parents[2]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from packer_sdk_migrator.errors import MappingTableError
from packer_sdk_migrator.mapping import (
    UNCHANGED,
    ImportPathClassifier,
    MappingTables,
    OneToOne,
    Rename,
    Split,
    default_alias,
    default_classifier,
)

SDK = "github.com/hashicorp/packer-plugin-sdk"


class TestDefaultAlias:
    """Package names derived from import paths."""

    def test_last_path_element(self):
        assert default_alias("github.com/hashicorp/packer-plugin-sdk/multistep/commonsteps") == "commonsteps"

    def test_single_element(self):
        assert default_alias("fmt") == "fmt"


class TestBundledTables:
    """Classification against the tables shipped with the migrator."""

    def test_one_to_one(self):
        disposition = default_classifier().classify("github.com/hashicorp/packer/helper/multistep")
        assert disposition == OneToOne(f"{SDK}/multistep")

    def test_moved_under_new_parent(self):
        disposition = default_classifier().classify("github.com/hashicorp/packer/helper/config")
        assert disposition == OneToOne(f"{SDK}/template/config")

    def test_shell_local_points_at_package(self):
        disposition = default_classifier().classify("github.com/hashicorp/packer/common/shell-local")
        assert disposition == OneToOne(f"{SDK}/shell-local")

    def test_rename(self):
        disposition = default_classifier().classify("github.com/hashicorp/packer/provisioner")
        assert isinstance(disposition, Rename)
        assert disposition.new_alias == "guestexec"

    def test_split_routes_identifiers(self):
        disposition = default_classifier().classify("github.com/hashicorp/packer/common")
        assert isinstance(disposition, Split)
        assert disposition.destination("StepCreateCD") == f"{SDK}/multistep/commonsteps"
        assert disposition.destination("PackerConfig") == f"{SDK}/common"
        assert disposition.destination("NotThere") is None
        assert disposition.new_paths == [f"{SDK}/common", f"{SDK}/multistep/commonsteps"]

    def test_unrelated_path_unchanged(self):
        assert default_classifier().classify("github.com/aws/aws-sdk-go/aws") is UNCHANGED
        assert not default_classifier().is_migratable("fmt")

    def test_removed_core_package_is_not_migratable(self):
        assert not default_classifier().is_migratable("github.com/hashicorp/packer/command")

    def test_tables_are_read_only(self):
        tables = default_classifier().tables
        with pytest.raises(TypeError):
            tables.one_to_one["github.com/hashicorp/packer/x"] = "y"

    def test_every_old_path_classifies(self):
        classifier = default_classifier()
        for path in classifier.tables.old_paths():
            assert classifier.is_migratable(path)


class TestMappingTableValidation:
    """Inconsistent tables are rejected when loaded."""

    def test_overlapping_tables(self):
        with pytest.raises(MappingTableError, match="one-to-one and rename"):
            MappingTables({"a/b": "c/b"}, {"a/b": "c/d"}, {})

    def test_identifier_claimed_twice(self):
        split = {"old/pkg": {"new/one": ["Thing"], "new/two": ["Thing"]}}
        with pytest.raises(MappingTableError, match="Thing"):
            MappingTables({}, {}, split)

    def test_custom_tables(self):
        classifier = ImportPathClassifier(MappingTables(
            {"old/same": "new/same"},
            {"old/named": "new/renamed"},
            {"old/split": {"new/left": ["L"], "new/right": ["R"]}},
        ))
        assert classifier.classify("old/same").kind == "one_to_one"
        assert classifier.classify("old/named").kind == "rename"
        assert classifier.classify("old/split").destination("R") == "new/right"
        assert classifier.classify("old/other").kind == "unchanged"
