"""Tests for import block editing: grouping, sorting, comments and deletion."""
from pathlib import Path as _TestPath
import sys

import pytest

ROOT = _TestPath(__file__).resolve().parents[2]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from packer_sdk_migrator.parsing import GoSourceParser
from packer_sdk_migrator.rewriting import ImportBlockEditor, apply_edits


def edit(source: str, action) -> str:
    parsed = GoSourceParser().parse(source.encode(), "x.go")
    editor = ImportBlockEditor(parsed.source, parsed.import_declarations)
    action(editor, parsed)
    return apply_edits(parsed.source, editor.edits()).decode()


def test_sorted_block_is_left_alone():
    source = 'package x\n\nimport (\n\t"fmt"\n\t"os"\n)\n'
    assert edit(source, lambda editor, parsed: None) == source


def test_groups_sorted_independently_with_trailing_comments():
    source = (
        'package x\n\nimport (\n'
        '\t"os" // for exit\n'
        '\t"fmt"\n'
        '\n'
        '\t"github.com/b/b"\n'
        '\t"github.com/a/a"\n'
        ')\n'
    )
    expected = (
        'package x\n\nimport (\n'
        '\t"fmt"\n'
        '\t"os" // for exit\n'
        '\n'
        '\t"github.com/a/a"\n'
        '\t"github.com/b/b"\n'
        ')\n'
    )
    assert edit(source, lambda editor, parsed: None) == expected


def test_replace_keeps_alias_unless_dropped():
    source = 'package x\n\nimport (\n\tp "old/path"\n)\n'

    def replace(drop):
        def action(editor, parsed):
            editor.replace_path(parsed.imports[0].start_byte, "new/path", drop_alias=drop)
        return action

    assert edit(source, replace(False)) == 'package x\n\nimport (\n\tp "new/path"\n)\n'
    assert edit(source, replace(True)) == 'package x\n\nimport (\n\t"new/path"\n)\n'


def test_added_import_joins_anchor_group():
    source = 'package x\n\nimport (\n\t"fmt"\n\n\t"old/pkg"\n)\n'

    def action(editor, parsed):
        assert editor.add_import("new/alpha", None, "old/pkg")
        editor.remove_import("old/pkg")

    assert edit(source, action) == 'package x\n\nimport (\n\t"fmt"\n\n\t"new/alpha"\n)\n'


def test_duplicate_addition_is_skipped():
    source = 'package x\n\nimport (\n\t"fmt"\n)\n'

    def action(editor, parsed):
        assert not editor.add_import("fmt", None, "fmt")

    assert edit(source, action) == source


def test_single_import_stays_unparenthesized():
    source = 'package x\n\nimport "old/pkg"\n\nvar _ = pkg.X\n'

    def action(editor, parsed):
        editor.add_import("new/pkg", None, "old/pkg")
        editor.remove_import("old/pkg")

    assert edit(source, action) == 'package x\n\nimport "new/pkg"\n\nvar _ = pkg.X\n'


def test_single_import_grows_into_block():
    source = 'package x\n\nimport "old/pkg"\n'

    def action(editor, parsed):
        editor.add_import("new/b", None, "old/pkg")
        editor.add_import("new/a", None, "old/pkg")
        editor.remove_import("old/pkg")

    assert edit(source, action) == 'package x\n\nimport (\n\t"new/a"\n\t"new/b"\n)\n'


def test_emptied_declaration_is_deleted():
    source = 'package x\n\nimport "fmt"\n\nimport "os"\n\nfunc main() {}\n'

    def action(editor, parsed):
        assert editor.remove_import("os")

    assert edit(source, action) == 'package x\n\nimport "fmt"\n\nfunc main() {}\n'


def test_remove_respects_name_and_collapses_block():
    source = 'package x\n\nimport (\n\ta "lib"\n\tb "lib"\n)\n'

    def action(editor, parsed):
        editor.remove_import("lib", "a")

    assert edit(source, action) == 'package x\n\nimport b "lib"\n'


def test_add_without_declaration_fails():
    parsed = GoSourceParser().parse(b"package x\n", "x.go")
    editor = ImportBlockEditor(parsed.source, parsed.import_declarations)
    with pytest.raises(ValueError):
        editor.add_import("fmt", None, "fmt")


def test_crlf_block_is_rendered_with_crlf():
    source = 'package x\r\n\r\nimport (\r\n\t"os" // for exit\r\n\t"fmt"\r\n)\r\n'
    expected = 'package x\r\n\r\nimport (\r\n\t"fmt"\r\n\t"os" // for exit\r\n)\r\n'
    assert edit(source, lambda editor, parsed: None) == expected


def test_crlf_emptied_declaration_is_deleted():
    source = 'package x\r\n\r\nimport "fmt"\r\n\r\nimport "os"\r\n\r\nfunc main() {}\r\n'

    def action(editor, parsed):
        assert editor.remove_import("os")

    assert edit(source, action) == 'package x\r\n\r\nimport "fmt"\r\n\r\nfunc main() {}\r\n'
