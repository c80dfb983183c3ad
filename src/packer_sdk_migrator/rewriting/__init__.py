"""Rewriting of Go import declarations and dependent references."""

from .edits import AddImport, EditPlan, RemoveImport, RenameAlias, ReplacePath, TextEdit, apply_edits
from .import_block import ImportBlockEditor
from .rewriter import ImportRewriter, RewriteResult

__all__ = [
    "AddImport",
    "EditPlan",
    "ImportBlockEditor",
    "ImportRewriter",
    "RemoveImport",
    "RenameAlias",
    "ReplacePath",
    "RewriteResult",
    "TextEdit",
    "apply_edits",
]
