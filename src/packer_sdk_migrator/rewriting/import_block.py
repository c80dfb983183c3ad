"""
Import block editing for Go files.

Models each import declaration as groups of specs (groups are separated by a
blank line, as gofmt keeps them), lets the rewriter replace, add and remove
specs, and renders only the declarations that changed. Every group is kept
sorted by import path, like go/ast.SortImports, so an untouched, already
sorted block is never re-rendered.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..parsing import BLANK_IMPORT, DOT_IMPORT, Comment, ImportDeclaration, ImportSpec
from .edits import TextEdit

logger = logging.getLogger(__name__)

INDENT = "\t"


@dataclass
class _Item:
    """A spec together with the comments that travel with it when sorting."""

    path: str
    name: Optional[str]
    literal: str
    leading: List[Comment] = field(default_factory=list)
    trailing: Optional[Comment] = None
    spec_start: Optional[int] = None  # None for specs added by the rewrite

    @classmethod
    def from_spec(cls, spec: ImportSpec) -> "_Item":
        return cls(
            path=spec.path,
            name=spec.name,
            literal=spec.path_literal or _quote(spec.path),
            spec_start=spec.start_byte,
        )

    def sort_key(self):
        return (self.path, self.name or "", self.trailing.text if self.trailing else "")

    def spec_text(self) -> str:
        if self.name:
            return f"{self.name} {self.literal}"
        return self.literal

    def render(self) -> List[str]:
        lines = [f"{INDENT}{_comment_text(comment)}" for comment in self.leading]
        line = f"{INDENT}{self.spec_text()}"
        if self.trailing is not None:
            line = f"{line} {_comment_text(self.trailing)}"
        lines.append(line)
        return lines


class _DeclarationModel:
    """Editable view of one import declaration."""

    def __init__(self, decl: ImportDeclaration):
        self.decl = decl
        self.groups: List[List[_Item]] = []
        self.dangling: List[Comment] = []
        self.changed = False
        self.removed_specs = False
        self._split_into_groups()

    def _split_into_groups(self) -> None:
        current: List[_Item] = []
        pending: List[Comment] = []
        last_row = self.decl.start_row
        last_was_spec = False

        for entry in self.decl.entries:
            if isinstance(entry, Comment) and last_was_spec and entry.start_row == last_row:
                current[-1].trailing = entry
                last_was_spec = False
                continue

            if entry.start_row > last_row + 1 and current:
                self.groups.append(current)
                current = []

            if isinstance(entry, Comment):
                pending.append(entry)
                last_was_spec = False
            else:
                item = _Item.from_spec(entry)
                item.leading = pending
                pending = []
                current.append(item)
                last_was_spec = True
            last_row = entry.end_row

        if current:
            self.groups.append(current)
        self.dangling = pending

    def items(self) -> List[_Item]:
        return [item for group in self.groups for item in group]

    def find(self, spec_start: int) -> Optional[_Item]:
        for item in self.items():
            if item.spec_start == spec_start:
                return item
        return None

    def group_of(self, path: str) -> Optional[List[_Item]]:
        for group in self.groups:
            if any(item.path == path for item in group):
                return group
        return None

    def remove(self, path: str, name: Optional[str]) -> bool:
        removed = False
        for group in self.groups:
            keep = [item for item in group if not _matches(item, path, name)]
            if len(keep) != len(group):
                removed = True
                group[:] = keep
        if removed:
            self.groups = [group for group in self.groups if group]
            self.changed = True
            self.removed_specs = True
        return removed

    def normalize(self) -> None:
        """Sort each group by path and drop exact duplicates."""
        for index, group in enumerate(self.groups):
            ordered = sorted(group, key=_Item.sort_key)
            deduped: List[_Item] = []
            for item in ordered:
                if deduped and deduped[-1].path == item.path and deduped[-1].name == item.name:
                    continue
                deduped.append(item)
            if [id(item) for item in deduped] != [id(item) for item in group]:
                self.changed = True
            self.groups[index] = deduped

    def render(self, newline: str = "\n") -> str:
        items = self.items()
        collapse = (
            len(items) == 1
            and not self.dangling
            and not items[0].leading
            and items[0].trailing is None
            and (not self.decl.parenthesized or self.removed_specs)
        )
        if collapse:
            return f"import {items[0].spec_text()}"

        lines = ["import ("]
        for index, group in enumerate(self.groups):
            if index:
                lines.append("")
            for item in group:
                lines.extend(item.render())
        lines.extend(f"{INDENT}{_comment_text(comment)}" for comment in self.dangling)
        lines.append(")")
        return newline.join(lines)


class ImportBlockEditor:
    """
    Apply import-level edits to a file's import declarations.

    Args:
        source: File content the declarations were parsed from
        declarations: Import declarations of that file, in source order
    """

    def __init__(self, source: bytes, declarations: List[ImportDeclaration]):
        self.source = source
        self.models = [_DeclarationModel(decl) for decl in declarations]
        self.newline = "\r\n" if b"\r\n" in source else "\n"

    def _locate(self, spec_start: int):
        for model in self.models:
            item = model.find(spec_start)
            if item is not None:
                return model, item
        raise KeyError(f"no import spec starts at byte {spec_start}")

    def replace_path(self, spec_start: int, new_path: str, drop_alias: bool = False) -> None:
        model, item = self._locate(spec_start)
        item.path = new_path
        item.literal = _quote(new_path)
        if drop_alias and item.name not in (None, BLANK_IMPORT, DOT_IMPORT):
            item.name = None
        model.changed = True

    def add_import(self, path: str, name: Optional[str], anchor_path: str) -> bool:
        """
        Add an import next to the spec it replaces.

        Returns:
            False if an identical import already exists
        """
        if any(item.path == path and item.name == name
               for model in self.models for item in model.items()):
            logger.debug(f"Import of {path} already present")
            return False

        new_item = _Item(path=path, name=name, literal=_quote(path))
        for model in self.models:
            group = model.group_of(anchor_path)
            if group is not None:
                group.append(new_item)
                model.changed = True
                return True

        if not self.models:
            raise ValueError(f"cannot add import {path}: file has no import declaration")
        model = self.models[-1]
        if model.groups:
            model.groups[-1].append(new_item)
        else:
            model.groups.append([new_item])
        model.changed = True
        return True

    def remove_import(self, path: str, name: Optional[str] = None) -> bool:
        removed = False
        for model in self.models:
            if model.remove(path, name):
                removed = True
        return removed

    def edits(self) -> List[TextEdit]:
        """Byte-range edits for every declaration that changed."""
        edits = []
        for model in self.models:
            model.normalize()
            if not model.changed:
                continue
            decl = model.decl
            if not model.items() and not model.dangling:
                start, end = self._deletion_range(decl.start_byte, decl.end_byte)
                edits.append(TextEdit(start, end, b""))
            else:
                rendered = model.render(self.newline).encode('utf8')
                edits.append(TextEdit(decl.start_byte, decl.end_byte, rendered))
        return edits

    def _deletion_range(self, start: int, end: int):
        """Extend a deleted declaration over its line break and one surplus blank line."""
        source = self.source
        newline = self.newline.encode('utf8')
        width = len(newline)
        if source[end:end + width] == newline:
            end += width
        blank_before = start >= 2 * width and source[start - 2 * width:start] == newline * 2
        blank_after = source[end:end + width] == newline
        if blank_before and blank_after:
            end += width
        return start, end


def _comment_text(comment: Comment) -> str:
    # Line comments of CRLF files carry the carriage return.
    return comment.text.rstrip("\r")


def _matches(item: _Item, path: str, name: Optional[str]) -> bool:
    if item.path != path:
        return False
    return name is None or item.name == name


def _quote(path: str) -> str:
    return f'"{path}"'
