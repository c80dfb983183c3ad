"""
Edit model for the import rewriter.

Rewriting happens in two phases. The collecting phase walks a parsed file and
records what should change in an EditPlan without touching the file. The
applying phase turns the plan into byte-range TextEdits and applies them in
one batch, so nothing that is still being walked is ever modified.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional


@dataclass(frozen=True)
class ReplacePath:
    """Point an existing import spec at a new path."""

    spec_start: int
    old_path: str
    new_path: str
    drop_alias: bool = False


@dataclass(frozen=True)
class RenameAlias:
    """Rewrite the package alias of one qualified reference."""

    start: int
    end: int
    old_alias: str
    new_alias: str


@dataclass(frozen=True)
class AddImport:
    """Import a package that did not exist before the rewrite."""

    path: str
    name: Optional[str]
    anchor_path: str  # the import the new one replaces; it is placed next to it


@dataclass(frozen=True)
class RemoveImport:
    """Drop an import spec that has no remaining references."""

    path: str
    name: Optional[str]


@dataclass
class EditPlan:
    """Edits collected over a whole file.

    Import additions and removals are keyed by path so each distinct path is
    added or removed exactly once, however many references asked for it.
    """

    replacements: List[ReplacePath] = field(default_factory=list)
    renames: Dict[int, RenameAlias] = field(default_factory=dict)
    additions: Dict[str, AddImport] = field(default_factory=dict)
    removals: Dict[str, RemoveImport] = field(default_factory=dict)

    def replace_path(self, spec_start: int, old_path: str, new_path: str, drop_alias: bool = False) -> None:
        self.replacements.append(ReplacePath(spec_start, old_path, new_path, drop_alias))

    def rename_alias(self, start: int, end: int, old_alias: str, new_alias: str) -> None:
        if old_alias != new_alias:
            self.renames.setdefault(start, RenameAlias(start, end, old_alias, new_alias))

    def add_import(self, path: str, name: Optional[str], anchor_path: str) -> None:
        self.additions[path] = AddImport(path, name, anchor_path)

    def remove_import(self, path: str, name: Optional[str]) -> None:
        self.removals[path] = RemoveImport(path, name)


@dataclass(frozen=True)
class TextEdit:
    """Replace source bytes [start, end) with replacement."""

    start: int
    end: int
    replacement: bytes


def apply_edits(source: bytes, edits: Iterable[TextEdit]) -> bytes:
    """
    Apply non-overlapping edits to source in a single pass.

    Args:
        source: Original file content
        edits: Byte-range edits, in any order

    Returns:
        The edited content

    Raises:
        ValueError: If two edits overlap
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    chunks = []
    cursor = 0
    for edit in ordered:
        if edit.start < cursor:
            raise ValueError(f"overlapping edits at byte {edit.start}")
        chunks.append(source[cursor:edit.start])
        chunks.append(edit.replacement)
        cursor = edit.end
    chunks.append(source[cursor:])
    return b"".join(chunks)
