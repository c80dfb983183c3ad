"""Go source parser built on tree-sitter.

Extracts the two things the migrator cares about from a Go file: its import
declarations and every qualified reference (``alias.Name``) made through an
imported package.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

import tree_sitter
from tree_sitter_go import language as go_language

from ..errors import GoSyntaxError, NotFoundError
from ..mapping import default_alias

logger = logging.getLogger(__name__)

# Import names with special meaning: blank imports carry no references and
# dot imports bring names in unqualified.
BLANK_IMPORT = "_"
DOT_IMPORT = "."


@dataclass(frozen=True)
class Position:
    """1-based source position, printed the way the Go toolchain prints it."""

    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class Comment:
    """A comment inside an import declaration."""

    text: str
    start_byte: int
    end_byte: int
    start_row: int
    end_row: int


@dataclass
class ImportSpec:
    """One imported package, as written in an import declaration."""

    path: str
    name: Optional[str] = None  # explicit alias, "_" or "."
    start_byte: int = 0
    end_byte: int = 0
    start_row: int = 0
    end_row: int = 0
    path_literal: Optional[str] = None

    @property
    def effective_alias(self) -> str:
        return self.name if self.name else default_alias(self.path)

    @property
    def has_explicit_alias(self) -> bool:
        return bool(self.name) and self.name not in (BLANK_IMPORT, DOT_IMPORT)


@dataclass
class ImportDeclaration:
    """An ``import`` declaration, either a single spec or a parenthesized list."""

    start_byte: int
    end_byte: int
    start_row: int
    end_row: int
    parenthesized: bool
    entries: List[Union[ImportSpec, Comment]] = field(default_factory=list)

    @property
    def specs(self) -> List[ImportSpec]:
        return [entry for entry in self.entries if isinstance(entry, ImportSpec)]


@dataclass(frozen=True)
class QualifiedReference:
    """An identifier used through a package alias, e.g. ``common.StepCreateCD``."""

    alias: str
    identifier: str
    alias_start: int
    alias_end: int
    position: Position


class ParsedGoFile:
    """A parsed Go source file and the views the migrator needs over it."""

    def __init__(self, filename: str, source: bytes, tree: tree_sitter.Tree):
        self.filename = filename
        self.source = source
        self.tree = tree
        self._declarations: Optional[List[ImportDeclaration]] = None
        self._references: Optional[List[QualifiedReference]] = None

    @property
    def import_declarations(self) -> List[ImportDeclaration]:
        if self._declarations is None:
            self._declarations = [
                self._build_declaration(node)
                for node in self.tree.root_node.named_children
                if node.type == 'import_declaration'
            ]
        return self._declarations

    @property
    def imports(self) -> List[ImportSpec]:
        return [spec for decl in self.import_declarations for spec in decl.specs]

    def qualified_references(self) -> List[QualifiedReference]:
        """All ``x.Name`` selectors and qualified types whose left side is a bare identifier."""
        if self._references is None:
            references = []
            for node in _walk(self.tree.root_node):
                if node.type == 'selector_expression':
                    operand = node.child_by_field_name('operand')
                    selected = node.child_by_field_name('field')
                elif node.type == 'qualified_type':
                    operand = node.child_by_field_name('package')
                    selected = node.child_by_field_name('name')
                else:
                    continue
                if operand is None or selected is None:
                    continue
                if operand.type not in ('identifier', 'package_identifier'):
                    continue
                references.append(QualifiedReference(
                    alias=_text(operand),
                    identifier=_text(selected),
                    alias_start=operand.start_byte,
                    alias_end=operand.end_byte,
                    position=self.position_of(node),
                ))
            self._references = references
        return self._references

    def references_to(self, import_path: str) -> List[QualifiedReference]:
        """
        Qualified references made through the given import path.

        Args:
            import_path: Import path to resolve aliases for

        Returns:
            References whose alias is the one this file imports the path under;
            empty when the file does not import the path.
        """
        aliases = {
            spec.effective_alias
            for spec in self.imports
            if spec.path == import_path and spec.name not in (BLANK_IMPORT, DOT_IMPORT)
        }
        if not aliases:
            return []
        return [ref for ref in self.qualified_references() if ref.alias in aliases]

    def position_of(self, node: tree_sitter.Node) -> Position:
        row, column = node.start_point
        return Position(self.filename, row + 1, column + 1)

    def _build_declaration(self, node: tree_sitter.Node) -> ImportDeclaration:
        spec_list = None
        for child in node.named_children:
            if child.type == 'import_spec_list':
                spec_list = child
                break

        decl = ImportDeclaration(
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            start_row=node.start_point[0],
            end_row=node.end_point[0],
            parenthesized=spec_list is not None,
        )
        container = spec_list if spec_list is not None else node
        for child in container.named_children:
            if child.type == 'import_spec':
                decl.entries.append(self._build_spec(child))
            elif child.type == 'comment':
                decl.entries.append(Comment(
                    text=_text(child),
                    start_byte=child.start_byte,
                    end_byte=child.end_byte,
                    start_row=child.start_point[0],
                    end_row=child.end_point[0],
                ))
        return decl

    @staticmethod
    def _build_spec(node: tree_sitter.Node) -> ImportSpec:
        path_node = node.child_by_field_name('path')
        name_node = node.child_by_field_name('name')
        literal = _text(path_node)
        return ImportSpec(
            path=literal[1:-1],
            name=_text(name_node) if name_node is not None else None,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            start_row=node.start_point[0],
            end_row=node.end_point[0],
            path_literal=literal,
        )


class GoSourceParser:
    """Parse Go source with tree-sitter, rejecting files that contain syntax errors."""

    def __init__(self):
        go_lang = tree_sitter.Language(go_language())
        self.parser = tree_sitter.Parser(go_lang)

    def parse(self, source: bytes, filename: str = "<unknown>") -> ParsedGoFile:
        tree = self.parser.parse(source)
        if tree.root_node.has_error:
            error_node = _first_error(tree.root_node)
            if error_node is not None:
                row, column = error_node.start_point
                raise GoSyntaxError(filename, row + 1, column + 1)
            raise GoSyntaxError(filename)
        return ParsedGoFile(filename, source, tree)

    def parse_file(self, file_path: Union[str, Path]) -> ParsedGoFile:
        path = Path(file_path)
        try:
            source = path.read_bytes()
        except FileNotFoundError:
            raise NotFoundError(f"Go source file not found: {path}")
        logger.debug(f"Parsing {path}")
        return self.parse(source, str(path))


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode('utf8')


def _walk(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Pre-order walk without recursion; long expression chains nest deeply."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _first_error(root: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    for node in _walk(root):
        if node.type == 'ERROR' or node.is_missing:
            return node
    return None
