"""Go source parsing."""

from .go_parser import (
    BLANK_IMPORT,
    DOT_IMPORT,
    Comment,
    GoSourceParser,
    ImportDeclaration,
    ImportSpec,
    ParsedGoFile,
    Position,
    QualifiedReference,
)

__all__ = [
    "BLANK_IMPORT",
    "DOT_IMPORT",
    "Comment",
    "GoSourceParser",
    "ImportDeclaration",
    "ImportSpec",
    "ParsedGoFile",
    "Position",
    "QualifiedReference",
]
