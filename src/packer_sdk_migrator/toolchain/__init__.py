"""Go toolchain, go.mod and version helpers."""

from .go_tool import DependencyTidier, GoToolchain
from .gomod import GoModFile, Requirement, rewrite_go_mod
from .versions import parse_go_version, satisfies

__all__ = [
    "DependencyTidier",
    "GoModFile",
    "GoToolchain",
    "Requirement",
    "parse_go_version",
    "rewrite_go_mod",
    "satisfies",
]
