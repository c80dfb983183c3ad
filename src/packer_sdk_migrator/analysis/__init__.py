"""
Read-only analysis of a plugin module: its import graph and its use of
deprecated SDK identifiers.
"""

from .deprecations import BUILTIN_RULES, DeprecationRule, load_rules, registry
from .import_graph import (
    GoListPackageLister,
    ImportGraph,
    PackageLister,
    PackageRecord,
    build_import_graph,
    decode_json_stream,
)
from .scanner import DeprecatedIdentifierScanner, Offence, find_removed_packages

__all__ = [
    "BUILTIN_RULES",
    "DeprecatedIdentifierScanner",
    "DeprecationRule",
    "GoListPackageLister",
    "ImportGraph",
    "Offence",
    "PackageLister",
    "PackageRecord",
    "build_import_graph",
    "decode_json_stream",
    "find_removed_packages",
    "load_rules",
    "registry",
]
