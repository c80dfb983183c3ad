"""
Import path mapping for the Packer core to plugin SDK move.
"""

from .classifier import (
    UNCHANGED,
    Disposition,
    ImportPathClassifier,
    MappingTables,
    OneToOne,
    Rename,
    Split,
    Unchanged,
    default_alias,
    default_classifier,
)

__all__ = [
    "UNCHANGED",
    "Disposition",
    "ImportPathClassifier",
    "MappingTables",
    "OneToOne",
    "Rename",
    "Split",
    "Unchanged",
    "default_alias",
    "default_classifier",
]
