"""
Import path classifier.

This module turns the static mapping tables into an immutable, validated
lookup and answers one question per import path: how should it be rewritten?
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Union

from ..errors import MappingTableError
from . import tables

logger = logging.getLogger(__name__)


def default_alias(import_path: str) -> str:
    """Return the name a package is referenced by when imported without an alias."""
    return import_path.rstrip('/').split('/')[-1]


@dataclass(frozen=True)
class Unchanged:
    """The import path is not affected by the migration."""

    kind = "unchanged"


@dataclass(frozen=True)
class OneToOne:
    """The package moved; only the import path changes."""

    new_path: str
    kind = "one_to_one"


@dataclass(frozen=True)
class Rename:
    """The package moved and its name changed."""

    new_path: str
    kind = "rename"

    @property
    def new_alias(self) -> str:
        return default_alias(self.new_path)


@dataclass(frozen=True)
class Split:
    """The package was split; each identifier moved to one of several packages."""

    targets: Mapping[str, str] = field(default_factory=dict)  # identifier -> new path
    kind = "split"

    def destination(self, identifier: str) -> Optional[str]:
        return self.targets.get(identifier)

    @property
    def new_paths(self) -> List[str]:
        return sorted(set(self.targets.values()))


Disposition = Union[Unchanged, OneToOne, Rename, Split]

UNCHANGED = Unchanged()


class MappingTables:
    """
    Validated, read-only view over the three mapping tables.

    The tables must be pairwise disjoint over old import paths, and within a
    split no identifier may be claimed by two destination packages.
    """

    def __init__(
        self,
        one_to_one: Mapping[str, str],
        rename: Mapping[str, str],
        split: Mapping[str, Mapping[str, Iterable[str]]],
    ):
        self._check_disjoint(one_to_one, rename, split)

        self.one_to_one: Mapping[str, str] = MappingProxyType(dict(one_to_one))
        self.rename: Mapping[str, str] = MappingProxyType(dict(rename))

        # Invert {new path: [identifiers]} into {identifier: new path} so a
        # reference can be routed by its selector name.
        inverted: Dict[str, Mapping[str, str]] = {}
        for old_path, destinations in split.items():
            targets: Dict[str, str] = {}
            for new_path, identifiers in destinations.items():
                for identifier in identifiers:
                    claimed = targets.get(identifier)
                    if claimed is not None and claimed != new_path:
                        raise MappingTableError(
                            f"{old_path}: identifier {identifier} is mapped to both "
                            f"{claimed} and {new_path}"
                        )
                    targets[identifier] = new_path
            inverted[old_path] = MappingProxyType(targets)
        self.split: Mapping[str, Mapping[str, str]] = MappingProxyType(inverted)

    @staticmethod
    def _check_disjoint(one_to_one, rename, split) -> None:
        named = {
            "one-to-one": set(one_to_one),
            "rename": set(rename),
            "split": set(split),
        }
        names = list(named)
        for i, first in enumerate(names):
            for second in names[i + 1:]:
                overlap = named[first] & named[second]
                if overlap:
                    raise MappingTableError(
                        f"import paths appear in both the {first} and {second} tables: "
                        f"{', '.join(sorted(overlap))}"
                    )

    def old_paths(self) -> List[str]:
        """Every import path the tables know how to migrate."""
        return sorted(set(self.one_to_one) | set(self.rename) | set(self.split))


class ImportPathClassifier:
    """Classify import paths against the mapping tables."""

    def __init__(self, tables: MappingTables):
        self.tables = tables

    def classify(self, import_path: str) -> Disposition:
        """
        Classify one import path.

        Lookup order is one-to-one, then rename, then split; the first match
        wins and no match means the path is left alone.

        Args:
            import_path: Import path as written in the Go source

        Returns:
            One of Unchanged, OneToOne, Rename or Split
        """
        new_path = self.tables.one_to_one.get(import_path)
        if new_path is not None:
            return OneToOne(new_path)

        new_path = self.tables.rename.get(import_path)
        if new_path is not None:
            return Rename(new_path)

        targets = self.tables.split.get(import_path)
        if targets is not None:
            return Split(targets)

        return UNCHANGED

    def is_migratable(self, import_path: str) -> bool:
        return not isinstance(self.classify(import_path), Unchanged)


@lru_cache(maxsize=1)
def default_classifier() -> ImportPathClassifier:
    """Classifier over the bundled Packer core to SDK tables, built once per process."""
    mapping = MappingTables(
        tables.ONE_TO_ONE_REPLACEMENTS,
        tables.PACKAGE_RENAME,
        tables.PACKAGE_SPLIT,
    )
    logger.debug(f"Loaded mapping tables covering {len(mapping.old_paths())} import paths")
    return ImportPathClassifier(mapping)
