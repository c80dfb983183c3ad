"""
Deprecated identifier scanner.

Cross-references a module's import graph with the deprecation registry and
reports where each banned identifier is used. The scan is read-only.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..constants import PACKER_MODULE_PATH
from ..mapping import ImportPathClassifier, default_classifier
from ..parsing import GoSourceParser, Position
from .deprecations import DeprecationRule
from .import_graph import ImportGraph

logger = logging.getLogger(__name__)


@dataclass
class Offence:
    """Every use of one deprecated identifier across the module."""

    rule: DeprecationRule
    positions: List[Position] = field(default_factory=list)


class DeprecatedIdentifierScanner:
    """
    Find uses of deprecated identifiers.

    Any file that fails to parse aborts the whole scan: a partial list of
    offences would look like a clean bill of health for the files skipped.

    Args:
        rules: Deprecation rules to check, in reporting order
        parser: Go source parser
    """

    def __init__(self, rules: Iterable[DeprecationRule], parser: Optional[GoSourceParser] = None):
        self.rules = tuple(rules)
        self.parser = parser or GoSourceParser()

    def scan(self, graph: ImportGraph) -> List[Offence]:
        """
        Scan every file whose package imports a rule's path.

        Args:
            graph: Import graph of the module

        Returns:
            One Offence per rule with at least one use, in rule order

        Raises:
            GoSyntaxError: If any scanned file cannot be parsed
        """
        offences = []
        for rule in self.rules:
            positions: List[Position] = []
            for file_path in graph.files_importing(rule.import_path):
                parsed = self.parser.parse_file(file_path)
                for ref in parsed.references_to(rule.import_path):
                    if ref.identifier == rule.identifier:
                        positions.append(ref.position)

            if positions:
                logger.debug(f"{rule.import_path}.{rule.identifier} used {len(positions)} times")
                offences.append(Offence(rule, positions))
        return offences


def find_removed_packages(graph: ImportGraph, classifier: Optional[ImportPathClassifier] = None) -> List[str]:
    """
    Packer core packages in use that have no plugin SDK counterpart.

    Args:
        graph: Import graph of the module
        classifier: Import path classifier (defaults to the bundled tables)

    Returns:
        Sorted import paths under the Packer core module that cannot be migrated
    """
    classifier = classifier or default_classifier()
    prefix = PACKER_MODULE_PATH + "/"
    return sorted(
        path for path in graph.all_import_paths
        if path.startswith(prefix) and not classifier.is_migratable(path)
    )
