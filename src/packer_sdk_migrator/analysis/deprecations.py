"""
Registry of identifiers the plugin SDK no longer provides.

Rules are immutable and loaded once per process: the built-in registry plus
any rules from the JSON file named by PACKER_SDK_MIGRATOR_DEPRECATIONS.
A rules file is a list of objects::

    [{"import_path": "github.com/hashicorp/packer/packer",
      "identifier": "SomeFunc",
      "message": "Use OtherFunc instead"}]
"""

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple, Union

from ..constants import DEPRECATIONS_ENV
from ..errors import MigratorError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeprecationRule:
    """A banned identifier of one import path."""

    import_path: str
    identifier: str
    message: str = ""


# Every identifier the split and rename tables cover has a home in the SDK,
# so nothing is banned out of the box; plugins add rules through a file.
BUILTIN_RULES: Tuple[DeprecationRule, ...] = ()


def load_rules(file_path: Union[str, Path]) -> Tuple[DeprecationRule, ...]:
    """
    Load deprecation rules from a JSON file.

    Raises:
        NotFoundError: If the file does not exist
        MigratorError: If the file is not a list of rule objects
    """
    path = Path(file_path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except FileNotFoundError:
        raise NotFoundError(f"deprecation rules file not found: {path}")
    except json.JSONDecodeError as e:
        raise MigratorError(f"invalid deprecation rules file {path}: {e}")

    if not isinstance(data, list):
        raise MigratorError(f"invalid deprecation rules file {path}: expected a list")

    rules = []
    for entry in data:
        try:
            rules.append(DeprecationRule(
                import_path=entry["import_path"],
                identifier=entry["identifier"],
                message=entry.get("message", ""),
            ))
        except (KeyError, TypeError, AttributeError):
            raise MigratorError(f"invalid deprecation rule in {path}: {entry!r}")
    logger.debug(f"Loaded {len(rules)} deprecation rules from {path}")
    return tuple(rules)


@lru_cache(maxsize=None)
def registry(rules_file: Optional[str] = None) -> Tuple[DeprecationRule, ...]:
    """Built-in rules plus those from rules_file (or the environment)."""
    rules_file = rules_file or os.getenv(DEPRECATIONS_ENV)
    if not rules_file:
        return BUILTIN_RULES
    return BUILTIN_RULES + load_rules(rules_file)
