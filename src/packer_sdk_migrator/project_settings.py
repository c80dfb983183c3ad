"""
Project Settings Management

Resolves which plugin directory a command works on and carries the options
of one check or migrate run.
"""
import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from .constants import DEFAULT_SDK_VERSION, GOPATH_ENV, SEARCH_PATH_ENV
from .errors import NotFoundError

logger = logging.getLogger(__name__)


def search_roots() -> List[str]:
    """
    Directories a bare plugin name is resolved against, in order.

    The current directory comes first, then ``src`` of every GOPATH entry,
    then the extra roots listed in PACKER_SDK_MIGRATOR_SEARCH_PATH.
    """
    gopath = os.getenv(GOPATH_ENV, "")
    if not gopath:
        logger.debug("GOPATH is empty")

    roots = [os.getcwd()]
    roots.extend(os.path.join(entry, "src") for entry in gopath.split(os.pathsep) if entry)
    extra = os.getenv(SEARCH_PATH_ENV, "")
    roots.extend(entry for entry in extra.split(os.pathsep) if entry)
    return roots


def resolve_plugin_path(plugin_name: str) -> str:
    """
    Find the directory of a plugin given by name, e.g.
    ``github.com/my-org/packer-plugin-foo``.

    Args:
        plugin_name: Module name or path

    Returns:
        Absolute path of the first matching directory

    Raises:
        NotFoundError: If nothing matches, or the first match is not a directory
    """
    roots = search_roots()
    for root in roots:
        full_path = os.path.join(root, plugin_name)
        if not os.path.exists(full_path):
            continue
        if not os.path.isdir(full_path):
            raise NotFoundError(f"{full_path} is not a directory")
        return os.path.abspath(full_path)

    raise NotFoundError(
        f"Could not find {plugin_name} in working directory or search path: "
        f"{os.pathsep.join(roots[1:]) or '(none)'}"
    )


@dataclass
class ProjectSettings:
    """Options of one run against one plugin."""

    plugin_path: str
    repo_name: str = ""
    sdk_version: str = DEFAULT_SDK_VERSION
    force: bool = False
    strict: bool = False
    dry_run: bool = False
    deprecations_file: Optional[str] = None

    @classmethod
    def for_plugin(cls, plugin_name: Optional[str] = None, **options) -> "ProjectSettings":
        """Settings for a named plugin, or the current directory when no name is given."""
        if plugin_name:
            return cls(plugin_path=resolve_plugin_path(plugin_name), repo_name=plugin_name, **options)
        return cls(plugin_path=os.getcwd(), **options)

    @property
    def display_name(self) -> str:
        return self.repo_name or os.path.basename(os.path.normpath(self.plugin_path))
