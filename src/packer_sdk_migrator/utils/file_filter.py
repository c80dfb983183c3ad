"""
Centralized file filtering for the migrator.

Decides which directories the migrate walk descends into and which files it
rewrites. Vendored dependencies are skipped by directory name so copies of
third-party code are never rewritten.
"""

import fnmatch
import os
from pathlib import Path
from typing import Iterator, List, Optional

from ..constants import FILTER_CONFIG


class FileFilter:
    """Centralized file filtering logic."""

    def __init__(self, additional_excludes: Optional[List[str]] = None):
        """
        Initialize the file filter.

        Args:
            additional_excludes: Additional directory names to exclude
        """
        self.exclude_dirs = set(FILTER_CONFIG["exclude_directories"])
        self.exclude_files = set(FILTER_CONFIG["exclude_files"])
        self.supported_extensions = set(FILTER_CONFIG["supported_extensions"])

        if additional_excludes:
            self.exclude_dirs.update(additional_excludes)

    def should_exclude_directory(self, dir_name: str) -> bool:
        """
        Check if a directory should be skipped.

        The go tool ignores directories starting with "." or "_", so do we.
        """
        if dir_name.startswith(('.', '_')):
            return True
        return dir_name in self.exclude_dirs

    def should_exclude_file(self, file_path: Path) -> bool:
        if file_path.suffix not in self.supported_extensions:
            return True
        if file_path.name.startswith(('.', '_')):
            return True
        for pattern in self.exclude_files:
            if fnmatch.fnmatch(file_path.name, pattern):
                return True
        return False

    def iter_source_files(self, base_path: str) -> Iterator[Path]:
        """
        Yield every Go source file under base_path, in a stable order.

        Args:
            base_path: Root directory of the plugin
        """
        for root, dirs, files in os.walk(base_path):
            dirs[:] = sorted(d for d in dirs if not self.should_exclude_directory(d))
            for name in sorted(files):
                path = Path(root) / name
                if not self.should_exclude_file(path):
                    yield path
