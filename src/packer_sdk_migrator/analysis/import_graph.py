"""
Import graph of a Go module.

The package listing itself comes from an injectable PackageLister; the
default one shells out to ``go list -json``. This module only folds the
listing into an ImportGraph and performs no analysis.
"""

import json
import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Set

from ..constants import GO_BINARY_ENV, VENDOR_DIR
from ..errors import NotFoundError, SubprocessFailure

logger = logging.getLogger(__name__)


@dataclass
class PackageRecord:
    """One package of the module as reported by the package lister."""

    import_path: str
    dir: str
    go_files: List[str] = field(default_factory=list)
    test_go_files: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    test_imports: List[str] = field(default_factory=list)

    @classmethod
    def from_go_list(cls, data: Dict[str, Any]) -> "PackageRecord":
        """Build a record from one ``go list -json`` object.

        External test packages (``package foo_test``) are folded into the
        test lists; for import analysis they are just more test files.
        """
        test_imports = list(data.get("TestImports") or [])
        for path in data.get("XTestImports") or []:
            if path not in test_imports:
                test_imports.append(path)
        return cls(
            import_path=data["ImportPath"],
            dir=data.get("Dir", ""),
            go_files=list(data.get("GoFiles") or []),
            test_go_files=list(data.get("TestGoFiles") or []) + list(data.get("XTestGoFiles") or []),
            imports=list(data.get("Imports") or []),
            test_imports=test_imports,
        )

    def source_files(self) -> List[str]:
        return [os.path.join(self.dir, name) for name in self.go_files]

    def test_source_files(self) -> List[str]:
        return [os.path.join(self.dir, name) for name in self.test_go_files]


@dataclass
class ImportGraph:
    """Every import path referenced by a module, plus its packages by import path."""

    all_import_paths: Set[str] = field(default_factory=set)
    packages: Dict[str, PackageRecord] = field(default_factory=dict)

    def files_importing(self, import_path: str) -> List[str]:
        """
        Source files of every package that imports the given path.

        Regular files are included when the package's regular imports contain
        the path, test files when its test imports do.
        """
        files: List[str] = []
        for record in self.packages.values():
            if import_path in record.imports:
                files.extend(record.source_files())
            if import_path in record.test_imports:
                files.extend(record.test_source_files())
        return files


class PackageLister(Protocol):
    """Lists the packages of a Go module."""

    def list_packages(self, module_root: str, pattern: str = "./...", use_vendor: bool = False) -> List[PackageRecord]:
        ...


class GoListPackageLister:
    """PackageLister backed by ``go list -json``."""

    def __init__(self, go_binary: Optional[str] = None):
        self.go_binary = go_binary or os.getenv(GO_BINARY_ENV, "go")

    def list_packages(self, module_root: str, pattern: str = "./...", use_vendor: bool = False) -> List[PackageRecord]:
        cmd = [self.go_binary, "list", "-json"]
        if use_vendor:
            cmd.append("-mod=vendor")
        cmd.append(pattern)

        logger.debug(f"Executing command {cmd!r} in {module_root}")
        try:
            result = subprocess.run(
                cmd,
                cwd=module_root,
                env=os.environ.copy(),
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise SubprocessFailure(cmd, f"could not run {cmd[0]}: {e}")

        if result.returncode != 0:
            raise SubprocessFailure(cmd, f"{' '.join(cmd)} exited with status {result.returncode}", result.stderr)

        try:
            return [PackageRecord.from_go_list(obj) for obj in decode_json_stream(result.stdout)]
        except (ValueError, KeyError) as e:
            raise SubprocessFailure(cmd, f"could not decode output of {' '.join(cmd)}: {e}", result.stderr)


def decode_json_stream(text: str) -> List[Dict[str, Any]]:
    """Decode concatenated JSON objects, the format ``go list -json`` prints."""
    decoder = json.JSONDecoder()
    objects = []
    index = 0
    length = len(text)
    while True:
        while index < length and text[index].isspace():
            index += 1
        if index >= length:
            break
        obj, index = decoder.raw_decode(text, index)
        objects.append(obj)
    return objects


def build_import_graph(
    module_root: str,
    lister: Optional[PackageLister] = None,
    use_vendor: Optional[bool] = None,
) -> ImportGraph:
    """
    Build the import graph of the module rooted at module_root.

    Args:
        module_root: Directory holding go.mod
        lister: Package lister (defaults to ``go list``)
        use_vendor: List against vendored dependencies; None means "when a
            vendor directory exists"

    Returns:
        ImportGraph of the module

    Raises:
        NotFoundError: If module_root is not a directory
        SubprocessFailure: If the lister fails
    """
    if not Path(module_root).is_dir():
        raise NotFoundError(f"module directory not found: {module_root}")
    if use_vendor is None:
        use_vendor = (Path(module_root) / VENDOR_DIR).is_dir()
    lister = lister or GoListPackageLister()

    graph = ImportGraph()
    for record in lister.list_packages(module_root, "./...", use_vendor):
        graph.all_import_paths.update(record.imports)
        graph.all_import_paths.update(record.test_imports)
        graph.packages[record.import_path] = record

    logger.info(
        f"Found {len(graph.packages)} packages referencing "
        f"{len(graph.all_import_paths)} import paths in {module_root}"
    )
    return graph
